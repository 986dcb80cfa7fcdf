"""Wire formatting per backend, including tool pairing and system handling."""

from __future__ import annotations

import json

import pytest

from crux_context.base.errors import ConfigurationError, FormatError
from crux_context.translation import (
    AnthropicFormatter,
    MessageTranslator,
    Provider,
    plan_turns,
)
from crux_context.config.defaults import TOOL_INVOCATION_FALLBACK_TEXT

from crux_context.tests.utils import msg, tool_call, tool_output


def _conversation():
    return [
        msg("system", "Be terse.", t=0),
        msg("user", "Find docs", t=1),
        tool_call("t1", name="search", params={"q": "docs"}, t=2, content="Searching now."),
        tool_output("t1", content="3 hits", t=3),
        msg("assistant", "Found 3.", t=4),
    ]


def test_anthropic_hoists_system_and_uses_blocks(translator: MessageTranslator) -> None:
    payload = translator.translate(_conversation(), "anthropic")
    assert payload.system == "Be terse."  # nosec B101
    roles = [m["role"] for m in payload.messages]
    assert roles == ["user", "assistant", "user", "assistant"]  # nosec B101
    blocks = payload.messages[1]["content"]
    assert blocks[0] == {"type": "text", "text": "Searching now."}  # nosec B101
    assert blocks[1] == {"type": "tool_use", "id": "t1", "name": "search", "input": {"q": "docs"}}  # nosec B101
    assert payload.messages[2]["content"] == [{"type": "tool_result", "tool_use_id": "t1", "content": "3 hits"}]  # nosec B101
    assert payload.to_dict()["system"] == "Be terse."  # nosec B101


def test_openai_keeps_system_turn_and_tool_calls(translator: MessageTranslator) -> None:
    payload = translator.translate(_conversation(), Provider.OPENAI)
    assert payload.system is None  # nosec B101
    assert payload.messages[0] == {"role": "system", "content": "Be terse."}  # nosec B101
    call_turn = payload.messages[2]
    assert call_turn["role"] == "assistant"  # nosec B101
    function = call_turn["tool_calls"][0]["function"]
    assert function["name"] == "search"  # nosec B101
    assert json.loads(function["arguments"]) == {"q": "docs"}  # nosec B101
    assert payload.messages[3] == {"role": "tool", "tool_call_id": "t1", "content": "3 hits"}  # nosec B101
    assert "system" not in payload.to_dict()  # nosec B101


def test_grok_renders_tool_exchange_as_text(translator: MessageTranslator) -> None:
    messages = [msg("user", "Find docs", t=1), tool_call("t1", params={"q": "docs"}, t=2), tool_output("t1", "3 hits", t=3)]
    payload = translator.translate(messages, "grok")
    call_text = payload.messages[1]["content"]
    assert call_text.startswith(TOOL_INVOCATION_FALLBACK_TEXT)  # nosec B101
    assert 'Please call search with {"q": "docs"}' in call_text  # nosec B101
    assert payload.messages[2] == {"role": "user", "content": "3 hits"}  # nosec B101


def test_orphans_and_extra_system_messages_are_dropped(translator: MessageTranslator) -> None:
    messages = [
        msg("system", "first", t=0),
        msg("system", "second", t=1),
        tool_call("lonely", t=2),
        tool_output("ghost", t=3),
        msg("user", "hi", t=4),
    ]
    plan = plan_turns(messages)
    assert plan.system is messages[0]  # nosec B101
    assert set(plan.dropped_ids) == {messages[1].id, messages[2].id, messages[3].id}  # nosec B101
    payload = translator.translate(messages, "openai")
    assert payload.messages == [{"role": "system", "content": "first"}, {"role": "user", "content": "hi"}]  # nosec B101


def test_result_stored_before_invocation_is_paired_after_it(translator: MessageTranslator) -> None:
    messages = [tool_output("t9", "late", t=0), tool_call("t9", t=1), msg("user", "next", t=2)]
    payload = translator.translate(messages, "openai")
    assert [m["role"] for m in payload.messages] == ["assistant", "tool", "user"]  # nosec B101


def test_translate_is_pure(translator: MessageTranslator) -> None:
    messages = _conversation()
    snapshot = [m.to_dict() for m in messages]
    first = translator.translate(messages, "anthropic")
    second = translator.translate(messages, "anthropic")
    assert first == second  # nosec B101
    assert [m.to_dict() for m in messages] == snapshot  # nosec B101


def test_unknown_provider_raises_format_error(translator: MessageTranslator) -> None:
    with pytest.raises(FormatError):
        translator.translate([msg("user", "hi")], "mistral")


def test_incomplete_formatter_table_is_rejected() -> None:
    with pytest.raises(ConfigurationError):
        MessageTranslator({Provider.ANTHROPIC: AnthropicFormatter()})


def test_register_formatter_replaces_backend(translator: MessageTranslator) -> None:
    translator.register_formatter("grok", AnthropicFormatter())
    assert isinstance(translator.formatter_for(Provider.GROK), AnthropicFormatter)  # nosec B101
