"""Token counter behaviour; tiktoken is replaced so no encoding file is fetched."""

from __future__ import annotations

import pytest

from crux_context.base.models import ToolInvocation, ToolResult
from crux_context.base.tokens import ApproximateTokenCounter, TiktokenCounter, count_message_tokens
from crux_context.base.tokens import counter as counter_module


class _FakeEncoding:
    def encode(self, text: str) -> list[str]:
        return text.split()


def test_approximate_counter_rounds_up() -> None:
    counter = ApproximateTokenCounter()
    assert counter.count("") == 0  # nosec B101
    assert counter.count("abc") == 1  # nosec B101
    assert counter.count("abcdefghi") == 3  # nosec B101


def test_tiktoken_counter_uses_encoding(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[str] = []

    def fake_get_encoding(name: str) -> _FakeEncoding:
        calls.append(name)
        return _FakeEncoding()

    monkeypatch.setattr(counter_module.tiktoken, "get_encoding", fake_get_encoding)
    counter = TiktokenCounter()
    assert counter.count("one two three") == 3  # nosec B101
    assert counter.count("four five") == 2  # nosec B101
    assert calls == ["cl100k_base"]  # nosec B101


def test_tiktoken_counter_falls_back_when_encoding_unavailable(monkeypatch: pytest.MonkeyPatch) -> None:
    def broken(name: str) -> None:
        raise OSError("offline")

    monkeypatch.setattr(counter_module.tiktoken, "get_encoding", broken)
    counter = TiktokenCounter()
    assert counter.count("x" * 40) == 10  # nosec B101
    assert counter.count("") == 0  # nosec B101


def test_message_tokens_include_tool_payload() -> None:
    counter = ApproximateTokenCounter()
    invocation = ToolInvocation(tool_id="t1", tool_name="search", parameters={"q": "abcd"})
    plain = count_message_tokens(counter, "abcdefgh")
    with_tool = count_message_tokens(counter, "abcdefgh", tool_invocation=invocation)
    assert plain == 2  # nosec B101
    assert with_tool > plain  # nosec B101
    result = count_message_tokens(counter, None, tool_result=ToolResult(tool_id="t1", content="x" * 12))
    assert result == 3  # nosec B101
