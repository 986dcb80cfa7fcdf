"""Shared builders for context engine tests.

Messages get deterministic timestamps (``BASE_TIME`` plus an offset in
seconds) so ordering never depends on wall-clock resolution.
"""
from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Iterable, Optional

from crux_context.base.models import (
    ContextSettings,
    ConversationMessage,
    Session,
    ToolInvocation,
    ToolResult,
)

BASE_TIME = datetime(2024, 1, 1, tzinfo=timezone.utc)


def at(seconds: int) -> datetime:
    return BASE_TIME + timedelta(seconds=seconds)


def msg(role: str, content: Optional[str], tokens: int = 10, t: int = 0, **kwargs: Any) -> ConversationMessage:
    return ConversationMessage(role=role, content=content, tokens=tokens, timestamp=at(t), **kwargs)  # type: ignore[arg-type]


def tool_call(
    tool_id: str,
    name: str = "search",
    params: Optional[Dict[str, Any]] = None,
    tokens: int = 15,
    t: int = 0,
    content: Optional[str] = None,
) -> ConversationMessage:
    return ConversationMessage(
        role="assistant",
        content=content,
        tokens=tokens,
        timestamp=at(t),
        tool_invocation=ToolInvocation(tool_id=tool_id, tool_name=name, parameters=params or {"q": "x"}),
    )


def tool_output(tool_id: str, content: str = "result", tokens: int = 20, t: int = 0) -> ConversationMessage:
    return ConversationMessage(
        role="tool",
        tokens=tokens,
        timestamp=at(t),
        tool_result=ToolResult(tool_id=tool_id, content=content),
    )


def alternating(count: int, tokens: int = 10, start: int = 0, text: str = "message {i}") -> list[ConversationMessage]:
    """``count`` user/assistant messages, one second apart, starting with user."""
    roles = ("user", "assistant")
    return [msg(roles[i % 2], text.format(i=i), tokens=tokens, t=start + i) for i in range(count)]


def make_session(
    messages: Iterable[ConversationMessage] = (),
    provider: str = "anthropic",
    model_id: str = "claude-3-opus-20240229",
    **settings: Any,
) -> Session:
    return Session(
        provider=provider,
        model_id=model_id,
        messages=list(messages),
        context_settings=ContextSettings(**settings),
    )


def assert_true(condition: bool, message: str) -> None:
    """Raise AssertionError with ``message`` if ``condition`` is False."""
    if not condition:
        raise AssertionError(message)


__all__ = [
    "BASE_TIME",
    "at",
    "msg",
    "tool_call",
    "tool_output",
    "alternating",
    "make_session",
    "assert_true",
]
