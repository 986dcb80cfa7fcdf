"""Summarizer boundary used by the summarize strategy.

The engine selects a contiguous run of removable messages and splices in
whatever single message the summarizer returns. Producing the summary text
is outside the engine; ``CallableSummarizer`` adapts any ``text -> text``
callable (typically a completion request) to the protocol.
"""
from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Callable, Optional, Protocol, Sequence, runtime_checkable

from ..base.models import ConversationMessage
from ..base.tokens import ApproximateTokenCounter, TokenCounter
from ..config.defaults import SUMMARY_PREFIX


@dataclass(frozen=True)
class SummaryResult:
    """Replacement message plus the token counts used for the ratio check."""

    message: ConversationMessage
    original_tokens: int
    summary_tokens: int

    @property
    def compression_ratio(self) -> float:
        return self.original_tokens / max(self.summary_tokens, 1)


@runtime_checkable
class Summarizer(Protocol):
    def summarize(self, messages: Sequence[ConversationMessage]) -> SummaryResult:
        ...


def render_transcript(messages: Sequence[ConversationMessage]) -> str:
    """Render messages as ``ROLE: text`` blocks for a summarization prompt."""
    lines = []
    for m in messages:
        if m.tool_invocation is not None:
            call = m.tool_invocation
            body = f"{m.text()} [tool call {call.tool_name} {json.dumps(call.parameters, sort_keys=True)}]".strip()
        elif m.tool_result is not None:
            body = f"[tool result] {m.tool_result.content}"
        else:
            body = m.text()
        lines.append(f"{m.role.upper()}: {body}")
    return "\n\n".join(lines)


class CallableSummarizer:
    """Summarize with a plain ``transcript -> summary`` callable.

    The replacement is an assistant message marked ``is_summary`` and
    stamped with the timestamp of the first summarized message, so it sits
    where the run was.
    """

    def __init__(self, summarize_text: Callable[[str], str], counter: Optional[TokenCounter] = None) -> None:
        self.summarize_text = summarize_text
        self.counter = counter or ApproximateTokenCounter()

    def summarize(self, messages: Sequence[ConversationMessage]) -> SummaryResult:
        if not messages:
            raise ValueError("cannot summarize an empty run")
        summary = self.summarize_text(render_transcript(messages)).strip()
        content = f"{SUMMARY_PREFIX}{summary}"
        tokens = self.counter.count(content)
        message = ConversationMessage(
            role="assistant",
            content=content,
            timestamp=messages[0].timestamp,
            tokens=tokens,
            is_summary=True,
        )
        return SummaryResult(
            message=message,
            original_tokens=sum(m.tokens for m in messages),
            summary_tokens=tokens,
        )


__all__ = ["Summarizer", "SummaryResult", "CallableSummarizer", "render_transcript"]
