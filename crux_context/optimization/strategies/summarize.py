"""Summarize runs of removable messages.

The strategy only selects runs and splices replacements; the summary
itself comes from the configured :class:`Summarizer`.
"""
from __future__ import annotations

from typing import Dict, List, Sequence, Set

from ...base.logging import LogContext, get_logger, log_event
from ...base.models import ConversationMessage, Session
from ..preservation import plan_preservation, tool_partners, total_tokens
from ..summarizer import Summarizer
from .base import PruningStrategy

MIN_RUN_LENGTH = 2


def _pairs_closed(window: Sequence[ConversationMessage], partners: Dict[str, str]) -> bool:
    ids = {m.id for m in window}
    return all(partners[m.id] in ids for m in window if m.id in partners)


def select_run(
    messages: Sequence[ConversationMessage],
    excluded_ids: Set[str],
    batch_size: int,
    partners: Dict[str, str],
) -> List[ConversationMessage]:
    """Return the oldest contiguous run of removable messages, or ``[]``.

    The run holds between two and ``batch_size`` messages and never
    contains half of a tool pair.
    """
    count = len(messages)
    start = 0
    while start < count:
        if messages[start].id in excluded_ids:
            start += 1
            continue
        end = start
        while end < count and messages[end].id not in excluded_ids and end - start < batch_size:
            end += 1
        window = list(messages[start:end])
        while len(window) >= MIN_RUN_LENGTH and not _pairs_closed(window, partners):
            window.pop()
        if len(window) >= MIN_RUN_LENGTH:
            return window
        start += 1
    return []


class SummarizeStrategy(PruningStrategy):
    name = "summarize"

    def __init__(self, summarizer: Summarizer) -> None:
        self.summarizer = summarizer
        self.logger = get_logger("optimization.summarize")

    def apply(self, session: Session, target_tokens: int) -> List[ConversationMessage]:
        settings = session.context_settings
        messages = list(session.messages)
        plan = plan_preservation(messages, settings)
        excluded = set(plan.preserved_ids)
        excluded.update(m.id for m in messages if m.is_summary)
        partners = tool_partners(messages)

        while total_tokens(messages) > target_tokens:
            run = select_run(messages, excluded, settings.summarization_batch_size, partners)
            if not run:
                break
            excluded.update(m.id for m in run)
            result = self.summarizer.summarize(run)
            if result.compression_ratio < settings.min_compression_ratio:
                log_event(
                    self.logger,
                    "summarize.rejected",
                    LogContext.for_session(session),
                    run_length=len(run),
                    compression_ratio=round(result.compression_ratio, 3),
                )
                continue
            start = messages.index(run[0])
            messages[start:start + len(run)] = [result.message]
            excluded.add(result.message.id)
        return messages


__all__ = ["SummarizeStrategy", "select_run"]
