"""Cost-tier pruning.

Keeps a level-dependent tail of the removable messages plus the preserved
window, optionally re-injects recent questions, and records the saving in
the session's cost ledger. The ledger applies a reporting floor (1 token /
0.001 USD per run) so that it never stands still across runs.
"""
from __future__ import annotations

import math
from datetime import datetime, timezone
from typing import List, Optional

from ...base.logging import LogContext, get_logger, log_event
from ...base.models import ConversationMessage, CostSavingsEntry, CostSavingsLedger, Session
from ...config.defaults import (
    COST_LEVEL_KEEP_FRACTION,
    COST_LEVEL_TARGET_RATIO,
    COST_MAX_REINJECTED_QUESTIONS,
    COST_MIN_COST_SAVED,
    COST_MIN_TARGET_MESSAGES,
    COST_MIN_TOKENS_SAVED,
    COST_PER_1K_TOKENS,
)
from ..preservation import by_timestamp, total_tokens
from .base import PruningStrategy


class CostTierStrategy(PruningStrategy):
    name = "cost-tier"

    def __init__(self, cost_per_1k_tokens: float = COST_PER_1K_TOKENS) -> None:
        self.cost_per_1k_tokens = cost_per_1k_tokens
        self.logger = get_logger("optimization.cost_tier")

    def apply(
        self,
        session: Session,
        target_tokens: int,
        level: Optional[str] = None,
    ) -> List[ConversationMessage]:
        settings = session.context_settings
        level = level or settings.cost_optimization_level
        ordered = by_timestamp(session.messages)
        system = [m for m in ordered if m.role == "system"]
        non_system = [m for m in ordered if m.role != "system"]

        target_count = max(COST_MIN_TARGET_MESSAGES, math.floor(len(non_system) * COST_LEVEL_TARGET_RATIO[level]))
        preserve_count = min(settings.preserve_recent_messages, len(non_system))
        split = len(non_system) - preserve_count
        candidates, recent = non_system[:split], non_system[split:]

        keep_count = math.ceil(len(candidates) * COST_LEVEL_KEEP_FRACTION[level])
        cut = len(candidates) - keep_count
        kept, dropped = candidates[cut:], candidates[:cut]

        reinjected: List[ConversationMessage] = []
        if settings.preserve_questions_in_cost_mode:
            questions = [m for m in dropped if "?" in m.text()]
            reinjected = questions[-COST_MAX_REINJECTED_QUESTIONS:]

        keep_ids = {m.id for m in kept + recent + reinjected}
        if settings.preserve_system_messages:
            keep_ids.update(m.id for m in system)
        survivors = [m for m in session.messages if m.id in keep_ids]

        self._record_savings(session, session.messages, survivors, level, target_count)
        return survivors

    def _record_savings(
        self,
        session: Session,
        before: List[ConversationMessage],
        after: List[ConversationMessage],
        level: str,
        target_count: int,
    ) -> None:
        tokens_before = total_tokens(before)
        tokens_after = total_tokens(after)
        tokens_saved = max(tokens_before - tokens_after, COST_MIN_TOKENS_SAVED)
        cost_saved = max(tokens_saved / 1000 * self.cost_per_1k_tokens, COST_MIN_COST_SAVED)
        entry = CostSavingsEntry(
            timestamp=datetime.now(timezone.utc),
            tokens_saved=tokens_saved,
            cost_saved=cost_saved,
            level=level,
            messages_before=len(before),
            messages_after=len(after),
            target_message_count=target_count,
        )
        if session.cost_savings is None:
            session.cost_savings = CostSavingsLedger()
        session.cost_savings.record(entry, tokens_remaining=tokens_after)
        log_event(
            self.logger,
            "cost_tier.applied",
            LogContext.for_session(session),
            level_name=level,
            messages_before=len(before),
            messages_after=len(after),
            tokens_saved=tokens_saved,
            cost_saved=round(cost_saved, 6),
        )


__all__ = ["CostTierStrategy"]
