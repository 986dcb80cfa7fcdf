"""Drop the oldest removable messages until the budget is met."""
from __future__ import annotations

from typing import List, Set

from ...base.models import ConversationMessage, Session
from ..preservation import keep_only, plan_preservation, total_tokens
from .base import PruningStrategy


class OldestFirstStrategy(PruningStrategy):
    name = "oldest-first"

    def apply(self, session: Session, target_tokens: int) -> List[ConversationMessage]:
        plan = plan_preservation(session.messages, session.context_settings)
        remaining = total_tokens(session.messages)
        dropped: Set[str] = set()
        for message in plan.candidates:
            if remaining <= target_tokens:
                break
            dropped.add(message.id)
            remaining -= message.tokens
        return keep_only(session.messages, dropped)


__all__ = ["OldestFirstStrategy"]
