"""Common interface of optimization strategies."""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List

from ...base.models import ConversationMessage, Session


class PruningStrategy(ABC):
    """Computes the surviving messages of a session under a token budget.

    Strategies never mutate ``session.messages``; the engine assigns the
    returned list in place. Survivors keep their relative order.
    """

    name: str

    @abstractmethod
    def apply(self, session: Session, target_tokens: int) -> List[ConversationMessage]:
        """Return the messages that survive."""


__all__ = ["PruningStrategy"]
