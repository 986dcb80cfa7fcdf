"""
Session DTO: one conversation bound to a backend and model.

The session is the unit of mutation for every component. Components receive
it explicitly; nothing here is global.
"""
from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List, Optional

from .context_settings import ContextSettings
from .cost_savings import CostSavingsLedger
from .message import ConversationMessage
from .token_metrics import TokenMetrics


@dataclass(frozen=True)
class ProviderSwitch:
    """A provider/model pair the session used before a switch."""

    provider: str
    model_id: str
    switch_time: datetime


@dataclass
class Session:
    """A conversation and its context management state.

    Attributes:
        provider: Backend the session currently talks to.
        model_id: Model identifier on that backend.
        messages: Stored turns; ordered by timestamp on every read.
        context_settings: Validated settings governing optimization.
        token_metrics: Last metrics computed by the tracker.
        is_context_window_critical: Tracker flag, set at >= 95% usage.
        previous_providers: Grows by one entry per successful switch.
        cost_savings: Present once cost-tier pruning has run.
        id: Session identifier.
        created_at: Creation time.
    """

    provider: str
    model_id: str
    messages: List[ConversationMessage] = field(default_factory=list)
    context_settings: ContextSettings = field(default_factory=ContextSettings)
    token_metrics: Optional[TokenMetrics] = None
    is_context_window_critical: bool = False
    previous_providers: List[ProviderSwitch] = field(default_factory=list)
    cost_savings: Optional[CostSavingsLedger] = None
    id: str = field(default_factory=lambda: uuid.uuid4().hex)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def sorted_messages(self) -> List[ConversationMessage]:
        """Return the messages ordered by timestamp ascending (stable)."""
        return sorted(self.messages, key=lambda m: m.timestamp)

    def total_tokens(self) -> int:
        return sum(m.tokens for m in self.messages)


__all__ = ["Session", "ProviderSwitch"]
