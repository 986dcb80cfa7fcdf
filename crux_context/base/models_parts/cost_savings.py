"""Cumulative cost-savings ledger maintained by cost-tier pruning."""
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class CostSavingsEntry:
    """A single cost-tier pruning run."""

    timestamp: datetime
    tokens_saved: int
    cost_saved: float
    level: str
    messages_before: int
    messages_after: int
    target_message_count: int


@dataclass
class CostSavingsLedger:
    """Running totals of tokens and money saved by cost-tier pruning.

    ``percent_saved`` relates the total saving to the context size the
    session would have without any pruning.
    """

    tokens_saved: int = 0
    cost_saved: float = 0.0
    currency: str = "USD"
    percent_saved: float = 0.0
    updated_at: Optional[datetime] = None
    history: List[CostSavingsEntry] = field(default_factory=list)

    def record(self, entry: CostSavingsEntry, tokens_remaining: int) -> None:
        """Fold ``entry`` into the totals."""
        self.tokens_saved += entry.tokens_saved
        self.cost_saved += entry.cost_saved
        baseline = tokens_remaining + self.tokens_saved
        self.percent_saved = (self.tokens_saved / baseline * 100) if baseline else 0.0
        self.updated_at = entry.timestamp
        self.history.append(entry)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["updated_at"] = self.updated_at.isoformat() if self.updated_at else None
        for item in data["history"]:
            item["timestamp"] = item["timestamp"].isoformat()
        return data


__all__ = ["CostSavingsEntry", "CostSavingsLedger"]
