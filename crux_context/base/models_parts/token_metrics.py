"""Token usage snapshot computed by the context window tracker."""
from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class TokenMetrics:
    """Per-role token totals and window usage for one session.

    Attributes:
        user_tokens / assistant_tokens / system_tokens / tool_tokens:
            Totals by category; tool turns count as tool tokens whatever
            their role.
        total_tokens: Sum of all categories.
        max_context_tokens: Context window of the session's model.
        percent_used: ``total_tokens / max_context_tokens * 100``.
        recommendation: Human-readable advice for the usage band.
        target_tokens: Budget of the optimization that produced the
            snapshot, when there was one.
        degraded: True when that optimization finished above its budget.
    """

    user_tokens: int
    assistant_tokens: int
    system_tokens: int
    tool_tokens: int
    total_tokens: int
    max_context_tokens: int
    percent_used: float
    recommendation: str
    target_tokens: Optional[int] = None
    degraded: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


__all__ = ["TokenMetrics"]
