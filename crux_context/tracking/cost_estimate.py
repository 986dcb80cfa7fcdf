"""Cost estimate DTO returned by ``ContextWindowTracker.estimate_costs``."""
from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict


@dataclass(frozen=True)
class CostEstimate:
    """USD estimate for sending a session's history to a model.

    Input tokens are the user tokens, output tokens the assistant tokens;
    system and tool tokens are not priced.
    """

    provider: str
    model_id: str
    input_tokens: int
    output_tokens: int
    input_cost: float
    output_cost: float
    total_cost: float

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


__all__ = ["CostEstimate"]
