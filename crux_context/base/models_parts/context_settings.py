"""Per-session context management settings.

Purpose
-------
Capture the knobs that govern how a session's context window is managed:
token budget, preservation rules, truncation strategy and the cost-tier
options. Values are validated on construction and on every partial update.

External dependencies
---------------------
- Pydantic v2 ``BaseModel`` for validation and `.model_dump()` convenience.

Failure modes & side effects
----------------------------
- Pure data container. Invalid values raise ``pydantic.ValidationError``;
  the session facade and config loader translate that into
  ``ConfigurationError``.
"""
from __future__ import annotations

from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

TruncationStrategy = Literal["oldest-first", "selective", "summarize"]
CostOptimizationLevel = Literal["minimal", "balanced", "aggressive"]


class ContextSettings(BaseModel):
    """Context management settings attached to a session.

    Attributes
    ----------
    max_token_limit:
        Explicit token budget. ``None`` falls back to the model's context
        window when a default optimization target is derived.
    auto_truncate:
        Optimize automatically once the tracker flags the window as critical.
    preserve_system_messages:
        Never drop system messages.
    preserve_recent_messages:
        Size of the trailing window of non-system messages never dropped.
    truncation_strategy:
        Default strategy when cost optimization mode is off.
    cost_optimization_mode / cost_optimization_level:
        Enable the cost-tier pruning and choose how aggressive it is.
    preserve_questions_in_cost_mode:
        Re-inject recent dropped questions during cost-tier pruning.
    summarization_batch_size / min_compression_ratio:
        Run size and minimum original/summary ratio for summarization.
    """

    model_config = ConfigDict(extra="forbid")

    max_token_limit: Optional[int] = Field(default=None, gt=0)
    auto_truncate: bool = True
    preserve_system_messages: bool = True
    preserve_recent_messages: int = Field(default=2, ge=0)
    truncation_strategy: TruncationStrategy = "oldest-first"
    cost_optimization_mode: bool = False
    cost_optimization_level: CostOptimizationLevel = "balanced"
    preserve_questions_in_cost_mode: bool = True
    summarization_batch_size: int = Field(default=3, ge=2)
    min_compression_ratio: float = Field(default=1.5, gt=0)

    def updated(self, **updates: Any) -> "ContextSettings":
        """Return a new validated settings object with ``updates`` applied."""
        data = self.model_dump()
        data.update(updates)
        return ContextSettings.model_validate(data)


__all__ = ["ContextSettings", "TruncationStrategy", "CostOptimizationLevel"]
