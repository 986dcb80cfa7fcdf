"""Context window tracking and cost estimation."""

from .cost_estimate import CostEstimate
from .tracker import (
    RECOMMEND_CRITICAL,
    RECOMMEND_LOW,
    RECOMMEND_MONITOR,
    RECOMMEND_OPTIMIZE_SOON,
    ContextWindowTracker,
    compute_metrics,
    recommendation_for,
)

__all__ = [
    "ContextWindowTracker",
    "CostEstimate",
    "compute_metrics",
    "recommendation_for",
    "RECOMMEND_LOW",
    "RECOMMEND_MONITOR",
    "RECOMMEND_OPTIMIZE_SOON",
    "RECOMMEND_CRITICAL",
]
