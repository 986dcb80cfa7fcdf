"""Optimization strategies."""

from .base import PruningStrategy
from .cost_tier import CostTierStrategy
from .oldest_first import OldestFirstStrategy
from .selective import SelectiveStrategy
from .summarize import SummarizeStrategy

__all__ = [
    "PruningStrategy",
    "OldestFirstStrategy",
    "SelectiveStrategy",
    "CostTierStrategy",
    "SummarizeStrategy",
]
