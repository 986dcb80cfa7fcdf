"""Context optimization engine, strategies and relevance scoring."""

from .advisor import StrategyRecommendation, escalate_cost_level, recommend_strategy
from .engine import STRATEGY_NAMES, ContextOptimizationEngine, OptimizationStrategy
from .preservation import PreservationPlan, plan_preservation, tool_partners
from .relevance import RelevanceScorer, RelevanceWeights
from .strategies import (
    CostTierStrategy,
    OldestFirstStrategy,
    PruningStrategy,
    SelectiveStrategy,
    SummarizeStrategy,
)
from .summarizer import CallableSummarizer, Summarizer, SummaryResult, render_transcript

__all__ = [
    "ContextOptimizationEngine",
    "OptimizationStrategy",
    "STRATEGY_NAMES",
    "PreservationPlan",
    "plan_preservation",
    "tool_partners",
    "RelevanceScorer",
    "RelevanceWeights",
    "PruningStrategy",
    "OldestFirstStrategy",
    "SelectiveStrategy",
    "CostTierStrategy",
    "SummarizeStrategy",
    "Summarizer",
    "SummaryResult",
    "CallableSummarizer",
    "render_transcript",
    "StrategyRecommendation",
    "recommend_strategy",
    "escalate_cost_level",
]
