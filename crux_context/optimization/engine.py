"""Context optimization engine.

``optimize`` shrinks a session's message list toward a token budget with one
of four strategies, then returns fresh metrics from the tracker. The list
is mutated in place. When preserved messages alone exceed the budget the
pass finishes over budget and the returned metrics carry
``degraded=True``; that outcome is reported, not raised.
"""
from __future__ import annotations

import logging
from typing import Dict, Literal, Optional

from ..base.errors import ConfigurationError
from ..base.logging import LogContext, get_logger, log_event
from ..base.models import Session, TokenMetrics
from ..config.defaults import COST_PER_1K_TOKENS
from ..tracking import ContextWindowTracker
from .advisor import escalate_cost_level
from .preservation import total_tokens
from .relevance import RelevanceScorer
from .strategies import (
    CostTierStrategy,
    OldestFirstStrategy,
    PruningStrategy,
    SelectiveStrategy,
    SummarizeStrategy,
)
from .summarizer import Summarizer

OptimizationStrategy = Literal["oldest-first", "selective", "summarize", "cost-tier"]
STRATEGY_NAMES = ("oldest-first", "selective", "summarize", "cost-tier")


class ContextOptimizationEngine:
    """Applies truncation strategies to sessions.

    Attributes:
        tracker: Recomputes metrics after each pass.
        summarizer: Required only by the ``summarize`` strategy.
    """

    def __init__(
        self,
        tracker: ContextWindowTracker,
        *,
        summarizer: Optional[Summarizer] = None,
        scorer: Optional[RelevanceScorer] = None,
        cost_per_1k_tokens: float = COST_PER_1K_TOKENS,
    ) -> None:
        self.tracker = tracker
        self.summarizer = summarizer
        self.cost_tier = CostTierStrategy(cost_per_1k_tokens)
        self._strategies: Dict[str, PruningStrategy] = {
            "oldest-first": OldestFirstStrategy(),
            "selective": SelectiveStrategy(scorer),
            "cost-tier": self.cost_tier,
        }
        self.logger = get_logger("optimization")

    def resolve_strategy(self, session: Session, strategy: Optional[str] = None) -> str:
        """Return the strategy name a call with ``strategy`` would run.

        Raises:
            ConfigurationError: Unknown strategy, ``cost-tier`` requested while
                cost optimization mode is off, or ``summarize`` without a
                summarizer.
        """
        settings = session.context_settings
        if strategy is None:
            strategy = "cost-tier" if settings.cost_optimization_mode else settings.truncation_strategy
        if strategy not in STRATEGY_NAMES:
            raise ConfigurationError(f"unknown optimization strategy: {strategy!r}", session_id=session.id)
        if strategy == "cost-tier" and not settings.cost_optimization_mode:
            raise ConfigurationError("cost-tier pruning requires cost_optimization_mode", session_id=session.id)
        if strategy == "summarize" and self.summarizer is None:
            raise ConfigurationError("summarize strategy requires a summarizer", session_id=session.id)
        return strategy

    def optimize(
        self,
        session: Session,
        target_tokens: int,
        strategy: Optional[OptimizationStrategy] = None,
    ) -> TokenMetrics:
        """Shrink ``session.messages`` toward ``target_tokens``.

        Raises:
            ConfigurationError: Negative budget or unusable strategy.
            NotFoundError: The session's model is not registered.
        """
        if target_tokens < 0:
            raise ConfigurationError(f"target_tokens must be non-negative, got {target_tokens}", session_id=session.id)
        name = self.resolve_strategy(session, strategy)
        ctx = LogContext.for_session(session)
        tokens_before = total_tokens(session.messages)
        messages_before = len(session.messages)
        log_event(self.logger, "optimize.start", ctx, strategy=name, target_tokens=target_tokens, tokens_before=tokens_before)

        if name == "cost-tier":
            level = session.context_settings.cost_optimization_level
            if session.is_context_window_critical:
                level = escalate_cost_level(level)
            survivors = self.cost_tier.apply(session, target_tokens, level=level)
        elif name == "summarize":
            assert self.summarizer is not None  # nosec B101 - checked by resolve_strategy
            survivors = SummarizeStrategy(self.summarizer).apply(session, target_tokens)
        else:
            survivors = self._strategies[name].apply(session, target_tokens)
        session.messages[:] = survivors

        metrics = self.tracker.recompute(session, target_tokens=target_tokens)
        log_event(
            self.logger,
            "optimize.complete",
            ctx,
            strategy=name,
            tokens_before=tokens_before,
            tokens_after=metrics.total_tokens,
            messages_before=messages_before,
            messages_after=len(session.messages),
        )
        if metrics.degraded:
            log_event(
                self.logger,
                "optimize.degraded",
                ctx,
                level=logging.WARNING,
                strategy=name,
                target_tokens=target_tokens,
                tokens_after=metrics.total_tokens,
            )
        return metrics


__all__ = ["ContextOptimizationEngine", "OptimizationStrategy", "STRATEGY_NAMES"]
