"""Context window tracker.

Derives :class:`TokenMetrics` from a session's stored messages and the
context window of its model, and flags the session when usage is
critical. Metrics are derived data: they are recomputed from scratch every
time and never edit messages.
"""
from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..base.errors import ConfigurationError
from ..base.logging import LogContext, get_logger, log_event
from ..base.models import ConversationMessage, Session, TokenMetrics
from ..base.registry import ModelRegistry
from ..config.defaults import (
    USAGE_CRITICAL_PERCENT,
    USAGE_MONITOR_PERCENT,
    USAGE_OPTIMIZE_SOON_PERCENT,
)
from .cost_estimate import CostEstimate

RECOMMEND_LOW = "Context window usage is low."
RECOMMEND_MONITOR = "Context window usage is moderate. Monitor usage as the conversation grows."
RECOMMEND_OPTIMIZE_SOON = "Context window usage is high. Consider optimizing context soon."
RECOMMEND_CRITICAL = "Context window is nearly full. Optimize context now."


def recommendation_for(percent_used: float) -> str:
    """Map a usage percentage to its recommendation band."""
    if percent_used >= USAGE_CRITICAL_PERCENT:
        return RECOMMEND_CRITICAL
    if percent_used >= USAGE_OPTIMIZE_SOON_PERCENT:
        return RECOMMEND_OPTIMIZE_SOON
    if percent_used >= USAGE_MONITOR_PERCENT:
        return RECOMMEND_MONITOR
    return RECOMMEND_LOW


def compute_metrics(
    messages: Sequence[ConversationMessage],
    max_context_tokens: int,
    *,
    target_tokens: Optional[int] = None,
) -> TokenMetrics:
    """Sum stored token counts per category.

    Raises:
        ConfigurationError: ``max_context_tokens`` is not positive.
    """
    if max_context_tokens <= 0:
        raise ConfigurationError(f"context window must be positive, got {max_context_tokens}")
    user = assistant = system = tool = 0
    for message in messages:
        if message.is_tool_invocation or message.is_tool_result:
            tool += message.tokens
        elif message.role == "user":
            user += message.tokens
        elif message.role == "assistant":
            assistant += message.tokens
        elif message.role == "system":
            system += message.tokens
        else:
            tool += message.tokens
    total = user + assistant + system + tool
    percent = total / max_context_tokens * 100
    return TokenMetrics(
        user_tokens=user,
        assistant_tokens=assistant,
        system_tokens=system,
        tool_tokens=tool,
        total_tokens=total,
        max_context_tokens=max_context_tokens,
        percent_used=percent,
        recommendation=recommendation_for(percent),
        target_tokens=target_tokens,
        degraded=target_tokens is not None and total > target_tokens,
    )


class ContextWindowTracker:
    """Maintains token metrics and the critical flag on sessions."""

    def __init__(self, registry: ModelRegistry) -> None:
        self.registry = registry
        self.logger = get_logger("tracking")

    def context_window(self, session: Session) -> int:
        """Context window of the session's model (``NotFoundError`` if unknown)."""
        return self.registry.get_model(session.provider, session.model_id).context_window

    def recompute(self, session: Session, *, target_tokens: Optional[int] = None) -> TokenMetrics:
        """Recompute metrics, store them and the critical flag on ``session``."""
        metrics = compute_metrics(session.messages, self.context_window(session), target_tokens=target_tokens)
        session.token_metrics = metrics
        session.is_context_window_critical = metrics.percent_used >= USAGE_CRITICAL_PERCENT
        log_event(
            self.logger,
            "tracker.recompute",
            LogContext.for_session(session),
            level=logging.DEBUG,
            total_tokens=metrics.total_tokens,
            percent_used=round(metrics.percent_used, 2),
            critical=session.is_context_window_critical,
        )
        return metrics

    def estimate_costs(self, session: Session, provider: str, model_id: str) -> CostEstimate:
        """Estimate what sending the session history to ``provider``/``model_id`` costs.

        Raises:
            NotFoundError: The target model is not registered.
        """
        capability = self.registry.get_model(provider, model_id)
        metrics = compute_metrics(session.messages, capability.context_window)
        input_tokens = metrics.user_tokens
        output_tokens = metrics.assistant_tokens
        input_cost = input_tokens / 1000 * capability.input_cost_per_1k
        output_cost = output_tokens / 1000 * capability.output_cost_per_1k
        return CostEstimate(
            provider=provider,
            model_id=model_id,
            input_tokens=input_tokens,
            output_tokens=output_tokens,
            input_cost=input_cost,
            output_cost=output_cost,
            total_cost=input_cost + output_cost,
        )


__all__ = [
    "ContextWindowTracker",
    "compute_metrics",
    "recommendation_for",
    "RECOMMEND_LOW",
    "RECOMMEND_MONITOR",
    "RECOMMEND_OPTIMIZE_SOON",
    "RECOMMEND_CRITICAL",
]
