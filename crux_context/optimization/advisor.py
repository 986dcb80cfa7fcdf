"""Strategy advice derived from the shape of a conversation.

Creative conversations lose the most from dropped turns and are better
summarized; technical or question-heavy ones keep their important turns
under selective pruning; anything else is fine with oldest-first. The cost
tier escalates one level while the session is critical.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

from ..base.models import Session
from ..config.defaults import COST_LEVELS

CREATIVE_TERMS = re.compile(r"\b(story|poem|imagine|creative|character|plot|novel)\b", re.IGNORECASE)
TECHNICAL_TERMS = re.compile(r"\b(code|function|error|api|debug|implement|stack|exception|bug)\b", re.IGNORECASE)

QUESTION_DENSITY_THRESHOLD = 0.3
TERM_DENSITY_THRESHOLD = 0.2


@dataclass(frozen=True)
class StrategyRecommendation:
    strategy: str
    cost_level: Optional[str]
    reason: str


def escalate_cost_level(level: str) -> str:
    """Return the next more aggressive cost level (aggressive stays)."""
    index = COST_LEVELS.index(level)
    return COST_LEVELS[min(index + 1, len(COST_LEVELS) - 1)]


def recommend_strategy(session: Session) -> StrategyRecommendation:
    """Recommend a truncation strategy and cost level for ``session``."""
    settings = session.context_settings
    cost_level: Optional[str] = None
    if settings.cost_optimization_mode:
        cost_level = settings.cost_optimization_level
        if session.is_context_window_critical:
            cost_level = escalate_cost_level(cost_level)

    turns = [m for m in session.messages if m.role in ("user", "assistant")]
    if not turns:
        return StrategyRecommendation(settings.truncation_strategy, cost_level, "no conversation turns yet")

    count = len(turns)
    creative = sum(1 for m in turns if CREATIVE_TERMS.search(m.text())) / count
    technical = sum(1 for m in turns if TECHNICAL_TERMS.search(m.text())) / count
    questions = sum(1 for m in turns if "?" in m.text()) / count

    if creative >= TERM_DENSITY_THRESHOLD and creative >= technical:
        return StrategyRecommendation("summarize", cost_level, "creative conversation")
    if technical >= TERM_DENSITY_THRESHOLD:
        return StrategyRecommendation("selective", cost_level, "technical conversation")
    if questions >= QUESTION_DENSITY_THRESHOLD:
        return StrategyRecommendation("selective", cost_level, "question-heavy conversation")
    return StrategyRecommendation("oldest-first", cost_level, "general conversation")


__all__ = ["StrategyRecommendation", "recommend_strategy", "escalate_cost_level"]
