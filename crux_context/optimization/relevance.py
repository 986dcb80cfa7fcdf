"""Heuristic relevance scoring for selective pruning.

A message's score (0-100) weighs four factors in [0, 1]: recency,
significance, explicit back-references and tool use. The scorer is
deterministic: recency is the rank of the message among the scored set
rather than wall-clock age.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict, Sequence

from ..base.models import ConversationMessage

QUESTION_WORDS = re.compile(r"\b(what|how|why|when|where|which|who)\b", re.IGNORECASE)
IMPERATIVE_OPENERS = re.compile(r"^\s*(find|get|show|tell|explain|list|analyze|calculate)\b", re.IGNORECASE)
BACK_REFERENCES = re.compile(r"(you mentioned|as i said|earlier|previous|above)", re.IGNORECASE)
CONNECTIVES = re.compile(r"\b(additionally|furthermore|moreover|also)\b", re.IGNORECASE)
QUOTES = re.compile(r"[\"'“”].+?[\"'“”]")

LONG_MESSAGE_TOKENS = 50


@dataclass(frozen=True)
class RelevanceWeights:
    recency: float = 40.0
    significance: float = 30.0
    reference: float = 15.0
    tool_use: float = 15.0


class RelevanceScorer:
    """Scores messages for selective pruning; higher means keep longer."""

    def __init__(self, weights: RelevanceWeights | None = None) -> None:
        self.weights = weights or RelevanceWeights()

    def significance(self, message: ConversationMessage) -> float:
        text = message.text()
        value = 0.5
        if message.role == "system":
            value += 0.4
        if "?" in text:
            value += 0.2
        if QUESTION_WORDS.search(text):
            value += 0.1
        if IMPERATIVE_OPENERS.search(text):
            value += 0.1
        if message.tokens > LONG_MESSAGE_TOKENS:
            value += 0.1
        if message.is_tool_invocation or message.is_tool_result:
            value += 0.4
        return min(value, 1.0)

    def reference(self, message: ConversationMessage) -> float:
        text = message.text()
        value = 0.3
        if BACK_REFERENCES.search(text):
            value += 0.3
        if QUOTES.search(text):
            value += 0.2
        if CONNECTIVES.search(text):
            value += 0.2
        return min(value, 1.0)

    def tool_use(self, message: ConversationMessage) -> float:
        value = 0.2
        if message.is_tool_invocation:
            value += 0.5
        if message.is_tool_result:
            value += 0.7
        return min(value, 1.0)

    def score(self, message: ConversationMessage, recency: float) -> float:
        w = self.weights
        weighted = (
            recency * w.recency
            + self.significance(message) * w.significance
            + self.reference(message) * w.reference
            + self.tool_use(message) * w.tool_use
        )
        return min(weighted, 100.0)

    def score_messages(self, messages: Sequence[ConversationMessage]) -> Dict[str, float]:
        """Score ``messages``; recency rises linearly from 0.2 (oldest) to 1.0 (newest)."""
        ordered = sorted(messages, key=lambda m: m.timestamp)
        count = len(ordered)
        scores: Dict[str, float] = {}
        for rank, message in enumerate(ordered):
            recency = 1.0 if count == 1 else 0.2 + 0.8 * rank / (count - 1)
            scores[message.id] = self.score(message, recency)
        return scores


__all__ = ["RelevanceScorer", "RelevanceWeights"]
