"""Relevance-based pruning with pair coherence.

Messages are grouped into drop units before anything is removed. A tool
invocation and its result form one unit; so do a user question (ending in
'?') and the assistant message right after it. Units are removed whole,
lowest score first. A unit containing any preserved message is never
removed, because removing the rest of it would split a pair.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Sequence, Set

from ...base.models import ConversationMessage, Session
from ..preservation import by_timestamp, keep_only, plan_preservation, tool_partners, total_tokens
from ..relevance import RelevanceScorer
from .base import PruningStrategy


@dataclass
class DropUnit:
    members: List[ConversationMessage]
    score: float
    eligible: bool

    @property
    def tokens(self) -> int:
        return sum(m.tokens for m in self.members)

    @property
    def oldest(self):
        return min(m.timestamp for m in self.members)


class _Groups:
    """Minimal union-find over message ids."""

    def __init__(self, ids: Sequence[str]) -> None:
        self.parent = {i: i for i in ids}

    def find(self, i: str) -> str:
        while self.parent[i] != i:
            self.parent[i] = self.parent[self.parent[i]]
            i = self.parent[i]
        return i

    def union(self, a: str, b: str) -> None:
        ra, rb = self.find(a), self.find(b)
        if ra != rb:
            self.parent[rb] = ra


def is_question(message: ConversationMessage) -> bool:
    return (
        message.role == "user"
        and not message.is_tool_result
        and message.text().rstrip().endswith("?")
    )


def build_drop_units(
    messages: Sequence[ConversationMessage],
    preserved_ids: Set[str],
    scores: Dict[str, float],
) -> List[DropUnit]:
    """Group ``messages`` into units that must be dropped together.

    Only units holding at least one scored (candidate) message are returned.
    """
    ordered = by_timestamp(messages)
    groups = _Groups([m.id for m in ordered])
    for a, b in tool_partners(ordered).items():
        groups.union(a, b)
    for question, answer in zip(ordered, ordered[1:]):
        if is_question(question) and answer.role == "assistant" and not answer.is_tool_invocation:
            groups.union(question.id, answer.id)

    members: Dict[str, List[ConversationMessage]] = {}
    for m in ordered:
        members.setdefault(groups.find(m.id), []).append(m)

    units: List[DropUnit] = []
    for group in members.values():
        scored = [scores[m.id] for m in group if m.id in scores]
        if not scored:
            continue
        eligible = all(m.id not in preserved_ids for m in group)
        units.append(DropUnit(members=group, score=max(scored), eligible=eligible))
    return units


class SelectiveStrategy(PruningStrategy):
    name = "selective"

    def __init__(self, scorer: RelevanceScorer | None = None) -> None:
        self.scorer = scorer or RelevanceScorer()

    def apply(self, session: Session, target_tokens: int) -> List[ConversationMessage]:
        plan = plan_preservation(session.messages, session.context_settings)
        scores = self.scorer.score_messages(plan.candidates)
        units = build_drop_units(session.messages, plan.preserved_ids, scores)
        units.sort(key=lambda u: (u.score, u.oldest))

        remaining = total_tokens(session.messages)
        dropped: Set[str] = set()
        for unit in units:
            if remaining <= target_tokens:
                break
            if not unit.eligible:
                continue
            dropped.update(m.id for m in unit.members)
            remaining -= unit.tokens
        return keep_only(session.messages, dropped)


__all__ = ["SelectiveStrategy", "DropUnit", "build_drop_units", "is_question"]
