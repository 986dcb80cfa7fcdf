"""Preservation rules shared by every optimization strategy.

Two rules are absolute: with ``preserve_system_messages`` every system
message survives, and the trailing ``preserve_recent_messages`` non-system
messages survive. Everything else is a candidate for removal.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Sequence, Set

from ..base.models import ContextSettings, ConversationMessage


@dataclass
class PreservationPlan:
    """Split of a message list into preserved messages and candidates.

    Attributes:
        preserved_ids: Ids that no strategy may remove.
        candidates: Removable messages, oldest first.
        system_messages: All system messages, oldest first.
        recent: The preserved trailing non-system window, oldest first.
    """

    preserved_ids: Set[str] = field(default_factory=set)
    candidates: List[ConversationMessage] = field(default_factory=list)
    system_messages: List[ConversationMessage] = field(default_factory=list)
    recent: List[ConversationMessage] = field(default_factory=list)


def by_timestamp(messages: Sequence[ConversationMessage]) -> List[ConversationMessage]:
    return sorted(messages, key=lambda m: m.timestamp)


def plan_preservation(messages: Sequence[ConversationMessage], settings: ContextSettings) -> PreservationPlan:
    ordered = by_timestamp(messages)
    system = [m for m in ordered if m.role == "system"]
    non_system = [m for m in ordered if m.role != "system"]
    keep = settings.preserve_recent_messages
    recent = non_system[len(non_system) - keep:] if keep > 0 else []
    preserved = {m.id for m in recent}
    if settings.preserve_system_messages:
        preserved.update(m.id for m in system)
    return PreservationPlan(
        preserved_ids=preserved,
        candidates=[m for m in ordered if m.id not in preserved],
        system_messages=system,
        recent=recent,
    )


def tool_partners(messages: Sequence[ConversationMessage]) -> Dict[str, str]:
    """Map each paired tool message id to the id of its counterpart."""
    invocations: Dict[str, ConversationMessage] = {}
    results: Dict[str, ConversationMessage] = {}
    for m in by_timestamp(messages):
        if m.tool_invocation is not None:
            invocations.setdefault(m.tool_invocation.tool_id, m)
        elif m.tool_result is not None:
            results.setdefault(m.tool_result.tool_id, m)
    partners: Dict[str, str] = {}
    for tool_id, invocation in invocations.items():
        result = results.get(tool_id)
        if result is not None:
            partners[invocation.id] = result.id
            partners[result.id] = invocation.id
    return partners


def keep_only(messages: Sequence[ConversationMessage], dropped_ids: Set[str]) -> List[ConversationMessage]:
    """Filter ``messages`` without reordering the survivors."""
    return [m for m in messages if m.id not in dropped_ids]


def total_tokens(messages: Sequence[ConversationMessage]) -> int:
    return sum(m.tokens for m in messages)


__all__ = [
    "PreservationPlan",
    "by_timestamp",
    "plan_preservation",
    "tool_partners",
    "keep_only",
    "total_tokens",
]
