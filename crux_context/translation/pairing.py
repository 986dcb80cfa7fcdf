"""Turn planning shared by every formatter.

A wire conversation has strict rules: at most one system message, and every
tool result immediately after the invocation that produced it. The stored
history may violate both (orphans from pruning, several system messages,
results stored out of order). ``plan_turns`` reduces a stored list to a plan
that satisfies the rules, so that formatters only decide encodings.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Union

from ..base.logging import get_logger, log_event
from ..base.models import ConversationMessage

logger = get_logger("translation")


@dataclass(frozen=True)
class PlainTurn:
    """An ordinary user or assistant turn."""

    message: ConversationMessage


@dataclass(frozen=True)
class ToolExchange:
    """An invocation paired with the result sharing its tool id."""

    invocation: ConversationMessage
    result: ConversationMessage


Turn = Union[PlainTurn, ToolExchange]


@dataclass
class TurnPlan:
    """Ordered turns plus the single honored system message.

    Attributes:
        system: First system message of the input, if any.
        turns: Plain turns and tool exchanges in input order.
        dropped_ids: Ids of messages left out (later system messages,
            orphaned invocations and results, duplicate results).
    """

    system: Optional[ConversationMessage] = None
    turns: List[Turn] = field(default_factory=list)
    dropped_ids: List[str] = field(default_factory=list)


def _is_plain_system(message: ConversationMessage) -> bool:
    return message.role == "system" and not message.is_tool_invocation and not message.is_tool_result


def plan_turns(messages: Sequence[ConversationMessage]) -> TurnPlan:
    """Partition ``messages`` into a wire-valid turn plan.

    Input order is walked as given. Invocations without a result and results
    whose invocation never appears are dropped, as is every system message
    after the first.
    """
    plan = TurnPlan()
    results: Dict[str, ConversationMessage] = {}
    for message in messages:
        if message.tool_result is not None:
            tool_id = message.tool_result.tool_id
            if tool_id in results:
                plan.dropped_ids.append(message.id)
            else:
                results[tool_id] = message

    consumed: set[str] = set()
    for message in messages:
        if message.tool_result is not None:
            continue
        if _is_plain_system(message):
            if plan.system is None:
                plan.system = message
            else:
                plan.dropped_ids.append(message.id)
            continue
        if message.tool_invocation is not None:
            tool_id = message.tool_invocation.tool_id
            result = results.get(tool_id)
            if result is None or tool_id in consumed:
                plan.dropped_ids.append(message.id)
                log_event(logger, "translate.orphan_skipped", level=logging.DEBUG, message_id=message.id, tool_id=tool_id, kind="invocation")
                continue
            consumed.add(tool_id)
            plan.turns.append(ToolExchange(invocation=message, result=result))
            continue
        plan.turns.append(PlainTurn(message))

    for tool_id, result in results.items():
        if tool_id not in consumed:
            plan.dropped_ids.append(result.id)
            log_event(logger, "translate.orphan_skipped", level=logging.DEBUG, message_id=result.id, tool_id=tool_id, kind="result")
    return plan


__all__ = ["PlainTurn", "ToolExchange", "Turn", "TurnPlan", "plan_turns"]
