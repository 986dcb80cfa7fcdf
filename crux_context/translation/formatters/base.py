"""Formatter template shared by every backend.

Subclasses only decide encodings; ordering, system handling and orphan
removal come from :func:`plan_turns`.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Sequence

from ...base.models import ConversationMessage
from ...config.defaults import TOOL_INVOCATION_FALLBACK_TEXT
from ..pairing import PlainTurn, ToolExchange, plan_turns
from ..payload import WirePayload
from ..provider import Provider


class MessageFormatter(ABC):
    """Turns stored messages into a :class:`WirePayload` for one backend."""

    provider: Provider
    hoists_system: bool = False

    def format(self, messages: Sequence[ConversationMessage]) -> WirePayload:
        plan = plan_turns(messages)
        payload = WirePayload(provider=self.provider)
        if plan.system is not None:
            if self.hoists_system:
                payload.system = plan.system.text()
            else:
                payload.messages.append({"role": "system", "content": plan.system.text()})
        for turn in plan.turns:
            if isinstance(turn, ToolExchange):
                payload.messages.extend(self.format_tool_exchange(turn.invocation, turn.result))
            else:
                payload.messages.append(self.format_plain(turn))
        return payload

    def format_plain(self, turn: PlainTurn) -> Dict[str, Any]:
        message = turn.message
        role = message.role if message.role in ("user", "assistant") else "user"
        return {"role": role, "content": message.text()}

    @abstractmethod
    def format_tool_exchange(
        self, invocation: ConversationMessage, result: ConversationMessage
    ) -> List[Dict[str, Any]]:
        """Return the two wire turns encoding one tool exchange."""

    @staticmethod
    def rationale(invocation: ConversationMessage) -> str:
        """Text accompanying an invocation; a fixed phrase when absent."""
        return invocation.content or TOOL_INVOCATION_FALLBACK_TEXT


__all__ = ["MessageFormatter"]
