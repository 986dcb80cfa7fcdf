"""
Conversation message DTO.

Defines the `ConversationMessage` dataclass and the `Role` literal. A message
is exactly one turn: plain text, a tool invocation, or a tool result. The
``tool`` role is the tool-result-carrier role, but tool results are
recognised by the presence of ``tool_result`` rather than by role alone.
"""
from __future__ import annotations

import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Any, Dict, Literal, Optional

from .conversion_metadata import ConversionMetadata
from .tool_call import ToolInvocation, ToolResult


# Message roles stored by sessions.
Role = Literal["system", "user", "assistant", "tool"]

ROLES = ("system", "user", "assistant", "tool")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _new_id() -> str:
    return uuid.uuid4().hex


@dataclass
class ConversationMessage:
    """A single stored conversation turn.

    Attributes:
        role: Author role of the turn.
        content: Text content; may be ``None`` for pure tool turns.
        timestamp: Creation time; the canonical ordering key.
        tokens: Token count assigned when the message was created.
        tool_invocation: Present when the turn requests a tool run.
        tool_result: Present when the turn carries a tool's output.
        conversion_metadata: Provenance when rewritten for another backend.
        native_tool_payload: Backend-native encoding of the tool data, as
            produced by the backend that last owned the message.
        is_summary: True for replacements produced by summarization.
        id: Stable identifier.
    """

    role: Role
    content: Optional[str] = None
    timestamp: datetime = field(default_factory=_utcnow)
    tokens: int = 0
    tool_invocation: Optional[ToolInvocation] = None
    tool_result: Optional[ToolResult] = None
    conversion_metadata: Optional[ConversionMetadata] = None
    native_tool_payload: Optional[Dict[str, Any]] = None
    is_summary: bool = False
    id: str = field(default_factory=_new_id)

    def __post_init__(self) -> None:
        if self.role not in ROLES:
            raise ValueError(f"unknown message role: {self.role!r}")
        if self.tool_invocation is not None and self.tool_result is not None:
            raise ValueError("a message cannot carry both a tool invocation and a tool result")
        if self.tokens < 0:
            raise ValueError("tokens must be non-negative")

    @property
    def is_tool_invocation(self) -> bool:
        return self.tool_invocation is not None

    @property
    def is_tool_result(self) -> bool:
        return self.tool_result is not None

    @property
    def tool_id(self) -> Optional[str]:
        """Return the tool id of the invocation or result carried, if any."""
        if self.tool_invocation is not None:
            return self.tool_invocation.tool_id
        if self.tool_result is not None:
            return self.tool_result.tool_id
        return None

    def text(self) -> str:
        """Return the content, or the empty string when absent."""
        return self.content or ""

    def copy(self, **changes: Any) -> "ConversationMessage":
        """Return a shallow copy with ``changes`` applied; the id is kept."""
        return replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable dictionary of the message."""
        data: Dict[str, Any] = {
            "id": self.id,
            "role": self.role,
            "content": self.content,
            "timestamp": self.timestamp.isoformat(),
            "tokens": self.tokens,
        }
        if self.tool_invocation is not None:
            data["tool_invocation"] = self.tool_invocation.to_dict()
        if self.tool_result is not None:
            data["tool_result"] = self.tool_result.to_dict()
        if self.conversion_metadata is not None:
            data["conversion_metadata"] = self.conversion_metadata.to_dict()
        if self.native_tool_payload is not None:
            data["native_tool_payload"] = dict(self.native_tool_payload)
        if self.is_summary:
            data["is_summary"] = True
        return data


__all__ = ["ConversationMessage", "Role", "ROLES"]
