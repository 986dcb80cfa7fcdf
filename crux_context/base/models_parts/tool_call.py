"""
Tool invocation and tool result value objects.

A tool exchange is two messages: the assistant turn carrying a
`ToolInvocation` and the turn carrying the matching `ToolResult`. The two are
linked by ``tool_id``.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict


@dataclass(frozen=True)
class ToolInvocation:
    """A request to run a tool.

    Attributes:
        tool_id: Identifier linking the invocation to its result.
        tool_name: Name of the tool to run.
        parameters: JSON-serializable arguments for the tool.
    """

    tool_id: str
    tool_name: str
    parameters: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {"tool_id": self.tool_id, "tool_name": self.tool_name, "parameters": dict(self.parameters)}


@dataclass(frozen=True)
class ToolResult:
    """The output of a tool run, keyed by the invocation's ``tool_id``."""

    tool_id: str
    content: str

    def to_dict(self) -> Dict[str, Any]:
        return {"tool_id": self.tool_id, "content": self.content}


__all__ = ["ToolInvocation", "ToolResult"]
