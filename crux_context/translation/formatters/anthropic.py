"""Anthropic Messages API encoding.

System text is hoisted to the top-level ``system`` field. A tool exchange
becomes an assistant turn with ``text`` + ``tool_use`` content blocks
followed by a user turn with a ``tool_result`` block.
"""
from __future__ import annotations

from typing import Any, Dict, List

from ...base.models import ConversationMessage
from ..provider import Provider
from .base import MessageFormatter


class AnthropicFormatter(MessageFormatter):
    provider = Provider.ANTHROPIC
    hoists_system = True

    def format_tool_exchange(
        self, invocation: ConversationMessage, result: ConversationMessage
    ) -> List[Dict[str, Any]]:
        call = invocation.tool_invocation
        output = result.tool_result
        assert call is not None and output is not None  # nosec B101 - guaranteed by plan_turns
        return [
            {
                "role": "assistant",
                "content": [
                    {"type": "text", "text": self.rationale(invocation)},
                    {"type": "tool_use", "id": call.tool_id, "name": call.tool_name, "input": dict(call.parameters)},
                ],
            },
            {
                "role": "user",
                "content": [{"type": "tool_result", "tool_use_id": output.tool_id, "content": output.content}],
            },
        ]


__all__ = ["AnthropicFormatter"]
