"""OpenAI Chat Completions encoding.

The system prompt stays the first turn. A tool exchange becomes an
assistant turn carrying ``tool_calls`` (arguments as a JSON string)
followed by a ``tool`` turn keyed by ``tool_call_id``.
"""
from __future__ import annotations

import json
from typing import Any, Dict, List

from ...base.models import ConversationMessage
from ..provider import Provider
from .base import MessageFormatter


class OpenAIFormatter(MessageFormatter):
    provider = Provider.OPENAI

    def format_tool_exchange(
        self, invocation: ConversationMessage, result: ConversationMessage
    ) -> List[Dict[str, Any]]:
        call = invocation.tool_invocation
        output = result.tool_result
        assert call is not None and output is not None  # nosec B101 - guaranteed by plan_turns
        return [
            {
                "role": "assistant",
                "content": self.rationale(invocation),
                "tool_calls": [
                    {
                        "id": call.tool_id,
                        "type": "function",
                        "function": {"name": call.tool_name, "arguments": json.dumps(call.parameters)},
                    }
                ],
            },
            {"role": "tool", "tool_call_id": output.tool_id, "content": output.content},
        ]


__all__ = ["OpenAIFormatter"]
