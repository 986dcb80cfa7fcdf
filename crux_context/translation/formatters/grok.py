"""Grok encoding.

Grok receives tool exchanges as plain text: the assistant turn states the
call, the following user turn carries the result.
"""
from __future__ import annotations

import json
from typing import Any, Dict, List

from ...base.models import ConversationMessage
from ..provider import Provider
from .base import MessageFormatter


class GrokFormatter(MessageFormatter):
    provider = Provider.GROK

    def format_tool_exchange(
        self, invocation: ConversationMessage, result: ConversationMessage
    ) -> List[Dict[str, Any]]:
        call = invocation.tool_invocation
        output = result.tool_result
        assert call is not None and output is not None  # nosec B101 - guaranteed by plan_turns
        request = f"Please call {call.tool_name} with {json.dumps(call.parameters)}"
        return [
            {"role": "assistant", "content": f"{self.rationale(invocation)}\n\n{request}"},
            {"role": "user", "content": output.content},
        ]


__all__ = ["GrokFormatter"]
