"""Backend-native encodings of tool invocations and tool results.

Each codec turns the canonical :class:`ToolInvocation`/:class:`ToolResult`
into the field shape a backend stores, and back. Decoding validates the
shape and raises ``FormatError`` on malformed payloads.
"""
from __future__ import annotations

import json
from abc import ABC, abstractmethod
from typing import Any, Dict, Mapping

from ..base.errors import FormatError
from ..base.models import ToolInvocation, ToolResult
from .provider import Provider


def _require(payload: Mapping[str, Any], key: str, provider: Provider) -> Any:
    if key not in payload:
        raise FormatError(f"native {provider.value} tool payload is missing {key!r}", provider=provider.value)
    return payload[key]


class ToolCodec(ABC):
    """Encode/decode tool data for one backend."""

    provider: Provider

    @abstractmethod
    def encode_invocation(self, call: ToolInvocation) -> Dict[str, Any]:
        """Render a tool invocation as the backend's native block."""

    @abstractmethod
    def decode_invocation(self, payload: Mapping[str, Any]) -> ToolInvocation:
        """Parse a native invocation block; raise ``FormatError`` when malformed."""

    @abstractmethod
    def encode_result(self, result: ToolResult) -> Dict[str, Any]:
        """Render a tool result as the backend's native block."""

    @abstractmethod
    def decode_result(self, payload: Mapping[str, Any]) -> ToolResult:
        """Parse a native result block; raise ``FormatError`` when malformed."""


class AnthropicToolCodec(ToolCodec):
    provider = Provider.ANTHROPIC

    def encode_invocation(self, call: ToolInvocation) -> Dict[str, Any]:
        return {"type": "tool_use", "id": call.tool_id, "name": call.tool_name, "input": dict(call.parameters)}

    def decode_invocation(self, payload: Mapping[str, Any]) -> ToolInvocation:
        params = payload.get("input") or {}
        if not isinstance(params, Mapping):
            raise FormatError("tool_use input must be an object", provider=self.provider.value)
        return ToolInvocation(
            tool_id=str(_require(payload, "id", self.provider)),
            tool_name=str(_require(payload, "name", self.provider)),
            parameters=dict(params),
        )

    def encode_result(self, result: ToolResult) -> Dict[str, Any]:
        return {"type": "tool_result", "tool_use_id": result.tool_id, "content": result.content}

    def decode_result(self, payload: Mapping[str, Any]) -> ToolResult:
        return ToolResult(
            tool_id=str(_require(payload, "tool_use_id", self.provider)),
            content=str(payload.get("content") or ""),
        )


class OpenAIToolCodec(ToolCodec):
    provider = Provider.OPENAI

    def encode_invocation(self, call: ToolInvocation) -> Dict[str, Any]:
        return {
            "id": call.tool_id,
            "type": "function",
            "function": {"name": call.tool_name, "arguments": json.dumps(call.parameters)},
        }

    def decode_invocation(self, payload: Mapping[str, Any]) -> ToolInvocation:
        function = _require(payload, "function", self.provider)
        if not isinstance(function, Mapping):
            raise FormatError("function must be an object", provider=self.provider.value)
        raw_args = function.get("arguments") or "{}"
        if isinstance(raw_args, str):
            try:
                params = json.loads(raw_args)
            except json.JSONDecodeError as e:
                raise FormatError(f"function arguments are not valid JSON: {e}", provider=self.provider.value) from e
        else:
            params = raw_args
        if not isinstance(params, Mapping):
            raise FormatError("function arguments must decode to an object", provider=self.provider.value)
        return ToolInvocation(
            tool_id=str(_require(payload, "id", self.provider)),
            tool_name=str(_require(function, "name", self.provider)),
            parameters=dict(params),
        )

    def encode_result(self, result: ToolResult) -> Dict[str, Any]:
        return {"role": "tool", "tool_call_id": result.tool_id, "content": result.content}

    def decode_result(self, payload: Mapping[str, Any]) -> ToolResult:
        return ToolResult(
            tool_id=str(_require(payload, "tool_call_id", self.provider)),
            content=str(payload.get("content") or ""),
        )


class GrokToolCodec(ToolCodec):
    provider = Provider.GROK

    def encode_invocation(self, call: ToolInvocation) -> Dict[str, Any]:
        return {"id": call.tool_id, "name": call.tool_name, "parameters": dict(call.parameters)}

    def decode_invocation(self, payload: Mapping[str, Any]) -> ToolInvocation:
        params = payload.get("parameters") or {}
        if not isinstance(params, Mapping):
            raise FormatError("parameters must be an object", provider=self.provider.value)
        return ToolInvocation(
            tool_id=str(_require(payload, "id", self.provider)),
            tool_name=str(_require(payload, "name", self.provider)),
            parameters=dict(params),
        )

    def encode_result(self, result: ToolResult) -> Dict[str, Any]:
        return {"tool_call_id": result.tool_id, "content": result.content}

    def decode_result(self, payload: Mapping[str, Any]) -> ToolResult:
        return ToolResult(
            tool_id=str(_require(payload, "tool_call_id", self.provider)),
            content=str(payload.get("content") or ""),
        )


TOOL_CODECS: Dict[Provider, ToolCodec] = {
    Provider.ANTHROPIC: AnthropicToolCodec(),
    Provider.OPENAI: OpenAIToolCodec(),
    Provider.GROK: GrokToolCodec(),
}


__all__ = [
    "ToolCodec",
    "AnthropicToolCodec",
    "OpenAIToolCodec",
    "GrokToolCodec",
    "TOOL_CODECS",
]
