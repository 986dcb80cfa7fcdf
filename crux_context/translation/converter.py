"""Message converter: rewrite stored messages for another backend.

Used when a session switches backend. Each message's tool data is decoded
from the source backend's native shape and re-encoded in the target's,
target limits are applied, and the copy is tagged with
:class:`ConversionMetadata`. The input message is never modified.
"""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable, Dict, List, Optional, Sequence, Tuple, Union

from ..base.logging import get_logger
from ..base.models import ConversationMessage, ConversionMetadata, ToolInvocation, ToolResult
from ..config.defaults import GROK_MAX_CONTENT_LENGTH, GROK_TRUNCATION_MARKER
from .native_tools import TOOL_CODECS
from .provider import Provider

ConversionHandler = Callable[[ConversationMessage], ConversationMessage]


def _now() -> datetime:
    return datetime.now(timezone.utc)


class MessageConverter:
    """Pairwise message conversion between backends.

    Every pair has a default conversion. Handlers registered with
    :meth:`register_conversion_handler` replace it for one ordered pair.
    """

    def __init__(self) -> None:
        self._handlers: Dict[Tuple[Provider, Provider], ConversionHandler] = {}
        self.logger = get_logger("translation.converter")
        self.register_conversion_handler(Provider.OPENAI, Provider.GROK, self._openai_to_grok)

    def register_conversion_handler(
        self,
        source: Union[Provider, str],
        target: Union[Provider, str],
        handler: ConversionHandler,
    ) -> None:
        self._handlers[(Provider.parse(source), Provider.parse(target))] = handler

    def has_handler(self, source: Union[Provider, str], target: Union[Provider, str]) -> bool:
        return (Provider.parse(source), Provider.parse(target)) in self._handlers

    def convert_message(
        self,
        message: ConversationMessage,
        source: Union[Provider, str],
        target: Union[Provider, str],
    ) -> ConversationMessage:
        """Return ``message`` rewritten for ``target``.

        The same backend on both sides yields an untagged copy.

        Raises:
            FormatError: Unsupported backend or malformed native tool payload.
        """
        src = Provider.parse(source)
        dst = Provider.parse(target)
        if src is dst:
            return message.copy()
        handler = self._handlers.get((src, dst))
        if handler is not None:
            return handler(message)
        return self._default_conversion(message, src, dst)

    def convert_history(
        self,
        messages: Sequence[ConversationMessage],
        source: Union[Provider, str],
        target: Union[Provider, str],
    ) -> List[ConversationMessage]:
        """Convert every message and return them ordered by timestamp."""
        converted = [self.convert_message(m, source, target) for m in messages]
        return sorted(converted, key=lambda m: m.timestamp)

    # ----------------------------------------------------------------- internals

    def _decode(
        self, message: ConversationMessage, source: Provider
    ) -> Tuple[Optional[ToolInvocation], Optional[ToolResult]]:
        codec = TOOL_CODECS[source]
        payload = message.native_tool_payload
        if message.tool_invocation is not None:
            return (codec.decode_invocation(payload) if payload else message.tool_invocation), None
        if message.tool_result is not None:
            return None, (codec.decode_result(payload) if payload else message.tool_result)
        return None, None

    def _transcode(self, message: ConversationMessage, source: Provider, target: Provider) -> ConversationMessage:
        call, result = self._decode(message, source)
        codec = TOOL_CODECS[target]
        native = None
        if call is not None:
            native = codec.encode_invocation(call)
        elif result is not None:
            native = codec.encode_result(result)
        return message.copy(tool_invocation=call, tool_result=result, native_tool_payload=native)

    def _apply_target_limits(
        self, message: ConversationMessage, source: Provider, target: Provider
    ) -> ConversationMessage:
        truncated = False
        original_length = None
        content = message.content
        if target is Provider.GROK and content is not None and len(content) > GROK_MAX_CONTENT_LENGTH:
            original_length = len(content)
            content = content[:GROK_MAX_CONTENT_LENGTH] + GROK_TRUNCATION_MARKER
            truncated = True
            self.logger.info(
                "Truncated message content for Grok",
                extra={"message_id": message.id, "original_length": original_length},
            )
        metadata = ConversionMetadata(
            from_provider=source.value,
            to_provider=target.value,
            converted_at=_now(),
            truncated=truncated,
            original_length=original_length,
        )
        return message.copy(content=content, conversion_metadata=metadata)

    def _default_conversion(
        self, message: ConversationMessage, source: Provider, target: Provider
    ) -> ConversationMessage:
        return self._apply_target_limits(self._transcode(message, source, target), source, target)

    def _openai_to_grok(self, message: ConversationMessage) -> ConversationMessage:
        normal = self._transcode(message, Provider.OPENAI, Provider.ANTHROPIC)
        grok = self._transcode(normal, Provider.ANTHROPIC, Provider.GROK)
        return self._apply_target_limits(grok, Provider.OPENAI, Provider.GROK)


__all__ = ["MessageConverter", "ConversionHandler"]
