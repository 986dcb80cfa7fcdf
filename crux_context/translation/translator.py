"""Message translator: stored history to backend wire payload.

The translator owns one formatter per :class:`Provider` member. The table is
checked for completeness at construction, so a backend can never be
selected without a formatter.
"""
from __future__ import annotations

from typing import Dict, Mapping, Optional, Sequence, Union

from ..base.errors import ConfigurationError
from ..base.logging import get_logger, log_event
from ..base.models import ConversationMessage
from .formatters import AnthropicFormatter, GrokFormatter, MessageFormatter, OpenAIFormatter
from .payload import WirePayload
from .provider import Provider


def default_formatters() -> Dict[Provider, MessageFormatter]:
    return {
        Provider.ANTHROPIC: AnthropicFormatter(),
        Provider.OPENAI: OpenAIFormatter(),
        Provider.GROK: GrokFormatter(),
    }


class MessageTranslator:
    """Translate stored messages into a backend's request shape."""

    def __init__(self, formatters: Optional[Mapping[Provider, MessageFormatter]] = None) -> None:
        table = dict(default_formatters() if formatters is None else formatters)
        missing = [p.value for p in Provider if p not in table]
        if missing:
            raise ConfigurationError(f"no formatter registered for: {', '.join(missing)}")
        self._formatters: Dict[Provider, MessageFormatter] = table
        self.logger = get_logger("translation")

    def register_formatter(self, provider: Union[Provider, str], formatter: MessageFormatter) -> None:
        """Replace the formatter used for ``provider``."""
        self._formatters[Provider.parse(provider)] = formatter

    def formatter_for(self, provider: Union[Provider, str]) -> MessageFormatter:
        return self._formatters[Provider.parse(provider)]

    def translate(self, messages: Sequence[ConversationMessage], provider: Union[Provider, str]) -> WirePayload:
        """Format ``messages`` for ``provider``.

        Pure: the input messages are not modified, and equal input yields an
        equal payload.

        Raises:
            FormatError: ``provider`` is not a supported backend.
        """
        target = Provider.parse(provider)
        payload = self._formatters[target].format(messages)
        log_event(
            self.logger,
            "translate.complete",
            provider=target.value,
            input_messages=len(messages),
            wire_messages=len(payload.messages),
            system_hoisted=payload.system is not None,
        )
        return payload


__all__ = ["MessageTranslator", "default_formatters"]
