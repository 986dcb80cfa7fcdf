"""Token counting for stored conversation messages.

Counts are assigned once, when the session facade creates a message; every
later computation sums the stored ``tokens`` fields. Two counters are
provided: a character-based estimate (the default, no I/O) and a tiktoken
counter for OpenAI-style tokenization.
"""
from __future__ import annotations

import json
import math
from typing import Any, Optional, Protocol, runtime_checkable

import tiktoken

from ..logging import get_logger
from ..models import ToolInvocation, ToolResult

# Default encoding for models
DEFAULT_ENCODING = "cl100k_base"  # Used by GPT-4, GPT-3.5-turbo

CHARS_PER_TOKEN = 4


@runtime_checkable
class TokenCounter(Protocol):
    """Counts the tokens in a piece of text."""

    def count(self, text: str, model_hint: Optional[str] = None) -> int:
        ...


class ApproximateTokenCounter:
    """Estimate tokens as ``ceil(len(text) / 4)``."""

    def count(self, text: str, model_hint: Optional[str] = None) -> int:
        if not text:
            return 0
        return math.ceil(len(text) / CHARS_PER_TOKEN)


class TiktokenCounter:
    """Count tokens with a tiktoken encoding, falling back to a char estimate.

    The encoding is loaded on first use. When it cannot be loaded (for
    example, the BPE file is not cached and there is no network) a warning is
    logged once and every count uses ``len(text) // 4``.

    Attributes:
        encoding_name: Tiktoken encoding name.
    """

    def __init__(self, encoding_name: str = DEFAULT_ENCODING) -> None:
        self.encoding_name = encoding_name
        self.logger = get_logger("tokens")
        self._encoding: Any = None
        self._load_failed = False

    def _get_encoding(self) -> Any:
        if self._encoding is None and not self._load_failed:
            try:
                self._encoding = tiktoken.get_encoding(self.encoding_name)
            except Exception as e:  # noqa: BLE001 - tiktoken surfaces network and IO errors
                self._load_failed = True
                self.logger.warning(
                    "Failed to load tiktoken encoding",
                    extra={"encoding": self.encoding_name, "error": str(e)},
                )
        return self._encoding

    def count(self, text: str, model_hint: Optional[str] = None) -> int:
        if not text:
            return 0
        encoding = self._get_encoding()
        if encoding is None:
            return len(text) // CHARS_PER_TOKEN
        try:
            return len(encoding.encode(text))
        except Exception as e:  # noqa: BLE001
            self.logger.warning(
                "Token counting failed, using character estimate",
                extra={"error": str(e)},
            )
            return len(text) // CHARS_PER_TOKEN


def count_message_tokens(
    counter: TokenCounter,
    content: Optional[str],
    *,
    tool_invocation: Optional[ToolInvocation] = None,
    tool_result: Optional[ToolResult] = None,
    model_hint: Optional[str] = None,
) -> int:
    """Estimate the tokens of a message from its content and tool payload."""
    total = counter.count(content or "", model_hint)
    if tool_invocation is not None:
        total += counter.count(tool_invocation.tool_name, model_hint)
        total += counter.count(json.dumps(tool_invocation.parameters, sort_keys=True), model_hint)
    if tool_result is not None:
        total += counter.count(tool_result.content, model_hint)
    return total


__all__ = [
    "TokenCounter",
    "ApproximateTokenCounter",
    "TiktokenCounter",
    "count_message_tokens",
    "DEFAULT_ENCODING",
]
