"""Token counting helpers."""

from .counter import (
    DEFAULT_ENCODING,
    ApproximateTokenCounter,
    TiktokenCounter,
    TokenCounter,
    count_message_tokens,
)

__all__ = [
    "TokenCounter",
    "ApproximateTokenCounter",
    "TiktokenCounter",
    "count_message_tokens",
    "DEFAULT_ENCODING",
]
