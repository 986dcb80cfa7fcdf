"""Closed set of backends the engine can format for."""
from __future__ import annotations

from enum import Enum
from typing import Union

from ..base.errors import FormatError


class Provider(str, Enum):
    """Supported backends."""

    ANTHROPIC = "anthropic"
    OPENAI = "openai"
    GROK = "grok"

    @classmethod
    def parse(cls, value: Union["Provider", str]) -> "Provider":
        """Return the member for ``value`` or raise ``FormatError``."""
        if isinstance(value, Provider):
            return value
        key = (value or "").strip().lower()
        try:
            return cls(key)
        except ValueError:
            raise FormatError(f"unsupported provider: {value!r}", provider=str(value)) from None


__all__ = ["Provider"]
