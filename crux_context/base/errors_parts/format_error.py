"""Rejected backend identifiers and malformed native payloads."""
from __future__ import annotations

from dataclasses import dataclass, field

from .context_error import ContextEngineError
from .error_code import ErrorCode


@dataclass
class FormatError(ContextEngineError, ValueError):
    """A backend identifier or native payload could not be interpreted."""

    code: ErrorCode = field(default=ErrorCode.FORMAT)


__all__ = ["FormatError"]
