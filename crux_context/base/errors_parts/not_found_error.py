"""Lookup failure for sessions, providers and models."""
from __future__ import annotations

from dataclasses import dataclass, field

from .context_error import ContextEngineError
from .error_code import ErrorCode


@dataclass
class NotFoundError(ContextEngineError, LookupError):
    """A session, provider or model could not be resolved."""

    code: ErrorCode = field(default=ErrorCode.NOT_FOUND)


__all__ = ["NotFoundError"]
