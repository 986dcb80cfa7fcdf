"""Invalid settings and unusable strategy selections."""
from __future__ import annotations

from dataclasses import dataclass, field

from .context_error import ContextEngineError
from .error_code import ErrorCode


@dataclass
class ConfigurationError(ContextEngineError):
    """Required settings are missing or invalid and no safe default applies."""

    code: ErrorCode = field(default=ErrorCode.CONFIGURATION)


__all__ = ["ConfigurationError"]
