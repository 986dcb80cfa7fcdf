"""Errors surface for the context engine.

Thin aggregator re-exporting the error taxonomy and exception types from
``errors_parts`` so callers import from a single stable location.
"""
from __future__ import annotations

from .errors_parts import (
    ConfigurationError,
    ContextEngineError,
    ErrorCode,
    FormatError,
    IncompatibleSwitchError,
    NotFoundError,
)

__all__ = [
    "ErrorCode",
    "ContextEngineError",
    "NotFoundError",
    "FormatError",
    "ConfigurationError",
    "IncompatibleSwitchError",
]
