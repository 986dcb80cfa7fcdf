"""Built-in compatibility checks.

Each check receives the registry and a source/target pair and returns at
most one issue. A model missing from the registry makes the check report
nothing instead of failing the whole evaluation.
"""
from __future__ import annotations

import logging
from typing import Callable, Optional

from ..base.errors import NotFoundError
from ..base.logging import get_logger, log_event
from ..base.models import ModelCapability
from ..base.registry import ModelRegistry
from ..config.defaults import CONTEXT_REDUCTION_ERROR_PERCENT
from .models import CompatibilityIssue, CompatibilitySeverity, IssueType

CompatibilityCheck = Callable[[ModelRegistry, str, str, str, str], Optional[CompatibilityIssue]]

TOOL_FORMATS = {
    "anthropic": "Anthropic tool format",
    "openai": "OpenAI function calling format",
    "grok": "Grok tool format",
}
UNKNOWN_TOOL_FORMAT = "Unknown format"

logger = get_logger("compatibility")


def tool_format_name(provider: str) -> str:
    return TOOL_FORMATS.get(provider.strip().lower(), UNKNOWN_TOOL_FORMAT)


def lookup_capability(registry: ModelRegistry, provider: str, model: str) -> Optional[ModelCapability]:
    try:
        return registry.get_model(provider, model)
    except NotFoundError:
        log_event(logger, "compatibility.lookup_skipped", level=logging.DEBUG, provider=provider, model=model)
        return None


def reduction_percent(source_window: int, target_window: int) -> int:
    return round((source_window - target_window) / source_window * 100)


def check_context_window(
    registry: ModelRegistry, source_provider: str, source_model: str, target_provider: str, target_model: str
) -> Optional[CompatibilityIssue]:
    source = lookup_capability(registry, source_provider, source_model)
    target = lookup_capability(registry, target_provider, target_model)
    if source is None or target is None or target.context_window >= source.context_window:
        return None
    percent = reduction_percent(source.context_window, target.context_window)
    severity = CompatibilitySeverity.ERROR if percent > CONTEXT_REDUCTION_ERROR_PERCENT else CompatibilitySeverity.WARNING
    return CompatibilityIssue(
        type=IssueType.CONTEXT_WINDOW.value,
        severity=severity,
        description=(
            f"Target model has a {percent}% smaller context window "
            f"({target.context_window} vs {source.context_window} tokens)"
        ),
        source_provider=source_provider,
        target_provider=target_provider,
        source_model=source_model,
        target_model=target_model,
        metadata={
            "source_context_window": source.context_window,
            "target_context_window": target.context_window,
            "reduction_percent": percent,
        },
    )


def check_tool_format(
    registry: ModelRegistry, source_provider: str, source_model: str, target_provider: str, target_model: str
) -> Optional[CompatibilityIssue]:
    if source_provider == target_provider:
        return None
    source_format = tool_format_name(source_provider)
    target_format = tool_format_name(target_provider)
    return CompatibilityIssue(
        type=IssueType.TOOL_FORMAT.value,
        severity=CompatibilitySeverity.WARNING,
        description=f"Tool format differences: {source_format} to {target_format}",
        source_provider=source_provider,
        target_provider=target_provider,
        source_model=source_model,
        target_model=target_model,
        metadata={"source_format": source_format, "target_format": target_format},
    )


def check_vision_support(
    registry: ModelRegistry, source_provider: str, source_model: str, target_provider: str, target_model: str
) -> Optional[CompatibilityIssue]:
    source = lookup_capability(registry, source_provider, source_model)
    target = lookup_capability(registry, target_provider, target_model)
    if source is None or target is None or not source.supports_images or target.supports_images:
        return None
    return CompatibilityIssue(
        type=IssueType.VISION_SUPPORT.value,
        severity=CompatibilitySeverity.WARNING,
        description="Source model supports vision, but target model does not",
        source_provider=source_provider,
        target_provider=target_provider,
        source_model=source_model,
        target_model=target_model,
    )


def check_system_message_format(
    registry: ModelRegistry, source_provider: str, source_model: str, target_provider: str, target_model: str
) -> Optional[CompatibilityIssue]:
    if source_provider == target_provider:
        return None
    return CompatibilityIssue(
        type=IssueType.SYSTEM_MESSAGE_FORMAT.value,
        severity=CompatibilitySeverity.INFO,
        description="Different providers may handle system messages differently",
        source_provider=source_provider,
        target_provider=target_provider,
        source_model=source_model,
        target_model=target_model,
    )


DEFAULT_CHECKS = (
    check_context_window,
    check_tool_format,
    check_vision_support,
    check_system_message_format,
)


__all__ = [
    "CompatibilityCheck",
    "DEFAULT_CHECKS",
    "TOOL_FORMATS",
    "UNKNOWN_TOOL_FORMAT",
    "tool_format_name",
    "lookup_capability",
    "reduction_percent",
    "check_context_window",
    "check_tool_format",
    "check_vision_support",
    "check_system_message_format",
]
