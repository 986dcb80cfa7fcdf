"""Base layer: DTOs, errors, logging, token counting and the model registry."""

from .errors import (
    ConfigurationError,
    ContextEngineError,
    ErrorCode,
    FormatError,
    IncompatibleSwitchError,
    NotFoundError,
)
from .models import (
    ContextSettings,
    ConversationMessage,
    ConversionMetadata,
    CostSavingsEntry,
    CostSavingsLedger,
    ModelCapability,
    ProviderSwitch,
    Session,
    TokenMetrics,
    ToolInvocation,
    ToolResult,
)

__all__ = [
    "ErrorCode",
    "ContextEngineError",
    "NotFoundError",
    "FormatError",
    "ConfigurationError",
    "IncompatibleSwitchError",
    "ContextSettings",
    "ConversationMessage",
    "ConversionMetadata",
    "CostSavingsEntry",
    "CostSavingsLedger",
    "ModelCapability",
    "ProviderSwitch",
    "Session",
    "TokenMetrics",
    "ToolInvocation",
    "ToolResult",
]
