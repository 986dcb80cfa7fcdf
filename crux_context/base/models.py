"""
Context engine domain models (DTOs) public surface.

This module re-exports the one-class-per-file implementations under
``crux_context.base.models_parts`` so callers import from a single location.
"""

from .models_parts.tool_call import ToolInvocation, ToolResult
from .models_parts.conversion_metadata import ConversionMetadata
from .models_parts.message import ConversationMessage, Role, ROLES
from .models_parts.context_settings import (
    ContextSettings,
    CostOptimizationLevel,
    TruncationStrategy,
)
from .models_parts.token_metrics import TokenMetrics
from .models_parts.cost_savings import CostSavingsEntry, CostSavingsLedger
from .models_parts.model_capability import ModelCapability
from .models_parts.session import ProviderSwitch, Session

__all__ = [
    "ToolInvocation",
    "ToolResult",
    "ConversionMetadata",
    "ConversationMessage",
    "Role",
    "ROLES",
    "ContextSettings",
    "CostOptimizationLevel",
    "TruncationStrategy",
    "TokenMetrics",
    "CostSavingsEntry",
    "CostSavingsLedger",
    "ModelCapability",
    "ProviderSwitch",
    "Session",
]
