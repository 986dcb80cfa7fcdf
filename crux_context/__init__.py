"""crux_context package

Conversation context engine for interchangeable LLM backends.

Purpose:
    Keep multi-turn conversations inside each backend's context window while
    preserving coherence: translate stored history into backend wire shapes,
    track token usage, prune or compress history under a budget, and plan
    migrations when a session switches backend.

Public API (re-exported):
    - Version: ``__version__``
    - Exceptions: :class:`ContextEngineError` and its subclasses, :class:`ErrorCode`
    - Models: :class:`ConversationMessage`, :class:`Session`, :class:`ContextSettings`, ...
    - Components: :class:`MessageTranslator`, :class:`MessageConverter`,
      :class:`ContextWindowTracker`, :class:`ContextOptimizationEngine`,
      :class:`CompatibilityChecker`, :class:`SessionManager`
    - Composition: :func:`build_container`
"""

from .base.errors import (
    ConfigurationError,
    ContextEngineError,
    ErrorCode,
    FormatError,
    IncompatibleSwitchError,
    NotFoundError,
)
from .base.models import (
    ContextSettings,
    ConversationMessage,
    ConversionMetadata,
    CostSavingsLedger,
    ModelCapability,
    ProviderSwitch,
    Session,
    TokenMetrics,
    ToolInvocation,
    ToolResult,
)
from .base.registry import ModelRegistry, ModelSelectionCriteria, build_default_registry
from .base.tokens import ApproximateTokenCounter, TiktokenCounter, TokenCounter
from .compatibility import CompatibilityChecker, CompatibilitySeverity, MigrationPlan, MigrationPlanOptions
from .di import ContextEngineContainer, build_container
from .optimization import CallableSummarizer, ContextOptimizationEngine, Summarizer, SummaryResult
from .session import SessionManager
from .tracking import ContextWindowTracker, CostEstimate
from .translation import MessageConverter, MessageTranslator, Provider, WirePayload

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "ErrorCode",
    "ContextEngineError",
    "NotFoundError",
    "FormatError",
    "ConfigurationError",
    "IncompatibleSwitchError",
    "ContextSettings",
    "ConversationMessage",
    "ConversionMetadata",
    "CostSavingsLedger",
    "ModelCapability",
    "ProviderSwitch",
    "Session",
    "TokenMetrics",
    "ToolInvocation",
    "ToolResult",
    "ModelRegistry",
    "ModelSelectionCriteria",
    "build_default_registry",
    "TokenCounter",
    "ApproximateTokenCounter",
    "TiktokenCounter",
    "Provider",
    "WirePayload",
    "MessageTranslator",
    "MessageConverter",
    "ContextWindowTracker",
    "CostEstimate",
    "ContextOptimizationEngine",
    "Summarizer",
    "SummaryResult",
    "CallableSummarizer",
    "CompatibilityChecker",
    "CompatibilitySeverity",
    "MigrationPlan",
    "MigrationPlanOptions",
    "SessionManager",
    "ContextEngineContainer",
    "build_container",
]
