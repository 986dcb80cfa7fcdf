"""Compatibility and migration DTOs."""
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Dict, List


class CompatibilitySeverity(str, Enum):
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class IssueType(str, Enum):
    """Issue types raised by the built-in checks; custom checks may use any string."""

    CONTEXT_WINDOW = "context_window"
    TOOL_FORMAT = "tool_format"
    VISION_SUPPORT = "vision_support"
    SYSTEM_MESSAGE_FORMAT = "system_message_format"


@dataclass(frozen=True)
class CompatibilityIssue:
    """One finding about a source/target model pair."""

    type: str
    severity: CompatibilitySeverity
    description: str
    source_provider: str
    target_provider: str
    source_model: str
    target_model: str
    metadata: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["severity"] = self.severity.value
        return data


@dataclass(frozen=True)
class CompatibilityResult:
    compatible: bool
    issues: List[CompatibilityIssue]
    score: int

    def to_dict(self) -> Dict[str, Any]:
        return {"compatible": self.compatible, "score": self.score, "issues": [i.to_dict() for i in self.issues]}


@dataclass(frozen=True)
class MigrationPlanOptions:
    """Caller-supplied facts about the live session.

    Attributes:
        current_context_size: Tokens currently in the session.
        uses_tools: Whether the session has tool turns.
        has_images: Whether the session references images.
        extra: Free-form facts for custom checks.
    """

    current_context_size: int = 0
    uses_tools: bool = False
    has_images: bool = False
    extra: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class TokenImpact:
    potential_token_loss: int = 0
    context_loss_percentage: int = 0


@dataclass
class MigrationPlan:
    """Actions and expected losses for switching a session to another model."""

    required_actions: List[str] = field(default_factory=list)
    recommended_actions: List[str] = field(default_factory=list)
    estimated_token_impact: TokenImpact = field(default_factory=TokenImpact)
    potential_loss_areas: List[str] = field(default_factory=list)
    addressed_issues: List[CompatibilityIssue] = field(default_factory=list)
    remaining_issues: List[CompatibilityIssue] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "required_actions": list(self.required_actions),
            "recommended_actions": list(self.recommended_actions),
            "estimated_token_impact": asdict(self.estimated_token_impact),
            "potential_loss_areas": list(self.potential_loss_areas),
            "addressed_issues": [i.to_dict() for i in self.addressed_issues],
            "remaining_issues": [i.to_dict() for i in self.remaining_issues],
        }


__all__ = [
    "CompatibilitySeverity",
    "IssueType",
    "CompatibilityIssue",
    "CompatibilityResult",
    "MigrationPlanOptions",
    "TokenImpact",
    "MigrationPlan",
]
