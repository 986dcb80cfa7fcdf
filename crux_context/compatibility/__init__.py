"""Compatibility scoring and migration planning between backends."""

from .checker import (
    SEVERITY_PENALTY,
    CompatibilityChecker,
    compatibility_score,
    is_compatible,
    loss_area_for,
    pair_key,
    remediation_for,
)
from .checks import DEFAULT_CHECKS, CompatibilityCheck, tool_format_name
from .models import (
    CompatibilityIssue,
    CompatibilityResult,
    CompatibilitySeverity,
    IssueType,
    MigrationPlan,
    MigrationPlanOptions,
    TokenImpact,
)

__all__ = [
    "CompatibilityChecker",
    "CompatibilityCheck",
    "DEFAULT_CHECKS",
    "CompatibilityIssue",
    "CompatibilityResult",
    "CompatibilitySeverity",
    "IssueType",
    "MigrationPlan",
    "MigrationPlanOptions",
    "TokenImpact",
    "SEVERITY_PENALTY",
    "compatibility_score",
    "is_compatible",
    "loss_area_for",
    "pair_key",
    "remediation_for",
    "tool_format_name",
]
