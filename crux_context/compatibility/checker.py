"""Compatibility checker and migration planner.

Runs the default checks plus registered custom checks over a
source/target model pair, scores the findings and turns them into a
migration plan. Custom checks are either global (every pair) or scoped to
one ordered provider pair; scoped checks run after the global ones.
"""
from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Sequence

from ..base.logging import get_logger, log_event
from ..base.registry import ModelRegistry
from ..config.defaults import COMPATIBILITY_ERROR_FLOOR_SCORE, COMPATIBILITY_MIN_SCORE
from .checks import DEFAULT_CHECKS, CompatibilityCheck, lookup_capability
from .models import (
    CompatibilityIssue,
    CompatibilityResult,
    CompatibilitySeverity,
    IssueType,
    MigrationPlan,
    MigrationPlanOptions,
    TokenImpact,
)

SEVERITY_PENALTY = {
    CompatibilitySeverity.ERROR: 30,
    CompatibilitySeverity.WARNING: 10,
    CompatibilitySeverity.INFO: 2,
}

# Issue types a switch can fix without losing information.
NOT_AUTO_ADDRESSABLE = frozenset({IssueType.VISION_SUPPORT.value})


def pair_key(source_provider: str, target_provider: str) -> str:
    return f"{source_provider}->{target_provider}"


def _norm(provider: str) -> str:
    return provider.strip().lower()


def compatibility_score(issues: Iterable[CompatibilityIssue]) -> int:
    score = 100 - sum(SEVERITY_PENALTY[i.severity] for i in issues)
    return max(0, min(100, score))


def is_compatible(issues: Sequence[CompatibilityIssue], score: int) -> bool:
    has_error = any(i.severity is CompatibilitySeverity.ERROR for i in issues)
    return not (has_error and score < COMPATIBILITY_ERROR_FLOOR_SCORE) and score >= COMPATIBILITY_MIN_SCORE


def remediation_for(issue: CompatibilityIssue, options: MigrationPlanOptions) -> str:
    meta = issue.metadata
    if issue.type == IssueType.CONTEXT_WINDOW.value:
        return (
            f"Reduce context size from {options.current_context_size} tokens to fit target model's "
            f"context window of {meta.get('target_context_window')} tokens"
        )
    if issue.type == IssueType.TOOL_FORMAT.value:
        return f"Convert tool formats from {meta.get('source_format')} to {meta.get('target_format')}"
    if issue.type == IssueType.VISION_SUPPORT.value:
        return "Remove image references or replace with text descriptions before switching"
    if issue.type == IssueType.SYSTEM_MESSAGE_FORMAT.value:
        return f"Review system messages for compatibility with {issue.target_provider}"
    return f"Address compatibility issue: {issue.description}"


def loss_area_for(issue: CompatibilityIssue) -> Optional[str]:
    if issue.type == IssueType.CONTEXT_WINDOW.value:
        return f"Historical conversation context ({issue.metadata.get('reduction_percent')}% reduction)"
    if issue.type == IssueType.VISION_SUPPORT.value:
        return "Visual information in images"
    return None


class CompatibilityChecker:
    """Scores model pairs and plans migrations between them."""

    def __init__(self, registry: ModelRegistry, *, include_default_checks: bool = True) -> None:
        self.registry = registry
        self._global_checks: List[CompatibilityCheck] = list(DEFAULT_CHECKS) if include_default_checks else []
        self._pair_checks: Dict[str, List[CompatibilityCheck]] = {}
        self.logger = get_logger("compatibility")

    def register_check(
        self,
        check: CompatibilityCheck,
        *,
        source_provider: Optional[str] = None,
        target_provider: Optional[str] = None,
    ) -> None:
        """Register ``check`` globally, or for one ordered provider pair.

        Raises:
            ValueError: Only one side of the pair was given.
        """
        if source_provider is None and target_provider is None:
            self._global_checks.append(check)
            return
        if source_provider is None or target_provider is None:
            raise ValueError("pair-scoped checks need both source_provider and target_provider")
        key = pair_key(_norm(source_provider), _norm(target_provider))
        self._pair_checks.setdefault(key, []).append(check)

    def checks_for(self, source_provider: str, target_provider: str) -> List[CompatibilityCheck]:
        key = pair_key(_norm(source_provider), _norm(target_provider))
        return self._global_checks + self._pair_checks.get(key, [])

    def check_compatibility(
        self, source_provider: str, source_model: str, target_provider: str, target_model: str
    ) -> CompatibilityResult:
        source_provider, target_provider = _norm(source_provider), _norm(target_provider)
        issues: List[CompatibilityIssue] = []
        for check in self.checks_for(source_provider, target_provider):
            issue = check(self.registry, source_provider, source_model, target_provider, target_model)
            if issue is not None:
                issues.append(issue)
        score = compatibility_score(issues)
        result = CompatibilityResult(compatible=is_compatible(issues, score), issues=issues, score=score)
        log_event(
            self.logger,
            "compatibility.check",
            pair=pair_key(source_provider, target_provider),
            source_model=source_model,
            target_model=target_model,
            score=score,
            compatible=result.compatible,
            issues=[i.type for i in issues],
        )
        return result

    def _token_impact(
        self,
        source_provider: str,
        source_model: str,
        target_provider: str,
        target_model: str,
        current_size: int,
    ) -> TokenImpact:
        source = lookup_capability(self.registry, source_provider, source_model)
        target = lookup_capability(self.registry, target_provider, target_model)
        if source is None or target is None:
            return TokenImpact()
        if target.context_window < source.context_window and current_size > target.context_window:
            loss = min(current_size - target.context_window, current_size)
            return TokenImpact(potential_token_loss=loss, context_loss_percentage=round(loss / current_size * 100))
        return TokenImpact()

    def get_migration_plan(
        self,
        source_provider: str,
        source_model: str,
        target_provider: str,
        target_model: str,
        options: Optional[MigrationPlanOptions] = None,
    ) -> MigrationPlan:
        """Classify the pair's issues into actions, addressed and remaining issues."""
        options = options or MigrationPlanOptions()
        result = self.check_compatibility(source_provider, source_model, target_provider, target_model)
        plan = MigrationPlan()
        for issue in result.issues:
            if issue.severity is CompatibilitySeverity.ERROR:
                plan.required_actions.append(remediation_for(issue, options))
                if issue.type in NOT_AUTO_ADDRESSABLE:
                    plan.remaining_issues.append(issue)
                    area = loss_area_for(issue)
                    if area:
                        plan.potential_loss_areas.append(area)
                else:
                    plan.addressed_issues.append(issue)
            elif issue.severity is CompatibilitySeverity.WARNING:
                plan.recommended_actions.append(remediation_for(issue, options))
                plan.addressed_issues.append(issue)
            else:
                plan.addressed_issues.append(issue)
        plan.estimated_token_impact = self._token_impact(
            _norm(source_provider), source_model, _norm(target_provider), target_model, options.current_context_size
        )
        return plan


__all__ = [
    "CompatibilityChecker",
    "compatibility_score",
    "is_compatible",
    "pair_key",
    "remediation_for",
    "loss_area_for",
    "SEVERITY_PENALTY",
]
