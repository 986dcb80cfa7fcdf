"""Compatibility scoring and custom checks."""

from __future__ import annotations

import pytest

from crux_context.compatibility import (
    CompatibilityChecker,
    CompatibilityIssue,
    CompatibilitySeverity,
    compatibility_score,
    is_compatible,
)


def _types(result):
    return [i.type for i in result.issues]


def test_opus_to_gpt35_is_a_compatible_downgrade(checker: CompatibilityChecker) -> None:
    result = checker.check_compatibility("anthropic", "claude-3-opus-20240229", "openai", "gpt-3.5-turbo")
    window = result.issues[0]
    assert window.type == "context_window"  # nosec B101
    assert window.severity is CompatibilitySeverity.WARNING  # nosec B101
    assert window.metadata["reduction_percent"] == 92  # nosec B101
    assert "92%" in window.description  # nosec B101
    assert _types(result) == ["context_window", "tool_format", "vision_support", "system_message_format"]  # nosec B101
    assert result.score == 68  # nosec B101
    assert result.compatible is True  # nosec B101


def test_extreme_window_reduction_is_an_error(checker: CompatibilityChecker) -> None:
    result = checker.check_compatibility("anthropic", "claude-3-opus-20240229", "openai", "gpt-4")
    assert result.issues[0].severity is CompatibilitySeverity.ERROR  # nosec B101
    assert result.issues[0].metadata["reduction_percent"] == 96  # nosec B101
    assert result.score == 48  # nosec B101
    assert result.compatible is False  # nosec B101


def test_same_provider_upgrade_has_no_issues(checker: CompatibilityChecker) -> None:
    result = checker.check_compatibility("anthropic", "claude-3-haiku-20240307", "anthropic", "claude-3-opus-20240229")
    assert result.issues == [] and result.score == 100 and result.compatible  # nosec B101


def test_vision_loss_is_directional(checker: CompatibilityChecker) -> None:
    forward = checker.check_compatibility("openai", "gpt-4o", "grok", "grok-2-1212")
    backward = checker.check_compatibility("grok", "grok-2-1212", "openai", "gpt-4o")
    assert "vision_support" in _types(forward)  # nosec B101
    assert "vision_support" not in _types(backward)  # nosec B101


def test_unknown_model_skips_capability_checks(checker: CompatibilityChecker) -> None:
    result = checker.check_compatibility("anthropic", "mystery", "openai", "gpt-4o")
    assert _types(result) == ["tool_format", "system_message_format"]  # nosec B101
    assert result.issues[0].metadata == {
        "source_format": "Anthropic tool format",
        "target_format": "OpenAI function calling format",
    }  # nosec B101
    assert result.score == 88  # nosec B101


def _audio_check(registry, source_provider, source_model, target_provider, target_model):
    return CompatibilityIssue(
        type="audio_support",
        severity=CompatibilitySeverity.ERROR,
        description="Target drops audio",
        source_provider=source_provider,
        target_provider=target_provider,
        source_model=source_model,
        target_model=target_model,
    )


def test_pair_scoped_check_runs_only_for_its_pair(checker: CompatibilityChecker) -> None:
    checker.register_check(_audio_check, source_provider="OpenAI", target_provider="grok")
    scoped = checker.check_compatibility("openai", "gpt-4o", "grok", "grok-2-vision-1212")
    other = checker.check_compatibility("anthropic", "claude-3-opus-20240229", "grok", "grok-2-vision-1212")
    assert _types(scoped)[-1] == "audio_support"  # nosec B101
    assert "audio_support" not in _types(other)  # nosec B101


def test_global_check_runs_for_every_pair(checker: CompatibilityChecker) -> None:
    checker.register_check(_audio_check)
    result = checker.check_compatibility("anthropic", "claude-3-opus-20240229", "anthropic", "claude-3-sonnet-20240229")
    assert _types(result) == ["audio_support"]  # nosec B101
    assert result.score == 70 and result.compatible  # nosec B101


def test_half_scoped_registration_is_rejected(checker: CompatibilityChecker) -> None:
    with pytest.raises(ValueError):
        checker.register_check(_audio_check, source_provider="openai")


def test_score_is_clamped_and_error_floor_applies() -> None:
    errors = [_audio_check(None, "a", "m", "b", "n")] * 5
    assert compatibility_score(errors) == 0  # nosec B101
    assert is_compatible(errors[:1], 70) is True  # nosec B101
    assert is_compatible(errors[:1], 45) is False  # nosec B101
    assert is_compatible([], 59) is False  # nosec B101
