"""crux_context.config.defaults
=============================

Central place for the stable default values used across the context engine.
These defaults can be overridden via environment variables or an external
configuration file. Only plain constants live here.
"""

from __future__ import annotations

from typing import Dict, Tuple

# ---- Context settings ----

DEFAULT_CONTEXT_SETTINGS: Dict[str, object] = {
    "max_token_limit": None,
    "auto_truncate": True,
    "preserve_system_messages": True,
    "preserve_recent_messages": 2,
    "truncation_strategy": "oldest-first",
    "cost_optimization_mode": False,
    "cost_optimization_level": "balanced",
    "preserve_questions_in_cost_mode": True,
    "summarization_batch_size": 3,
    "min_compression_ratio": 1.5,
}

# Default optimization target as a fraction of the token budget.
OPTIMIZATION_TARGET_RATIO = 0.7

# ---- Context window usage ladder (percent used) ----

USAGE_MONITOR_PERCENT = 70.0
USAGE_OPTIMIZE_SOON_PERCENT = 85.0
USAGE_CRITICAL_PERCENT = 95.0

# ---- Cost-tier pruning ----

# Fraction of messages targeted by each level.
COST_LEVEL_TARGET_RATIO: Dict[str, float] = {"minimal": 0.8, "balanced": 0.6, "aggressive": 0.3}
# Fraction of pruning candidates kept (most recent first) by each level.
COST_LEVEL_KEEP_FRACTION: Dict[str, float] = {"minimal": 0.75, "balanced": 0.5, "aggressive": 0.2}
COST_MIN_TARGET_MESSAGES = 2
COST_MAX_REINJECTED_QUESTIONS = 3
# USD per 1000 tokens used for the savings ledger.
COST_PER_1K_TOKENS = 0.01
COST_MIN_TOKENS_SAVED = 1
COST_MIN_COST_SAVED = 0.001

# ---- Compatibility ----

CONTEXT_REDUCTION_ERROR_PERCENT = 95
COMPATIBILITY_MIN_SCORE = 60
COMPATIBILITY_ERROR_FLOOR_SCORE = 50

# ---- Translation / conversion ----

GROK_MAX_CONTENT_LENGTH = 32000
GROK_TRUNCATION_MARKER = "... [truncated for Grok compatibility]"
TOOL_INVOCATION_FALLBACK_TEXT = "I'll use a tool to help with that."

# ---- Summarization ----

SUMMARY_PREFIX = "[CONVERSATION SUMMARY]: "

COST_LEVELS: Tuple[str, ...] = ("minimal", "balanced", "aggressive")

__all__ = [
    "DEFAULT_CONTEXT_SETTINGS",
    "OPTIMIZATION_TARGET_RATIO",
    "USAGE_MONITOR_PERCENT",
    "USAGE_OPTIMIZE_SOON_PERCENT",
    "USAGE_CRITICAL_PERCENT",
    "COST_LEVEL_TARGET_RATIO",
    "COST_LEVEL_KEEP_FRACTION",
    "COST_MIN_TARGET_MESSAGES",
    "COST_MAX_REINJECTED_QUESTIONS",
    "COST_PER_1K_TOKENS",
    "COST_MIN_TOKENS_SAVED",
    "COST_MIN_COST_SAVED",
    "CONTEXT_REDUCTION_ERROR_PERCENT",
    "COMPATIBILITY_MIN_SCORE",
    "COMPATIBILITY_ERROR_FLOOR_SCORE",
    "GROK_MAX_CONTENT_LENGTH",
    "GROK_TRUNCATION_MARKER",
    "TOOL_INVOCATION_FALLBACK_TEXT",
    "SUMMARY_PREFIX",
    "COST_LEVELS",
]
