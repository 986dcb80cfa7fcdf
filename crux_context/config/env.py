"""crux_context.config.env
=======================

Environment variable names and parsing helpers for context settings.

Every settings field can be set through ``CRUX_CONTEXT_<FIELD>`` (upper
case field name). Values arrive as strings and are coerced here; values
that cannot be coerced are passed through unchanged so that settings
validation reports them.
"""

from __future__ import annotations

import os
from typing import Any, Dict, Mapping, Optional

ENV_PREFIX = "CRUX_CONTEXT_"
CONFIG_FILE_ENV = "CRUX_CONTEXT_CONFIG_FILE"

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


def env_var_name(field: str) -> str:
    """Return the environment variable name for a settings field."""
    return f"{ENV_PREFIX}{field.upper()}"


def parse_bool(value: str) -> Any:
    v = value.strip().lower()
    if v in _TRUE:
        return True
    if v in _FALSE:
        return False
    return value


def parse_number(value: str) -> Any:
    v = value.strip()
    if v.lower() in {"", "none", "null"}:
        return None
    try:
        return int(v)
    except ValueError:
        pass
    try:
        return float(v)
    except ValueError:
        return value


def read_env_settings(defaults: Mapping[str, Any], environ: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
    """Collect settings overrides from the environment.

    The type of each default decides how the raw string is parsed: booleans
    via :func:`parse_bool`, numbers (and ``None`` defaults) via
    :func:`parse_number`, strings verbatim.
    """
    env = os.environ if environ is None else environ
    out: Dict[str, Any] = {}
    for field, default in defaults.items():
        raw = env.get(env_var_name(field))
        if raw is None:
            continue
        if isinstance(default, bool):
            out[field] = parse_bool(raw)
        elif default is None or isinstance(default, (int, float)):
            out[field] = parse_number(raw)
        else:
            out[field] = raw.strip()
    return out


__all__ = [
    "ENV_PREFIX",
    "CONFIG_FILE_ENV",
    "env_var_name",
    "parse_bool",
    "parse_number",
    "read_env_settings",
]
