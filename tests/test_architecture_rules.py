"""Architecture enforcement tests for the context engine layering.

The core packages (``base``, ``config``, ``translation``, ``tracking``,
``optimization``, ``compatibility``) must stay independent of the outer
layers: the session facade (``crux_context.session``) and the composition
root (``crux_context.di``). Only those outer layers wire components together.

Rules validated here:
1) Core packages must not import ``crux_context.session`` or ``crux_context.di``,
   neither absolutely nor through relative imports.
2) ``base`` must not import the engine components (translation, tracking,
   optimization, compatibility); they all build on it.

These tests are intentionally static-file scans to avoid import-time side
effects, and they emit clear failure messages for quick remediation.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Iterable, List

import pytest

PACKAGE = "crux_context"
CORE_PACKAGES = ("base", "config", "translation", "tracking", "optimization", "compatibility")
OUTER_LAYERS = ("session", "di")
BASE_FORBIDDEN = ("translation", "tracking", "optimization", "compatibility")


def _iter_python_files(root: Path) -> Iterable[Path]:
    """Yield all Python source files under a root directory.

    Parameters
    ----------
    root: Path
        The directory to scan recursively.

    Yields
    ------
    Path
        Paths to ``.py`` files under the provided root, skipping
        ``__pycache__`` and test directories.
    """

    for path in root.rglob("*.py"):
        if "__pycache__" in path.parts or "tests" in path.parts:
            continue
        yield path


def _read_text(path: Path) -> str:
    """Read a file as UTF-8 text, replacing undecodable bytes."""

    return path.read_text(encoding="utf-8", errors="replace")


def _import_pattern(targets: Iterable[str]) -> re.Pattern[str]:
    names = "|".join(targets)
    absolute = rf"(?:from|import)\s+{PACKAGE}\.(?:{names})\b"
    relative = rf"from\s+\.+(?:{names})\b"
    return re.compile(rf"^\s*(?:{absolute}|{relative})", re.MULTILINE)


def _package_root() -> Path:
    root = Path(__file__).resolve().parent.parent / PACKAGE
    if not root.is_dir():
        pytest.skip(f"No {PACKAGE} directory found; skipping boundary check")
    return root


def _offenders(roots: Iterable[Path], pattern: re.Pattern[str]) -> List[str]:
    offenders: List[str] = []
    for root in roots:
        for py in _iter_python_files(root):
            for match in pattern.finditer(_read_text(py)):
                offenders.append(f"{py}: '{match.group(0).strip()}'")
    return offenders


def test_core_packages_do_not_import_outer_layers() -> None:
    """Ensure core modules never reach into the session facade or DI container.

    Failure mode
    ------------
    The test fails with a message listing offending files and the matched
    import statement.
    """

    pkg = _package_root()
    roots = [pkg / name for name in CORE_PACKAGES if (pkg / name).is_dir()]
    offenders = _offenders(roots, _import_pattern(OUTER_LAYERS))
    if offenders:
        pytest.fail("Core packages must not import outer layers (session/di).\n" + "\n".join(offenders))


def test_base_does_not_import_engine_components() -> None:
    """``base`` holds models, errors and logging only; components build on it."""

    pkg = _package_root()
    offenders = _offenders([pkg / "base"], _import_pattern(BASE_FORBIDDEN))
    if offenders:
        pytest.fail("base must not import engine components.\n" + "\n".join(offenders))
