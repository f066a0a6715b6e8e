"""
Shared utility helpers.

This module contains small, reusable helpers that do not belong
to parsing, aggregation, or planning.
"""

from __future__ import annotations

import shlex
from pathlib import Path
from typing import Iterable


# ---------------------------------------------------------------------------
# Text matching
# ---------------------------------------------------------------------------


def normalize(text: str, case_insensitive: bool) -> str:
    """Return ``text`` in the form used for comparison."""
    return text.lower() if case_insensitive else text


def contains(text: str, term: str, case_insensitive: bool = False) -> bool:
    """Substring test honoring the case mode."""
    return normalize(term, case_insensitive) in normalize(text, case_insensitive)


# ---------------------------------------------------------------------------
# Rendering helpers
# ---------------------------------------------------------------------------


def join_terms(terms: Iterable[str]) -> str:
    """Sort terms alphabetically and join them for display."""
    return ", ".join(sorted(terms))


def shell_arg(value: str | Path) -> str:
    """Quote a value for a copy-pasteable shell command line."""
    return shlex.quote(str(value))


# ---------------------------------------------------------------------------
# Filesystem helpers
# ---------------------------------------------------------------------------


def ensure_parent_dir(path: Path) -> None:
    """Ensure the parent directory of a file exists."""
    path.parent.mkdir(parents=True, exist_ok=True)
