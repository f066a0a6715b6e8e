"""
Global configuration and environment handling.

This module is responsible for:
- Defining the markers and separators of the formats the tool reads
- Defining global constants and defaults
- Holding the per-run search configuration value

Nothing in this file should depend on:
- the filesystem
- the manifest structure
- git output
- CLI arguments

If something here changes, the *entire tool* behavior changes.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Final, Optional

# ---------------------------------------------------------------------------
# Tool / format versioning
# ---------------------------------------------------------------------------

SUPPORTED_MANIFEST_VERSION: Final[int] = 1
TOOL_VERSION: Final[str] = "0.1.0"

# ---------------------------------------------------------------------------
# History export format
# ---------------------------------------------------------------------------

FILE_MARKER: Final[str] = "diff --git"
COMMIT_MARKER: Final[str] = "commit "
NEW_PATH_PREFIX: Final[str] = "b/"

HISTORY_EXPORT_ARGS: Final[tuple] = (
    "log",
    "--all",
    "--full-history",
    "--no-decorate",
    "-p",
    "-U0",
)

TOPLEVEL_ARGS: Final[tuple] = ("rev-parse", "--show-toplevel")

# ---------------------------------------------------------------------------
# Replacement map format
# ---------------------------------------------------------------------------

REPLACE_SEPARATOR: Final[str] = "==>"

# ---------------------------------------------------------------------------
# Default behavior
# ---------------------------------------------------------------------------

DEFAULT_MANIFEST: Final[str] = "history-search.yml"
DEFAULT_REWRITE_COMMAND: Final[str] = "git-filter-repo"
DEFAULT_GIT_EXECUTABLE: Final[str] = "git"

# ---------------------------------------------------------------------------
# Environment variable names
# ---------------------------------------------------------------------------

ENV_GIT_EXECUTABLE: Final[str] = "HISTORY_SEARCH_GIT"

# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class SearchConfig:
    """
    Everything a single run needs to know, resolved once at startup.

    The CLI merges manifest defaults and command-line flags into one of
    these and hands it to each component explicitly.
    """

    case_insensitive: bool = False
    lookup: str = ""
    replace_file: Optional[Path] = None
    repo: Path = Path(".")
    rewrite_command: str = DEFAULT_REWRITE_COMMAND


def get_git_executable() -> str:
    """
    Return the git executable to run.

    Returns:
        str: value of HISTORY_SEARCH_GIT, or "git"
    """

    return os.getenv(ENV_GIT_EXECUTABLE) or DEFAULT_GIT_EXECUTABLE
