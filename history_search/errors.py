"""
Error types raised by history-search.

Every fatal condition of a run maps to one of these. The CLI turns them
into an error line and an exit code; library callers can catch them and
inspect the cause.
"""

from __future__ import annotations

from typing import Sequence


class HistorySearchError(RuntimeError):
    """Base class for all fatal history-search errors."""

    exit_code = 1


class UsageError(HistorySearchError):
    """No search term was supplied (neither a map file nor --lookup)."""

    exit_code = 2


class ReplaceFileError(HistorySearchError):
    """The replacement map file could not be read."""


class ManifestError(HistorySearchError):
    """The YAML manifest could not be read or is invalid."""


class ExternalCommandError(HistorySearchError):
    """The history export command failed."""

    def __init__(self, command: Sequence[str], output: str, reason: str):
        self.command = list(command)
        self.output = output
        self.reason = reason
        super().__init__(f"{output}\n{reason}" if output else reason)
