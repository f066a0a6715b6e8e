"""
History export parsing.

Given the raw text of a full-history patch export, this module decides
for every line:
- which commit it belongs to
- which file it belongs to
- whether it is a file boundary (diff header) line

The parser only classifies line *types* from their prefixes. It does
not interpret diff bodies: header lines such as ``--- a/x`` and hunk
lines are plain content lines of the current file.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, Optional

from .config import COMMIT_MARKER, FILE_MARKER, NEW_PATH_PREFIX


@dataclass(frozen=True)
class ParseContext:
    # At most one of these is set; entering one clears the other.
    commit: Optional[str] = None
    file: Optional[str] = None


EMPTY_CONTEXT = ParseContext()


@dataclass(frozen=True)
class HistoryLine:
    text: str
    context: ParseContext
    is_boundary: bool = False

    @property
    def commit(self) -> Optional[str]:
        return self.context.commit

    @property
    def file(self) -> Optional[str]:
        return self.context.file


def boundary_path(line: str) -> str:
    """Return the new-side path of a ``diff --git a/x b/y`` line."""
    last = line.split(" ")[-1]
    if last.startswith(NEW_PATH_PREFIX):
        last = last[len(NEW_PATH_PREFIX):]
    return last


def commit_id(line: str) -> str:
    """Return the hash of a ``commit <hash>`` line."""
    return line.split(" ")[-1]


def parse_history(export: str | Iterable[str]) -> Iterator[HistoryLine]:
    """
    Walk a history export and yield one record per line.

    Args:
        export: the whole export as one string, or any iterable of lines

    Yields:
        HistoryLine carrying the context active at that line
    """

    if isinstance(export, str):
        # Only "\n" ends a line; body lines may hold form feeds or U+2028.
        lines: Iterable[str] = export.split("\n")
        if export.endswith("\n"):
            lines = lines[:-1]
    else:
        lines = export

    context = EMPTY_CONTEXT

    for raw in lines:
        line = raw.rstrip("\r\n")
        is_boundary = False

        if line.startswith(FILE_MARKER):
            context = ParseContext(file=boundary_path(line))
            is_boundary = True

        if line.startswith(COMMIT_MARKER):
            context = ParseContext(commit=commit_id(line))

        yield HistoryLine(text=line, context=context, is_boundary=is_boundary)
