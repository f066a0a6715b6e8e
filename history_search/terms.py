"""
Search terms and replacement map loading.

This module answers one question:
    "What strings are we looking for, and what should they become?"

Responsibilities:
- Parse the OLD==>NEW replacement map format
- Build a term set from a map file or a single lookup string
- Expose a clean Python representation

This module does NOT:
- Read git history
- Match lines
- Decide on remediation
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Tuple

from .config import REPLACE_SEPARATOR, SearchConfig
from .errors import ReplaceFileError, UsageError


# ---------------------------------------------------------------------------
# Data models
# ---------------------------------------------------------------------------


@dataclass
class TermSet:
    """
    Search terms mapped to their replacements.

    ``source`` is the map file the terms came from. It is None for a
    lookup-only set, in which case every replacement is empty and the
    set only drives detection.
    """

    replacements: Dict[str, str] = field(default_factory=dict)
    source: Optional[Path] = None

    @property
    def rewrites(self) -> bool:
        return self.source is not None

    @property
    def terms(self) -> List[str]:
        return list(self.replacements)

    def items(self) -> Iterator[Tuple[str, str]]:
        return iter(self.replacements.items())

    def __len__(self) -> int:
        return len(self.replacements)

    def __contains__(self, term: object) -> bool:
        return term in self.replacements

    # ------------------------------------------------------------------
    # Loading API
    # ------------------------------------------------------------------

    @classmethod
    def from_lookup(cls, lookup: str) -> "TermSet":
        return cls(replacements={lookup: ""})

    @classmethod
    def load(cls, path: str | Path) -> "TermSet":
        """
        Load a replacement map file.

        Args:
            path: Path to the OLD==>NEW map file

        Raises:
            ReplaceFileError: if the file cannot be read

        Returns:
            TermSet
        """

        path = Path(path)
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise ReplaceFileError(str(e)) from e

        return cls(replacements=parse_replacements(text), source=path)

    @classmethod
    def from_config(cls, config: SearchConfig) -> "TermSet":
        """
        Build the term set a run asks for.

        A map file wins over --lookup.

        Raises:
            UsageError: if neither a map file nor a lookup string is set
            ReplaceFileError: if the map file cannot be read
        """

        if config.replace_file is not None:
            return cls.load(config.replace_file)
        if not config.lookup:
            raise UsageError("search term or file not specified")
        return cls.from_lookup(config.lookup)


# ---------------------------------------------------------------------------
# Parsing helpers
# ---------------------------------------------------------------------------


def parse_replacement_line(line: str) -> Optional[Tuple[str, str]]:
    """
    Parse one OLD==>NEW line.

    Returns None for lines that should be skipped: empty lines, lines
    without exactly one separator, and lines with an empty OLD part.
    """

    if not line:
        return None

    parts = line.split(REPLACE_SEPARATOR)
    if len(parts) != 2:
        return None

    old, new = parts
    if not old:
        return None

    return old, new


def parse_replacements(text: str) -> Dict[str, str]:
    """Parse a whole map file; later duplicates win."""
    replacements: Dict[str, str] = {}

    for line in text.split("\n"):
        parsed = parse_replacement_line(line.rstrip("\r"))
        if parsed is None:
            continue
        old, new = parsed
        replacements[old] = new

    return replacements
