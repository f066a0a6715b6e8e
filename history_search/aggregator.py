"""
Match aggregation.

Consumes parsed history lines and a term set, and records every match
in one of three buckets:
- file content matches, keyed by path
- file name matches (hits on a diff header line), keyed by path
- commit matches (header and message lines), keyed by commit id

Aggregation is a single forward pass with set semantics: a term that
hits the same entity many times is recorded once.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Set

from .parser import HistoryLine
from .terms import TermSet
from .utils import normalize


MatchRecord = Dict[str, Set[str]]


@dataclass
class MatchResult:
    contents: MatchRecord = field(default_factory=dict)
    names: MatchRecord = field(default_factory=dict)
    commits: MatchRecord = field(default_factory=dict)
    # Every file that matched anything, in first-seen order.
    files: Dict[str, None] = field(default_factory=dict)

    @property
    def matched_files(self) -> List[str]:
        return list(self.files)

    def is_empty(self) -> bool:
        return not (self.contents or self.names or self.commits)


def add_match(record: MatchRecord, key: str, term: str) -> None:
    record.setdefault(key, set()).add(term)


class MatchAggregator:
    def __init__(self, terms: TermSet, case_insensitive: bool = False):
        self.terms = terms
        self.case_insensitive = case_insensitive
        self.result = MatchResult()
        self._needles = [(term, normalize(term, case_insensitive)) for term in terms.terms]
        self.lines_seen = 0

    def feed(self, line: HistoryLine) -> None:
        """Record every term that occurs in one history line."""
        self.lines_seen += 1
        result = self.result
        haystack = normalize(line.text, self.case_insensitive)

        for term, needle in self._needles:
            if needle not in haystack:
                continue

            if line.file:
                result.files[line.file] = None
                if line.is_boundary:
                    add_match(result.names, line.file, term)
                else:
                    add_match(result.contents, line.file, term)

            if line.commit:
                add_match(result.commits, line.commit, term)

    def consume(self, lines: Iterable[HistoryLine]) -> MatchResult:
        for line in lines:
            self.feed(line)
        return self.result


def aggregate(
    lines: Iterable[HistoryLine],
    terms: TermSet,
    case_insensitive: bool = False,
) -> MatchResult:
    """Run a fresh aggregator over ``lines`` and return its result."""
    return MatchAggregator(terms, case_insensitive).consume(lines)
