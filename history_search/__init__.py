"""
git-history-search

Searches the entire history of a git repository for sensitive or
obsolete strings and prints a git-filter-repo plan to remove them:
renames, dropped paths, and text and message replacements.
"""

__version__ = "0.1.0"

from .aggregator import MatchAggregator, MatchResult, aggregate
from .classifier import DeletionClassifier
from .config import SearchConfig
from .errors import (
    ExternalCommandError,
    HistorySearchError,
    ManifestError,
    ReplaceFileError,
    UsageError,
)
from .manifest import Manifest
from .parser import HistoryLine, ParseContext, parse_history
from .planner import RemediationPlan, build_plan
from .search import SearchOutcome, run_search, search_export
from .terms import TermSet

__all__ = [
    "MatchAggregator",
    "MatchResult",
    "aggregate",
    "DeletionClassifier",
    "SearchConfig",
    "ExternalCommandError",
    "HistorySearchError",
    "ManifestError",
    "ReplaceFileError",
    "UsageError",
    "Manifest",
    "HistoryLine",
    "ParseContext",
    "parse_history",
    "RemediationPlan",
    "build_plan",
    "SearchOutcome",
    "run_search",
    "search_export",
    "TermSet",
]
