"""
End-to-end search pipeline.

Wires the components together in the order a run needs them:

    export text -> parse_history -> MatchAggregator
                -> DeletionClassifier -> build_plan

The history export itself is passed in, so the whole pipeline can be
driven from synthetic text without a git repository.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional

from .aggregator import MatchAggregator, MatchResult
from .classifier import DeletionClassifier
from .config import SearchConfig
from .git import export_history, work_tree_root
from .parser import parse_history
from .planner import RemediationPlan, build_plan
from .terms import TermSet


@dataclass
class SearchOutcome:
    plan: RemediationPlan
    terms: TermSet
    matches: MatchResult
    deleted: Dict[str, bool]
    lines_scanned: int
    export_size: int


def search_export(
    export: str,
    terms: TermSet,
    config: SearchConfig,
    root: Optional[Path] = None,
) -> SearchOutcome:
    """
    Run parse, aggregate, classify and plan over an export already in memory.

    ``root`` is the work tree top level the export paths are relative to;
    it defaults to ``config.repo``.
    """
    aggregator = MatchAggregator(terms, case_insensitive=config.case_insensitive)
    matches = aggregator.consume(parse_history(export))

    classifier = DeletionClassifier(root if root is not None else config.repo)
    deleted = classifier.classify(matches.matched_files)
    plan = build_plan(matches, deleted, terms, rewrite_command=config.rewrite_command)

    return SearchOutcome(
        plan=plan,
        terms=terms,
        matches=matches,
        deleted=deleted,
        lines_scanned=aggregator.lines_seen,
        export_size=len(export),
    )


def run_search(config: SearchConfig) -> SearchOutcome:
    """
    Run a full search for ``config``.

    The term set is resolved before anything else, so a missing search
    term fails without running git. Deletion checks run against the
    work tree top level, wherever inside it ``config.repo`` points.
    """

    terms = TermSet.from_config(config)
    root = work_tree_root(config.repo)
    export = export_history(config.repo)
    return search_export(export, terms, config, root=root)
