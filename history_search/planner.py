"""
Remediation planning and report rendering.

This module turns aggregated matches and the working tree classification
into a plan for the history rewrite tool:
- surviving files whose names matched get ``--path-rename`` directives
- deleted files get dropped with ``--invert-paths --path``
- surviving files whose content matched get ``--replace-text``
- matching commits get ``--replace-message``

Planning is pure: nothing here touches the filesystem or runs commands.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Set, Tuple

from .aggregator import MatchResult
from .config import DEFAULT_REWRITE_COMMAND
from .terms import TermSet
from .utils import contains, join_terms, shell_arg


# ---------------------------------------------------------------------------
# Data models
# ---------------------------------------------------------------------------


@dataclass
class EntityMatch:
    name: str
    terms: Set[str]

    @property
    def terms_string(self) -> str:
        return join_terms(self.terms)


@dataclass
class RemediationPlan:
    renames: List[Tuple[str, str]] = field(default_factory=list)
    name_only: List[EntityMatch] = field(default_factory=list)
    deleted: List[EntityMatch] = field(default_factory=list)
    surviving: List[EntityMatch] = field(default_factory=list)
    commits: List[EntityMatch] = field(default_factory=list)
    replace_source: Optional[Path] = None
    rewrite_command: str = DEFAULT_REWRITE_COMMAND

    def is_empty(self) -> bool:
        return not (
            self.renames
            or self.name_only
            or self.deleted
            or self.surviving
            or self.commits
        )

    # ------------------------------------------------------------------
    # Directives
    # ------------------------------------------------------------------

    def rename_directive(self) -> List[str]:
        if not self.renames:
            return []
        return _invocation(
            self.rewrite_command,
            [f"--path-rename {shell_arg(f'{old}:{new}')}" for old, new in self.renames],
        )

    def invert_paths_directive(self) -> List[str]:
        if not self.deleted:
            return []
        return _invocation(
            f"{self.rewrite_command} --invert-paths",
            [f"--path {shell_arg(match.name)}" for match in self.deleted],
        )

    def replace_text_directive(self) -> Optional[str]:
        if not self.surviving or self.replace_source is None:
            return None
        return f"{self.rewrite_command} --replace-text {shell_arg(self.replace_source)}"

    def replace_message_directive(self) -> Optional[str]:
        if not self.commits or self.replace_source is None:
            return None
        return f"{self.rewrite_command} --replace-message {shell_arg(self.replace_source)}"

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def render(self) -> str:
        """Render the plan as the plain text report."""
        if self.is_empty():
            return "No matches found\n"

        lines: List[str] = []
        lines += self.rename_directive()

        if self.name_only:
            lines.append("Matching file names:")
            lines += _listing(self.name_only)

        if self.deleted:
            lines.append("Deleted files:")
            lines += _listing(self.deleted)
            lines += self.invert_paths_directive()

        if self.surviving:
            lines.append("Not deleted files:")
            lines += _listing(self.surviving)
            directive = self.replace_text_directive()
            if directive:
                lines.append(directive)

        if self.commits:
            lines.append("Matching commits:")
            lines += _listing(self.commits)
            directive = self.replace_message_directive()
            if directive:
                lines.append(directive)

        return "\n".join(lines) + "\n"

    def to_dict(self) -> Dict[str, Any]:
        def entries(matches: List[EntityMatch]) -> List[Dict[str, Any]]:
            return [{"name": m.name, "terms": sorted(m.terms)} for m in matches]

        directives: List[str] = []
        for block in (self.rename_directive(), self.invert_paths_directive()):
            if block:
                directives.append("\n".join(block))
        for directive in (self.replace_text_directive(), self.replace_message_directive()):
            if directive:
                directives.append(directive)

        return {
            "renames": [{"from": old, "to": new} for old, new in self.renames],
            "matching_file_names": entries(self.name_only),
            "deleted_files": entries(self.deleted),
            "not_deleted_files": entries(self.surviving),
            "matching_commits": entries(self.commits),
            "replace_file": str(self.replace_source) if self.replace_source else None,
            "directives": directives,
        }

    def render_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2) + "\n"


def _invocation(head: str, args: List[str]) -> List[str]:
    # Every line but the last continues the command.
    lines = [f"{head} \\"]
    for idx, arg in enumerate(args):
        tail = " \\" if idx < len(args) - 1 else ""
        lines.append(f"  {arg}{tail}")
    return lines


def _listing(matches: List[EntityMatch]) -> List[str]:
    return [f"  {match.name} matches {match.terms_string}" for match in matches]


# ---------------------------------------------------------------------------
# Planning
# ---------------------------------------------------------------------------


def renamed_path(path: str, terms: TermSet) -> str:
    """
    Apply every replacement whose term occurs in ``path``.

    Terms are tested against the original path and replaced in the
    running candidate, in term order.
    """

    candidate = path
    for old, new in terms.items():
        if contains(path, old):
            candidate = candidate.replace(old, new)
    return candidate


def build_plan(
    matches: MatchResult,
    deleted: Dict[str, bool],
    terms: TermSet,
    rewrite_command: str = DEFAULT_REWRITE_COMMAND,
) -> RemediationPlan:
    """
    Combine aggregated matches and the deletion classification.

    Args:
        matches: aggregator output
        deleted: path -> "missing from the working tree"
        terms: the term set the matches came from
        rewrite_command: name of the history rewrite tool

    Returns:
        RemediationPlan
    """

    plan = RemediationPlan(
        replace_source=terms.source if terms.rewrites else None,
        rewrite_command=rewrite_command,
    )

    for path, name_terms in matches.names.items():
        if deleted.get(path, False):
            continue
        if terms.rewrites:
            candidate = renamed_path(path, terms)
            if candidate != path:
                plan.renames.append((path, candidate))
        else:
            plan.name_only.append(EntityMatch(path, set(name_terms)))

    for path in matches.files:
        file_terms = matches.contents.get(path, set())
        if deleted.get(path, False):
            plan.deleted.append(
                EntityMatch(path, file_terms | matches.names.get(path, set()))
            )
        elif file_terms:
            plan.surviving.append(EntityMatch(path, set(file_terms)))

    for commit, commit_terms in matches.commits.items():
        plan.commits.append(EntityMatch(commit, set(commit_terms)))

    return plan
