"""
Command-line interface for history-search.

This module orchestrates all other components:
- resolves the run configuration from the manifest and flags
- runs the history export and the search pipeline
- writes the remediation report

Status messages go to stderr; stdout carries only the report so it can
be piped or pasted.
"""

from __future__ import annotations

import sys
import argparse
from pathlib import Path
from typing import List, Optional

from .config import DEFAULT_MANIFEST, TOOL_VERSION, SearchConfig
from .errors import HistorySearchError
from .manifest import Manifest
from .search import SearchOutcome, run_search
from .utils import ensure_parent_dir


# ---------------------------------------------------------------------------
# Color output helpers
# ---------------------------------------------------------------------------


class Colors:
    """ANSI color codes for terminal output."""
    RED = "\033[91m"
    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    BLUE = "\033[94m"
    CYAN = "\033[96m"
    RESET = "\033[0m"
    BOLD = "\033[1m"


def colored(text: str, color: str) -> str:
    """Return colored text for terminal output."""
    return f"{color}{text}{Colors.RESET}"


def print_error(msg: str) -> None:
    """Print error message to stderr."""
    print(colored(f"✗ Error: {msg}", Colors.RED), file=sys.stderr)


def print_success(msg: str) -> None:
    print(colored(f"✓ {msg}", Colors.GREEN), file=sys.stderr)


def print_info(msg: str) -> None:
    print(colored(f"ℹ {msg}", Colors.CYAN), file=sys.stderr)


# ---------------------------------------------------------------------------
# CLI context
# ---------------------------------------------------------------------------


class CLIContext:
    """Shared state for one CLI run."""

    def __init__(
        self,
        repo: str,
        manifest_path: Optional[str],
        verbose: bool,
        quiet: bool,
    ):
        self.repo = Path(repo)
        # An explicit -m must exist; the default one is optional.
        self.manifest_required = manifest_path is not None
        self.manifest_path = (
            Path(manifest_path) if manifest_path else self.repo / DEFAULT_MANIFEST
        )
        self.verbose = verbose
        self.quiet = quiet

        # Lazy-loaded
        self._manifest: Optional[Manifest] = None

    @property
    def manifest(self) -> Manifest:
        """Load manifest lazily."""
        if self._manifest is None:
            self._manifest = Manifest.load_optional(
                self.manifest_path, required=self.manifest_required
            )
            if self._manifest.path is not None:
                self.log_verbose(f"Loaded manifest {self._manifest.path}")
        return self._manifest

    def search_config(self, args: argparse.Namespace) -> SearchConfig:
        return self.manifest.to_search_config(
            case_insensitive=args.case_insensitive,
            lookup=args.lookup,
            replace_file=args.replace_file,
            repo=self.repo,
        )

    def log(self, msg: str) -> None:
        """Log message to stderr if not quiet."""
        if not self.quiet:
            print(msg, file=sys.stderr)

    def log_verbose(self, msg: str) -> None:
        """Log message if verbose."""
        if self.verbose and not self.quiet:
            print(colored(f"  → {msg}", Colors.BLUE), file=sys.stderr)


# ---------------------------------------------------------------------------
# Command implementation
# ---------------------------------------------------------------------------


def report_outcome(ctx: CLIContext, outcome: SearchOutcome) -> None:
    ctx.log_verbose(f"Read {outcome.export_size} bytes of history")
    ctx.log_verbose(
        f"Scanned {outcome.lines_scanned} line(s) for {len(outcome.terms)} term(s)"
    )
    for path, deleted in outcome.deleted.items():
        state = "deleted" if deleted else "present"
        ctx.log_verbose(f"{path}: {state} in working tree")

    matches = outcome.matches
    if matches.is_empty():
        ctx.log(colored("No matches in history", Colors.YELLOW))
        return

    ctx.log(
        colored(
            f"{len(matches.files)} file(s) and {len(matches.commits)} commit(s) matched",
            Colors.BOLD,
        )
    )
    if not outcome.terms.rewrites and not ctx.quiet:
        print_info("Lookup mode: pass a replacement file to get rewrite directives")


def cmd_search(ctx: CLIContext, args: argparse.Namespace) -> int:
    """
    Search the whole history and print the remediation plan.
    """
    config = ctx.search_config(args)
    if config.case_insensitive:
        ctx.log_verbose("Case-insensitive matching")

    outcome = run_search(config)
    report_outcome(ctx, outcome)

    plan = outcome.plan
    text = plan.render_json() if args.json else plan.render()

    if args.output:
        output = Path(args.output)
        ensure_parent_dir(output)
        output.write_text(text, encoding="utf-8")
        if not ctx.quiet:
            print_success(f"Wrote plan to {output}")
    else:
        sys.stdout.write(text)

    return 0


# ---------------------------------------------------------------------------
# Argument parsing
# ---------------------------------------------------------------------------


EPILOG = """
examples:
  history-search --lookup hunter2
  history-search -i --lookup internal.example.com
  history-search replacements.txt
  history-search -C ../other-repo --json replacements.txt

replacement file format (one entry per line):
  OLD==>NEW
"""


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="history-search",
        description=(
            "Search the whole git history for strings and print "
            "git-filter-repo directives to remove them"
        ),
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "replace_file",
        nargs="?",
        help="Replacement file with OLD==>NEW lines (supersedes --lookup)",
    )
    parser.add_argument(
        "-l", "--lookup",
        default="",
        help="Search for a single string instead of a replacement file",
    )
    parser.add_argument(
        "-i", "--case-insensitive",
        action="store_true",
        help="Case-insensitive search",
    )
    parser.add_argument(
        "-C", "--repo",
        default=".",
        help="Repository to search (default: current directory)",
    )
    parser.add_argument(
        "-m", "--manifest",
        default=None,
        help=f"Path to manifest file (default: <repo>/{DEFAULT_MANIFEST} if present)",
    )
    parser.add_argument(
        "-o", "--output",
        help="Write the plan to a file instead of stdout",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output the plan as JSON",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose output",
    )
    parser.add_argument(
        "-q", "--quiet",
        action="store_true",
        help="Suppress non-error output",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {TOOL_VERSION}",
    )

    return parser


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    ctx = CLIContext(
        repo=args.repo,
        manifest_path=args.manifest,
        verbose=args.verbose,
        quiet=args.quiet,
    )

    try:
        return cmd_search(ctx, args)
    except KeyboardInterrupt:
        print_error("Interrupted")
        return 130
    except HistorySearchError as e:
        print_error(str(e))
        return e.exit_code
    except Exception as e:
        print_error(f"Unexpected error: {e}")
        if args.verbose:
            import traceback
            traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
