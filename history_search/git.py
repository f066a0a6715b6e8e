"""
Git collaborator.

Runs the full-history export and locates the work tree root. Nothing
else in the tool talks to git.
"""

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import List, Optional, Sequence

from .config import HISTORY_EXPORT_ARGS, TOPLEVEL_ARGS, get_git_executable
from .errors import ExternalCommandError


def git_command(args: Sequence[str], repo: Optional[str | Path] = None) -> List[str]:
    command = [get_git_executable()]
    if repo is not None:
        command += ["-C", str(repo)]
    command += list(args)
    return command


def history_export_command(repo: Optional[str | Path] = None) -> List[str]:
    return git_command(HISTORY_EXPORT_ARGS, repo)


def _run(command: List[str], combined: bool) -> str:
    try:
        proc = subprocess.run(
            command,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT if combined else subprocess.PIPE,
            check=False,
        )
    except OSError as e:
        raise ExternalCommandError(command, "", str(e)) from e

    output = proc.stdout.decode("utf-8", errors="replace")
    if proc.returncode != 0:
        if not combined and proc.stderr:
            output += proc.stderr.decode("utf-8", errors="replace")
        raise ExternalCommandError(
            command,
            output,
            f"{' '.join(command)} exited with status {proc.returncode}",
        )

    return output


def export_history(repo: Optional[str | Path] = None) -> str:
    """
    Return the patch export of every ref and the whole history.

    Output is captured combined (stdout and stderr) and buffered in
    memory.

    Raises:
        ExternalCommandError: if git is missing or exits non-zero
    """

    return _run(history_export_command(repo), combined=True)


def work_tree_root(repo: Optional[str | Path] = None) -> Path:
    """
    Return the top level of the work tree containing ``repo``.

    Paths in the history export are relative to this directory, not to
    ``repo`` itself.

    Raises:
        ExternalCommandError: if git is missing or ``repo`` is not in a
            work tree
    """

    output = _run(git_command(TOPLEVEL_ARGS, repo), combined=False)
    return Path(output.strip())
