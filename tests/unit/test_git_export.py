from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Any, List

import pytest

from history_search import git
from history_search.config import ENV_GIT_EXECUTABLE
from history_search.errors import ExternalCommandError


def fake_run(returncode: int, stdout: bytes, calls: List[Any]):
    def run(command, **kwargs):
        calls.append((command, kwargs))
        return subprocess.CompletedProcess(command, returncode, stdout=stdout)

    return run


def test_export_command_covers_all_refs_and_full_history(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv(ENV_GIT_EXECUTABLE, raising=False)

    command = git.history_export_command(Path("repo"))

    assert command == [
        "git", "-C", "repo", "log", "--all", "--full-history", "--no-decorate", "-p", "-U0",
    ]


def test_git_executable_can_be_overridden(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(ENV_GIT_EXECUTABLE, "/opt/git/bin/git")

    assert git.history_export_command()[0] == "/opt/git/bin/git"


def test_export_returns_combined_output(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: List[Any] = []
    monkeypatch.setattr(git.subprocess, "run", fake_run(0, b"commit abc\n", calls))

    assert git.export_history("repo") == "commit abc\n"
    _, kwargs = calls[0]
    assert kwargs["stdout"] is subprocess.PIPE
    assert kwargs["stderr"] is subprocess.STDOUT


def test_failed_export_surfaces_output_and_reason(monkeypatch: pytest.MonkeyPatch) -> None:
    output = b"fatal: not a git repository (or any of the parent directories): .git\n"
    monkeypatch.setattr(git.subprocess, "run", fake_run(128, output, []))

    with pytest.raises(ExternalCommandError) as error:
        git.export_history("repo")

    assert "fatal: not a git repository" in str(error.value)
    assert "exited with status 128" in str(error.value)
    assert error.value.output == output.decode()


def test_missing_git_executable(monkeypatch: pytest.MonkeyPatch) -> None:
    def run(command, **kwargs):
        raise FileNotFoundError(2, "No such file or directory", command[0])

    monkeypatch.setattr(git.subprocess, "run", run)

    with pytest.raises(ExternalCommandError, match="No such file or directory"):
        git.export_history()


def test_work_tree_root_uses_rev_parse(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv(ENV_GIT_EXECUTABLE, raising=False)
    calls: List[Any] = []
    monkeypatch.setattr(git.subprocess, "run", fake_run(0, b"/work/repo\n", calls))

    assert git.work_tree_root("/work/repo/sub") == Path("/work/repo")
    command, kwargs = calls[0]
    assert command == ["git", "-C", "/work/repo/sub", "rev-parse", "--show-toplevel"]
    assert kwargs["stderr"] is subprocess.PIPE


def test_work_tree_root_outside_repository(monkeypatch: pytest.MonkeyPatch) -> None:
    def run(command, **kwargs):
        return subprocess.CompletedProcess(
            command, 128, stdout=b"", stderr=b"fatal: not a git repository\n"
        )

    monkeypatch.setattr(git.subprocess, "run", run)

    with pytest.raises(ExternalCommandError) as error:
        git.work_tree_root("/tmp")

    assert "fatal: not a git repository" in str(error.value)
    assert "exited with status 128" in str(error.value)
