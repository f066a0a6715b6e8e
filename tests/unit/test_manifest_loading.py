from __future__ import annotations

from pathlib import Path

import pytest

from history_search.config import DEFAULT_REWRITE_COMMAND
from history_search.errors import ManifestError
from history_search.manifest import Manifest


def write_manifest(tmp_path: Path, text: str) -> Path:
    path = tmp_path / "history-search.yml"
    path.write_text(text, encoding="utf-8")
    return path


def test_manifest_values_become_defaults(tmp_path: Path) -> None:
    path = write_manifest(
        tmp_path,
        "version: 1\n"
        "search:\n"
        "  case_insensitive: true\n"
        "  replace_file: replacements.txt\n"
        "rewrite:\n"
        "  command: git filter-repo\n",
    )

    config = Manifest.load(path).to_search_config(repo=tmp_path)

    assert config.case_insensitive is True
    assert config.replace_file == tmp_path / "replacements.txt"
    assert config.lookup == ""
    assert config.repo == tmp_path
    assert config.rewrite_command == "git filter-repo"


def test_flags_override_manifest(tmp_path: Path) -> None:
    path = write_manifest(
        tmp_path,
        "version: 1\nsearch:\n  lookup: from-manifest\n  replace_file: map.txt\n",
    )
    manifest = Manifest.load(path)

    by_file = manifest.to_search_config(replace_file="other.txt")
    by_lookup = manifest.to_search_config(lookup="from-flag")

    assert by_file.replace_file == Path("other.txt")
    assert by_lookup.lookup == "from-flag"
    assert by_lookup.replace_file is None


def test_missing_optional_manifest_gives_defaults(tmp_path: Path) -> None:
    manifest = Manifest.load_optional(tmp_path / "history-search.yml")

    assert manifest.path is None
    assert manifest.rewrite.command == DEFAULT_REWRITE_COMMAND
    assert manifest.to_search_config(lookup="x").case_insensitive is False


def test_missing_required_manifest_is_an_error(tmp_path: Path) -> None:
    with pytest.raises(ManifestError, match="not found"):
        Manifest.load_optional(tmp_path / "custom.yml", required=True)


@pytest.mark.parametrize(
    "text, message",
    [
        ("version: 2\n", "Unsupported manifest version"),
        ("- just\n- a list\n", "must be a mapping"),
        ("version: 1\nsearch: nope\n", "'search' must be a mapping"),
        ("version: 1\nrewrite:\n  command: [a, b]\n", "must be a string"),
        ("version: 1\nsearch: [unclosed\n", "Failed to read manifest"),
    ],
)
def test_invalid_manifest_errors(tmp_path: Path, text: str, message: str) -> None:
    path = write_manifest(tmp_path, text)

    with pytest.raises(ManifestError, match=message):
        Manifest.load(path)


def test_manifest_replace_file_is_relative_to_manifest(tmp_path: Path) -> None:
    other_repo = tmp_path / "other-repo"
    other_repo.mkdir()
    path = write_manifest(other_repo, "version: 1\nsearch:\n  replace_file: replacements.txt\n")

    config = Manifest.load(path).to_search_config(repo=other_repo)

    assert config.replace_file == other_repo / "replacements.txt"


def test_absolute_and_command_line_replace_files_are_kept(tmp_path: Path) -> None:
    absolute = tmp_path / "shared" / "map.txt"
    path = write_manifest(tmp_path, f"version: 1\nsearch:\n  replace_file: {absolute}\n")
    manifest = Manifest.load(path)

    assert manifest.to_search_config().replace_file == absolute
    assert manifest.to_search_config(replace_file="local.txt").replace_file == Path("local.txt")
