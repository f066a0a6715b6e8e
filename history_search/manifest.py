"""
Manifest loading, validation, and normalization.

This module answers one question:
    "What defaults does this repository want for a search run?"

Responsibilities:
- Load the optional manifest YAML file
- Validate structure and version
- Normalize defaults
- Merge manifest values with command-line overrides into a SearchConfig

This module does NOT:
- Read the replacement map
- Run git
- Match anything
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .config import (
    DEFAULT_REWRITE_COMMAND,
    SUPPORTED_MANIFEST_VERSION,
    SearchConfig,
)
from .errors import ManifestError


# ---------------------------------------------------------------------------
# Data models
# ---------------------------------------------------------------------------


@dataclass
class SearchDefaults:
    case_insensitive: bool = False
    lookup: str = ""
    replace_file: Optional[str] = None


@dataclass
class RewriteConfig:
    command: str = DEFAULT_REWRITE_COMMAND


@dataclass
class Manifest:
    version: int = SUPPORTED_MANIFEST_VERSION
    search: SearchDefaults = field(default_factory=SearchDefaults)
    rewrite: RewriteConfig = field(default_factory=RewriteConfig)
    path: Optional[Path] = None

    # ------------------------------------------------------------------
    # Loading API
    # ------------------------------------------------------------------

    @classmethod
    def load(cls, path: str | Path) -> "Manifest":
        """
        Load and validate a manifest file.

        Args:
            path: Path to the manifest YAML file

        Raises:
            ManifestError: if the manifest is missing or invalid

        Returns:
            Manifest
        """

        path = Path(path)
        if not path.exists():
            raise ManifestError(f"Manifest file not found: {path}")

        try:
            with path.open("r", encoding="utf-8") as fh:
                raw = yaml.safe_load(fh) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ManifestError(f"Failed to read manifest {path}: {e}") from e

        if not isinstance(raw, dict):
            raise ManifestError(f"Manifest {path} must be a mapping")

        manifest = cls._from_dict(raw)
        manifest.path = path
        return manifest

    @classmethod
    def load_optional(cls, path: str | Path, required: bool = False) -> "Manifest":
        """
        Load a manifest if it exists, otherwise return defaults.

        With ``required`` set a missing file is an error.
        """

        if not required and not Path(path).exists():
            return cls()
        return cls.load(path)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    @classmethod
    def _from_dict(cls, data: Dict[str, Any]) -> "Manifest":
        version = data.get("version")
        if version != SUPPORTED_MANIFEST_VERSION:
            raise ManifestError(f"Unsupported manifest version: {version}")

        return cls(
            version=version,
            search=cls._parse_search(cls._section(data, "search")),
            rewrite=cls._parse_rewrite(cls._section(data, "rewrite")),
        )

    @staticmethod
    def _section(data: Dict[str, Any], name: str) -> Dict[str, Any]:
        section = data.get(name) or {}
        if not isinstance(section, dict):
            raise ManifestError(f"Manifest section '{name}' must be a mapping")
        return section

    @staticmethod
    def _parse_search(data: Dict[str, Any]) -> SearchDefaults:
        replace_file = data.get("replace_file")
        return SearchDefaults(
            case_insensitive=bool(data.get("case_insensitive", False)),
            lookup=str(data.get("lookup") or ""),
            replace_file=str(replace_file) if replace_file else None,
        )

    @staticmethod
    def _parse_rewrite(data: Dict[str, Any]) -> RewriteConfig:
        command = data.get("command") or DEFAULT_REWRITE_COMMAND
        if not isinstance(command, str):
            raise ManifestError("Manifest 'rewrite.command' must be a string")
        return RewriteConfig(command=command)

    # ------------------------------------------------------------------
    # Public helpers
    # ------------------------------------------------------------------

    def to_search_config(
        self,
        *,
        case_insensitive: bool = False,
        lookup: Optional[str] = None,
        replace_file: Optional[str] = None,
        repo: str | Path = ".",
    ) -> SearchConfig:
        """
        Resolve the run configuration.

        Command-line values win over manifest values, and a command-line
        lookup also hides a manifest replace_file. A true flag turns
        case-insensitive matching on; it cannot turn a manifest ``true``
        off.

        A relative ``replace_file`` from the command line stays relative to
        the working directory; one from the manifest is relative to the
        manifest file.
        """

        resolved_file = Path(replace_file) if replace_file else None
        if resolved_file is None and not lookup:
            resolved_file = self.manifest_replace_file()
        return SearchConfig(
            case_insensitive=case_insensitive or self.search.case_insensitive,
            lookup=lookup if lookup else self.search.lookup,
            replace_file=resolved_file,
            repo=Path(repo),
            rewrite_command=self.rewrite.command,
        )

    def manifest_replace_file(self) -> Optional[Path]:
        """Return the manifest's replace_file, resolved against the manifest."""
        if not self.search.replace_file:
            return None
        path = Path(self.search.replace_file)
        if self.path is not None and not path.is_absolute():
            path = self.path.parent / path
        return path
