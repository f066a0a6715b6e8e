"""
Working tree classification.

This module is responsible for:
- checking whether each matched history path still exists on disk

This module does NOT:
- read git history
- decide on remediation
- modify files
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Iterable


class DeletionClassifier:
    def __init__(self, root: str | Path):
        self.root = Path(root)

    def is_deleted(self, path: str) -> bool:
        # History paths are relative to the work tree top level and use "/".
        return not (self.root / path).exists()

    def classify(self, paths: Iterable[str]) -> Dict[str, bool]:
        """
        Map every path to its "deleted in working tree" flag.

        Must run after the whole history has been aggregated: the answer
        reflects the checkout as it is now, not any historical state.
        """

        return {path: self.is_deleted(path) for path in paths}
