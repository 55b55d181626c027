"""Candidate file discovery for a batch root directory.

Selection is non-recursive and purely name based: a file is a candidate when
its suffix is a supported audio extension, its name contains one of the
configured inclusion tokens (case-sensitive; no tokens means every name), and
its stem does not already end with the processed marker. The marker exclusion
keeps re-runs from picking up outputs written by earlier runs.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from audo_comp.domain.policies import DEFAULT_SELECTION_POLICY, SelectionPolicy
from audo_comp.errors import NotFoundError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class FileSelector:
    """Enumerate eligible audio files directly under a root directory."""

    policy: SelectionPolicy = DEFAULT_SELECTION_POLICY

    def select(self, root_dir: Path) -> list[Path]:
        if not root_dir.exists() or not root_dir.is_dir():
            raise NotFoundError(f"Root directory not found: {root_dir}")

        selected = sorted(
            (entry for entry in root_dir.iterdir() if entry.is_file() and self.is_candidate(entry.name)),
            key=lambda path: path.name,
        )
        logger.debug("Selected %d candidate file(s) under %s", len(selected), root_dir)
        return selected

    def is_candidate(self, file_name: str) -> bool:
        return self._is_included(file_name) and not self._is_excluded(file_name)

    def _is_included(self, file_name: str) -> bool:
        if Path(file_name).suffix.lower() not in self.policy.extensions:
            return False
        if not self.policy.include_tokens:
            return True
        return any(token in file_name for token in self.policy.include_tokens)

    def _is_excluded(self, file_name: str) -> bool:
        if file_name.startswith("."):
            return True
        return Path(file_name).stem.endswith(self.policy.processed_marker)
