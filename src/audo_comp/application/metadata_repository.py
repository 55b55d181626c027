"""Application port for persisting per-file batch metadata."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping, Protocol


class MetadataRepository(Protocol):
    """Port implemented by infrastructure adapters that store batch metadata."""

    def persist(self, root_dir: Path, entries: Mapping[str, Mapping[str, Any]]) -> Path:
        """Write the whole mapping and return the document path.

        Raises :class:`audo_comp.errors.PersistenceError` on any failure.
        """

    def update(self, path: Path, file_name: str, new_data: Mapping[str, Any]) -> bool:
        """Insert or replace one entry; best-effort, returns ``False`` on failure."""
