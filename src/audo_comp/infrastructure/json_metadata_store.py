"""Filesystem JSON adapter for batch metadata persistence."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

from audo_comp.application.metadata_repository import MetadataRepository
from audo_comp.domain.policies import DEFAULT_SELECTION_POLICY
from audo_comp.errors import PersistenceError
from audo_comp.infrastructure.temp_files import sibling_temp_path

logger = logging.getLogger(__name__)

_MAX_DOCUMENT_DEPTH = 4


def _default_file_mode() -> int:
    """Mode a plain ``open()`` would create under the current umask."""

    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


def _bounded(value: Any, depth: int = 0) -> Any:
    """Copy ``value`` into JSON-friendly types, flattening containers past the depth limit."""

    if isinstance(value, Mapping):
        if depth >= _MAX_DOCUMENT_DEPTH:
            return json.dumps(value, default=str, sort_keys=True)
        return {str(key): _bounded(item, depth + 1) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        if depth >= _MAX_DOCUMENT_DEPTH:
            return json.dumps(list(value), default=str)
        return [_bounded(item, depth + 1) for item in value]
    if isinstance(value, (str, int, float, bool)) or value is None:
        return value
    return str(value)


@dataclass(frozen=True, slots=True)
class JsonMetadataStore(MetadataRepository):
    """Store per-file success data as one pretty-printed JSON object per root directory."""

    document_name: str = DEFAULT_SELECTION_POLICY.metadata_filename

    def document_path(self, root_dir: Path) -> Path:
        return root_dir / self.document_name

    def persist(self, root_dir: Path, entries: Mapping[str, Mapping[str, Any]]) -> Path:
        path = self.document_path(root_dir)
        self._write(path, dict(entries))
        logger.info("Wrote metadata for %d file(s) to %s", len(entries), path)
        return path

    def load(self, path: Path) -> dict[str, Any]:
        """Read a metadata document back into its mapping shape."""

        payload = json.loads(path.read_text(encoding="utf-8"))
        if not isinstance(payload, dict):
            raise ValueError(f"Metadata document {path} is not a JSON object.")
        return payload

    def update(self, path: Path, file_name: str, new_data: Mapping[str, Any]) -> bool:
        try:
            entries = self.load(path)
        except (OSError, ValueError) as error:
            logger.warning("Could not read metadata document %s: %s", path, error)
            return False

        try:
            entries[file_name] = dict(new_data)
            self._write(path, entries)
        except (TypeError, ValueError, PersistenceError) as error:
            logger.warning("Could not update metadata document %s: %s", path, error)
            return False
        return True

    def _write(self, path: Path, entries: dict[str, Any]) -> None:
        try:
            document = json.dumps(_bounded(entries), indent=2, sort_keys=True, ensure_ascii=False)
        except (TypeError, ValueError) as error:
            raise PersistenceError(path, f"document is not serializable: {error}") from error

        try:
            with sibling_temp_path(path) as temp_path:
                temp_path.write_text(document + "\n", encoding="utf-8")
                os.chmod(temp_path, _default_file_mode())
                os.replace(temp_path, path)
        except OSError as error:
            raise PersistenceError(path, str(error)) from error
