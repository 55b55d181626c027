"""Temporary-file infrastructure helpers."""

from __future__ import annotations

from contextlib import contextmanager
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import IO, Iterator


@contextmanager
def scratch_log(directory: Path, stem: str) -> Iterator[IO[str]]:
    """Yield a hidden, writable log file in ``directory`` that is deleted on exit."""

    with NamedTemporaryFile(
        mode="w+",
        encoding="utf-8",
        errors="replace",
        dir=directory,
        prefix=f".{stem}.",
        suffix=".volumedetect.log",
    ) as handle:
        yield handle


@contextmanager
def sibling_temp_path(target: Path, suffix: str = ".tmp") -> Iterator[Path]:
    """Yield a temporary path next to ``target``; removed on exit unless already moved."""

    with NamedTemporaryFile(dir=target.parent, prefix=f".{target.name}.", suffix=suffix, delete=False) as handle:
        temp_path = Path(handle.name)
    try:
        yield temp_path
    finally:
        temp_path.unlink(missing_ok=True)
