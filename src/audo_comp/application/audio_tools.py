"""Application ports for the external measurement and transcoding tools."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from audo_comp.domain.policies import CompressionCurve


@dataclass(frozen=True, slots=True)
class VolumeReading:
    """Raw readings reported by a loudness meter, not yet range-validated."""

    mean_volume_db: float
    max_volume_db: float
    min_volume_db: float | None = None


class MeasurementError(RuntimeError):
    """Raised by meters when the tool fails or its output cannot be parsed."""


class ToolTimeoutError(RuntimeError):
    """Raised when an external tool exceeded its deadline and was terminated."""


class LoudnessMeter(Protocol):
    """Port implemented by infrastructure adapters that measure a file's volume."""

    def measure(self, path: Path) -> VolumeReading:
        """Return mean/max readings for ``path`` or raise :class:`MeasurementError`."""


class Transcoder(Protocol):
    """Port implemented by infrastructure adapters that re-encode with compression."""

    def transcode(self, input_path: Path, output_path: Path, threshold_db: float, curve: CompressionCurve) -> int:
        """Encode ``input_path`` into ``output_path`` and return the exit status."""
