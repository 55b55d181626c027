"""FFmpeg-backed loudness meter and compressor adapters."""

from __future__ import annotations

import logging
import os
import re
import shutil
import subprocess
from dataclasses import dataclass
from pathlib import Path

from audo_comp.application.audio_tools import MeasurementError, ToolTimeoutError, VolumeReading
from audo_comp.domain.policies import CompressionCurve
from audo_comp.errors import ToolUnavailableError
from audo_comp.infrastructure.temp_files import scratch_log

logger = logging.getLogger(__name__)

FFMPEG_ENV_VAR = "AUDO_COMP_FFMPEG"

# acompressor rejects thresholds below 0.000976563 linear.
_ACOMPRESSOR_MIN_THRESHOLD_DB = -60.0

_DECIMAL = r"([-+]?\d+(?:[.,]\d+)?)"
_MEAN_VOLUME_RE = re.compile(rf"mean_volume:\s*{_DECIMAL}\s*dB")
_MAX_VOLUME_RE = re.compile(rf"max_volume:\s*{_DECIMAL}\s*dB")


def resolve_ffmpeg_binary(configured: str | None = None) -> str:
    """Locate the ffmpeg executable from config, environment, or ``PATH``."""

    candidate = configured or os.getenv(FFMPEG_ENV_VAR) or "ffmpeg"
    resolved = shutil.which(candidate)
    if resolved is None:
        raise ToolUnavailableError(
            f"ffmpeg executable '{candidate}' was not found. Install ffmpeg or set {FFMPEG_ENV_VAR}."
        )
    return resolved


def _parse_decibels(raw: str) -> float:
    return float(raw.replace(",", "."))


def parse_volumedetect_output(output: str) -> VolumeReading:
    """Extract mean/max readings from ``volumedetect`` log output."""

    mean_match = _MEAN_VOLUME_RE.search(output)
    max_match = _MAX_VOLUME_RE.search(output)
    missing = [name for name, match in (("mean_volume", mean_match), ("max_volume", max_match)) if match is None]
    if missing:
        raise MeasurementError(f"volumedetect output is missing {', '.join(missing)}")
    return VolumeReading(
        mean_volume_db=_parse_decibels(mean_match.group(1)),
        max_volume_db=_parse_decibels(max_match.group(1)),
    )


def _tail(text: str, lines: int = 5) -> str:
    return " | ".join(line.strip() for line in text.strip().splitlines()[-lines:])


@dataclass(frozen=True, slots=True)
class FFmpegVolumeDetector:
    """Measure mean/max volume with ffmpeg's ``volumedetect`` filter.

    ffmpeg's stderr is captured in a hidden scratch log next to the input file
    and the log is removed on every exit path.
    """

    binary: str = "ffmpeg"
    timeout_seconds: float | None = None

    def command(self, path: Path) -> list[str]:
        return [
            self.binary,
            "-hide_banner",
            "-nostdin",
            "-nostats",
            "-i",
            str(path),
            "-af",
            "volumedetect",
            "-vn",
            "-sn",
            "-dn",
            "-f",
            "null",
            "-",
        ]

    def measure(self, path: Path) -> VolumeReading:
        with scratch_log(path.parent, path.stem) as log_handle:
            try:
                completed = subprocess.run(
                    self.command(path),
                    stdout=subprocess.DEVNULL,
                    stderr=log_handle,
                    timeout=self.timeout_seconds,
                    check=False,
                )
            except subprocess.TimeoutExpired as exc:
                raise ToolTimeoutError(f"volumedetect timed out after {self.timeout_seconds}s") from exc

            log_handle.seek(0)
            output = log_handle.read()

        if completed.returncode != 0:
            raise MeasurementError(f"ffmpeg exited with status {completed.returncode}: {_tail(output)}")
        return parse_volumedetect_output(output)


@dataclass(frozen=True, slots=True)
class FFmpegCompressor:
    """Re-encode a file through ffmpeg's ``acompressor`` filter."""

    binary: str = "ffmpeg"
    timeout_seconds: float | None = None

    def filter_graph(self, threshold_db: float, curve: CompressionCurve) -> str:
        threshold = max(threshold_db, _ACOMPRESSOR_MIN_THRESHOLD_DB)
        return (
            f"acompressor=threshold={threshold:.2f}dB"
            f":ratio={curve.ratio:g}"
            f":attack={curve.attack_ms:g}"
            f":release={curve.release_ms:g}"
        )

    def command(self, input_path: Path, output_path: Path, threshold_db: float, curve: CompressionCurve) -> list[str]:
        return [
            self.binary,
            "-y",
            "-hide_banner",
            "-nostdin",
            "-loglevel",
            "error",
            "-i",
            str(input_path),
            "-af",
            self.filter_graph(threshold_db, curve),
            str(output_path),
        ]

    def transcode(self, input_path: Path, output_path: Path, threshold_db: float, curve: CompressionCurve) -> int:
        try:
            completed = subprocess.run(
                self.command(input_path, output_path, threshold_db, curve),
                capture_output=True,
                text=True,
                errors="replace",
                timeout=self.timeout_seconds,
                check=False,
            )
        except subprocess.TimeoutExpired as exc:
            raise ToolTimeoutError(f"acompressor timed out after {self.timeout_seconds}s") from exc

        if completed.returncode != 0:
            logger.debug("ffmpeg acompressor failed for %s: %s", input_path, _tail(completed.stderr or ""))
        return completed.returncode
