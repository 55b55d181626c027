"""In-process meter and compressor adapters backed by pedalboard."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

import numpy as np
from pedalboard import Compressor, Pedalboard
from pedalboard.io import AudioFile

from audo_comp.application.audio_tools import MeasurementError, VolumeReading
from audo_comp.domain.policies import CompressionCurve

logger = logging.getLogger(__name__)

_FLOOR_DB = -100.0


def load_audio_file(path: Path) -> tuple[np.ndarray, int]:
    """Read an audio file into memory as ``(channels, frames)``."""

    with AudioFile(str(path), "r") as audio_file:
        return audio_file.read(audio_file.frames), int(audio_file.samplerate)


def write_audio_file(path: Path, audio: np.ndarray, sample_rate: int) -> None:
    """Write processed audio to disk."""

    with AudioFile(str(path), "w", sample_rate, audio.shape[0]) as output_file:
        output_file.write(audio)


def _to_db(linear: float) -> float:
    if linear <= 0.0:
        return _FLOOR_DB
    return max(float(20.0 * np.log10(linear)), _FLOOR_DB)


def volume_reading_from_audio(audio: np.ndarray) -> VolumeReading:
    """Mean (RMS) and max (sample peak) volume in dBFS across all channels.

    Float sources can exceed full scale; both readings are clamped to 0 dBFS.
    """

    if audio.size == 0:
        raise MeasurementError("audio contains no samples")
    samples = np.asarray(audio, dtype=np.float64)
    rms = float(np.sqrt(np.mean(np.square(samples))))
    peak = float(np.max(np.abs(samples)))
    return VolumeReading(mean_volume_db=min(_to_db(rms), 0.0), max_volume_db=min(_to_db(peak), 0.0))


@dataclass(frozen=True, slots=True)
class PedalboardVolumeMeter:
    """Measure volume by decoding the file in-process."""

    def measure(self, path: Path) -> VolumeReading:
        try:
            audio, _ = load_audio_file(path)
        except (OSError, ValueError, RuntimeError) as exc:
            raise MeasurementError(f"could not decode {path.name}: {exc}") from exc
        return volume_reading_from_audio(audio)


@dataclass(frozen=True, slots=True)
class PedalboardCompressor:
    """Apply ``pedalboard.Compressor`` and write the result.

    Returns 0 on success and 1 when decoding or encoding fails, mirroring a
    process exit status.
    """

    def transcode(self, input_path: Path, output_path: Path, threshold_db: float, curve: CompressionCurve) -> int:
        board = Pedalboard(
            [
                Compressor(
                    threshold_db=threshold_db,
                    ratio=curve.ratio,
                    attack_ms=curve.attack_ms,
                    release_ms=curve.release_ms,
                )
            ]
        )
        try:
            audio, sample_rate = load_audio_file(input_path)
            processed = board(audio, sample_rate)
            write_audio_file(output_path, processed, sample_rate)
        except (OSError, ValueError, RuntimeError):
            logger.warning("pedalboard compression failed for %s", input_path, exc_info=True)
            return 1
        return 0
