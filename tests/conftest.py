from __future__ import annotations

import threading
from pathlib import Path

import numpy as np
import pytest

from audo_comp.application.audio_tools import MeasurementError, VolumeReading
from audo_comp.application.batch_service import BatchCoordinator
from audo_comp.application.compression_executor import CompressionExecutor
from audo_comp.application.loudness_analyzer import LoudnessAnalyzer
from audo_comp.infrastructure.json_metadata_store import JsonMetadataStore
from audo_comp.selection import FileSelector

QUIET_AND_WIDE = VolumeReading(mean_volume_db=-30.0, max_volume_db=-5.0)
BALANCED = VolumeReading(mean_volume_db=-12.0, max_volume_db=-1.0, min_volume_db=-30.0)


class FakeMeter:
    """Returns canned readings keyed by file name; raises MeasurementError for unknown names."""

    def __init__(self, readings: dict[str, VolumeReading]) -> None:
        self.readings = readings
        self.calls: list[str] = []

    def measure(self, path: Path) -> VolumeReading:
        self.calls.append(path.name)
        reading = self.readings.get(path.name)
        if reading is None:
            raise MeasurementError(f"no reading for {path.name}")
        return reading


class FakeTranscoder:
    """Writes a marker output file; returns configured exit statuses per input name."""

    def __init__(self, exit_statuses: dict[str, int] | None = None) -> None:
        self.exit_statuses = exit_statuses or {}
        self.calls: list[tuple[str, str, float]] = []
        self._lock = threading.Lock()

    def transcode(self, input_path: Path, output_path: Path, threshold_db: float, curve) -> int:
        with self._lock:
            self.calls.append((input_path.name, output_path.name, threshold_db))
        status = self.exit_statuses.get(input_path.name, 0)
        if status == 0:
            output_path.write_bytes(b"compressed:" + input_path.read_bytes())
        return status


class CrashingTranscoder(FakeTranscoder):
    """Writes partial output, then raises like a crashing encoder."""

    def transcode(self, input_path: Path, output_path: Path, threshold_db: float, curve) -> int:
        with self._lock:
            self.calls.append((input_path.name, output_path.name, threshold_db))
        output_path.write_bytes(b"partial")
        raise RuntimeError("encoder crashed")


class RecordingPublisher:
    def __init__(self) -> None:
        self.events = []
        self._lock = threading.Lock()

    def publish(self, event) -> None:
        with self._lock:
            self.events.append(event)


@pytest.fixture
def sine_wave():
    sample_rate = 44100
    duration_s = 5.0
    t = np.linspace(0.0, duration_s, int(sample_rate * duration_s), endpoint=False)
    base = np.sin(2 * np.pi * 440.0 * t)
    return {
        "sample_rate": sample_rate,
        "quiet": 0.1 * base,
        "loud": 0.5 * base,
    }


@pytest.fixture
def audio_dir(tmp_path: Path) -> Path:
    root = tmp_path / "audio"
    root.mkdir()
    return root


def make_files(root: Path, *names: str) -> list[Path]:
    paths = []
    for name in names:
        path = root / name
        path.write_bytes(name.encode("utf-8"))
        paths.append(path)
    return paths


def make_coordinator(
    readings: dict[str, VolumeReading],
    exit_statuses: dict[str, int] | None = None,
    publisher: RecordingPublisher | None = None,
    metadata_store=None,
    transcoder: FakeTranscoder | None = None,
) -> tuple[BatchCoordinator, FakeMeter, FakeTranscoder]:
    meter = FakeMeter(readings)
    transcoder = transcoder or FakeTranscoder(exit_statuses)
    coordinator = BatchCoordinator(
        selector=FileSelector(),
        analyzer=LoudnessAnalyzer(meter=meter),
        executor=CompressionExecutor(transcoder=transcoder),
        metadata_store=metadata_store or JsonMetadataStore(),
        event_publisher=publisher or RecordingPublisher(),
    )
    return coordinator, meter, transcoder
