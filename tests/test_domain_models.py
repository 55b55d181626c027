from __future__ import annotations

import dataclasses
from pathlib import Path

import pytest

from audo_comp.domain.models import BatchResult, LoudnessStats, OutcomeStatus, ProcessingOutcome
from audo_comp.domain.services import processed_output_path
from audo_comp.errors import ValidationError


@pytest.mark.parametrize(
    ("mean", "expected"),
    [
        (-40.0, -12.6),
        (-27.4, 0.0),
        (-20.0, 0.0),
        (0.0, 0.0),
        (-100.0, -72.6),
    ],
)
def test_adjusted_threshold_is_mean_plus_offset_capped_at_zero(mean: float, expected: float) -> None:
    stats = LoudnessStats(mean_volume_db=mean, max_volume_db=0.0, min_volume_db=-60.0)

    assert stats.adjusted_threshold_db == pytest.approx(expected)
    assert stats.adjusted_threshold_db <= 0.0


def test_dynamic_range_trigger_only() -> None:
    stats = LoudnessStats(mean_volume_db=-10.0, max_volume_db=-5.0, min_volume_db=-50.0)

    assert stats.dynamic_range_db == pytest.approx(45.0)
    assert stats.mean_volume_db >= -24.0
    assert stats.requires_compression is True


def test_quietness_trigger_only() -> None:
    stats = LoudnessStats(mean_volume_db=-30.0, max_volume_db=-40.0, min_volume_db=-45.0)

    assert stats.dynamic_range_db == pytest.approx(5.0)
    assert stats.requires_compression is True


def test_no_trigger_means_no_compression() -> None:
    stats = LoudnessStats(mean_volume_db=-12.0, max_volume_db=-1.0, min_volume_db=-30.0)

    assert stats.requires_compression is False


def test_boundaries_are_exclusive() -> None:
    exactly_forty = LoudnessStats(mean_volume_db=-24.0, max_volume_db=-10.0, min_volume_db=-50.0)

    assert exactly_forty.requires_compression is False


def test_default_min_volume_floor_makes_range_relative_to_floor() -> None:
    stats = LoudnessStats(mean_volume_db=-14.0, max_volume_db=-1.0)

    assert stats.min_volume_db == -100.0
    assert stats.requires_compression is True


@pytest.mark.parametrize(
    "kwargs",
    [
        {"mean_volume_db": 5.0, "max_volume_db": -1.0},
        {"mean_volume_db": -10.0, "max_volume_db": 0.5},
        {"mean_volume_db": -10.0, "max_volume_db": -1.0, "min_volume_db": -100.5},
        {"mean_volume_db": float("nan"), "max_volume_db": -1.0},
        {"mean_volume_db": float("-inf"), "max_volume_db": -1.0},
    ],
)
def test_out_of_range_values_are_rejected(kwargs: dict) -> None:
    with pytest.raises(ValidationError):
        LoudnessStats(**kwargs)


def test_replace_revalidates_and_rederives() -> None:
    stats = LoudnessStats(mean_volume_db=-12.0, max_volume_db=-1.0, min_volume_db=-30.0)

    quieter = dataclasses.replace(stats, mean_volume_db=-30.0)

    assert quieter.requires_compression is True
    assert quieter.adjusted_threshold_db == pytest.approx(-2.6)
    with pytest.raises(ValidationError):
        dataclasses.replace(stats, max_volume_db=3.0)


def test_loudness_stats_is_immutable() -> None:
    stats = LoudnessStats(mean_volume_db=-12.0, max_volume_db=-1.0)

    with pytest.raises(dataclasses.FrozenInstanceError):
        stats.mean_volume_db = -20.0  # type: ignore[misc]


def test_loudness_stats_dict_round_trip() -> None:
    stats = LoudnessStats(mean_volume_db=-18.5, max_volume_db=-0.3, min_volume_db=-70.0)

    assert LoudnessStats.from_dict(stats.as_dict()) == stats


def test_outcome_factories_keep_status_invariants(tmp_path: Path) -> None:
    stats = LoudnessStats(mean_volume_db=-12.0, max_volume_db=-1.0)
    source = tmp_path / "track.wav"

    ok = ProcessingOutcome.succeeded(source, stats, compressed_path=tmp_path / "track_processed.wav")
    failed = ProcessingOutcome.failed(source, "boom", loudness=stats)

    assert ok.status is OutcomeStatus.SUCCESS
    assert ok.error_message is None
    assert ok.file_name == "track.wav"
    assert failed.status is OutcomeStatus.FAILED
    assert failed.compressed_path is None
    assert failed.loudness == stats
    assert ok.timestamp.tzinfo is not None


def test_batch_result_counts_partition_outcomes(tmp_path: Path) -> None:
    stats = LoudnessStats(mean_volume_db=-12.0, max_volume_db=-1.0)
    result = BatchResult(root_dir=tmp_path, batch_id="batch-1")
    result.outcomes.extend(
        [
            ProcessingOutcome.succeeded(tmp_path / "a.wav", stats),
            ProcessingOutcome.failed(tmp_path / "b.wav", "bad"),
            ProcessingOutcome.succeeded(tmp_path / "c.wav", stats),
        ]
    )

    assert result.success_count == 2
    assert result.failure_count == 1
    assert result.summary() == {"total": 3, "succeeded": 2, "failed": 1}


def test_processed_output_path_keeps_directory_and_suffix(tmp_path: Path) -> None:
    assert processed_output_path(tmp_path / "mix.v2.flac") == tmp_path / "mix.v2_processed.flac"
