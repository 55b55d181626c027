"""Domain models for loudness analysis and batch outcomes."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Any

from audo_comp.domain.policies import DEFAULT_COMPRESSION_POLICY, CompressionPolicy
from audo_comp.domain.services import adjusted_threshold_db, requires_compression, validate_db_value


def _utc_now() -> datetime:
    return datetime.now(tz=timezone.utc)


@dataclass(frozen=True, slots=True)
class LoudnessStats:
    """Validated loudness readings plus the derived compression decision.

    The derived fields are properties so they always reflect the three
    readings; ``dataclasses.replace`` on an instance revalidates and rederives.
    """

    mean_volume_db: float
    max_volume_db: float
    min_volume_db: float = DEFAULT_COMPRESSION_POLICY.min_volume_floor_db
    policy: CompressionPolicy = field(default=DEFAULT_COMPRESSION_POLICY, compare=False, repr=False)

    def __post_init__(self) -> None:
        for name in ("mean_volume_db", "max_volume_db", "min_volume_db"):
            object.__setattr__(self, name, validate_db_value(name, getattr(self, name), self.policy))

    @property
    def adjusted_threshold_db(self) -> float:
        return adjusted_threshold_db(self.mean_volume_db, self.policy)

    @property
    def requires_compression(self) -> bool:
        return requires_compression(self.mean_volume_db, self.max_volume_db, self.min_volume_db, self.policy)

    @property
    def dynamic_range_db(self) -> float:
        return self.max_volume_db - self.min_volume_db

    def as_dict(self) -> dict[str, Any]:
        return {
            "mean_volume_db": self.mean_volume_db,
            "max_volume_db": self.max_volume_db,
            "min_volume_db": self.min_volume_db,
            "adjusted_threshold_db": self.adjusted_threshold_db,
            "requires_compression": self.requires_compression,
        }

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> "LoudnessStats":
        # Derived keys are ignored and recomputed.
        return cls(
            mean_volume_db=payload["mean_volume_db"],
            max_volume_db=payload["max_volume_db"],
            min_volume_db=payload.get("min_volume_db", DEFAULT_COMPRESSION_POLICY.min_volume_floor_db),
        )


class OutcomeStatus(str, Enum):
    """Terminal states of a per-file pipeline."""

    SUCCESS = "success"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class ProcessingOutcome:
    """Immutable record of one file's pipeline result."""

    source_path: Path
    file_name: str
    status: OutcomeStatus
    loudness: LoudnessStats | None = None
    compressed_path: Path | None = None
    error_message: str | None = None
    timestamp: datetime = field(default_factory=_utc_now)

    @classmethod
    def succeeded(
        cls,
        source_path: Path,
        loudness: LoudnessStats,
        compressed_path: Path | None = None,
    ) -> "ProcessingOutcome":
        return cls(
            source_path=source_path,
            file_name=source_path.name,
            status=OutcomeStatus.SUCCESS,
            loudness=loudness,
            compressed_path=compressed_path,
        )

    @classmethod
    def failed(
        cls,
        source_path: Path,
        error_message: str,
        loudness: LoudnessStats | None = None,
    ) -> "ProcessingOutcome":
        return cls(
            source_path=source_path,
            file_name=source_path.name,
            status=OutcomeStatus.FAILED,
            loudness=loudness,
            error_message=error_message,
        )

    @property
    def is_success(self) -> bool:
        return self.status is OutcomeStatus.SUCCESS

    def success_data(self) -> dict[str, Any]:
        """Projection persisted in the metadata document."""

        return {
            "source_path": str(self.source_path),
            "loudness": self.loudness.as_dict() if self.loudness is not None else None,
            "compressed_path": str(self.compressed_path) if self.compressed_path is not None else None,
            "timestamp": self.timestamp.isoformat(),
        }


@dataclass(slots=True)
class BatchResult:
    """Aggregate of one batch run; outcomes are kept in completion order."""

    root_dir: Path
    batch_id: str
    outcomes: list[ProcessingOutcome] = field(default_factory=list)
    metadata_path: Path | None = None
    persistence_error: str | None = None

    @property
    def success_count(self) -> int:
        return sum(1 for outcome in self.outcomes if outcome.status is OutcomeStatus.SUCCESS)

    @property
    def failure_count(self) -> int:
        return sum(1 for outcome in self.outcomes if outcome.status is OutcomeStatus.FAILED)

    @property
    def total(self) -> int:
        return len(self.outcomes)

    def successes(self) -> list[ProcessingOutcome]:
        return [outcome for outcome in self.outcomes if outcome.is_success]

    def summary(self) -> dict[str, int]:
        return {"total": self.total, "succeeded": self.success_count, "failed": self.failure_count}
