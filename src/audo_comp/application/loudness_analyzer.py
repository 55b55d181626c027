"""Use case turning raw meter readings into validated loudness stats."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from audo_comp.application.audio_tools import LoudnessMeter, MeasurementError, ToolTimeoutError
from audo_comp.domain.models import LoudnessStats
from audo_comp.domain.policies import DEFAULT_COMPRESSION_POLICY, CompressionPolicy
from audo_comp.errors import AnalysisError, ValidationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class LoudnessAnalyzer:
    """Measure one file and build its :class:`LoudnessStats`."""

    meter: LoudnessMeter
    policy: CompressionPolicy = DEFAULT_COMPRESSION_POLICY

    def analyze(self, file_path: Path) -> LoudnessStats:
        try:
            reading = self.meter.measure(file_path)
        except (MeasurementError, ToolTimeoutError) as error:
            raise AnalysisError(file_path, str(error)) from error
        except OSError as error:
            raise AnalysisError(file_path, f"meter could not run: {error}") from error

        min_volume_db = reading.min_volume_db
        if min_volume_db is None:
            min_volume_db = self.policy.min_volume_floor_db

        try:
            stats = LoudnessStats(
                mean_volume_db=reading.mean_volume_db,
                max_volume_db=reading.max_volume_db,
                min_volume_db=min_volume_db,
                policy=self.policy,
            )
        except ValidationError as error:
            raise AnalysisError(file_path, str(error)) from error

        logger.debug(
            "Analyzed %s: mean=%.1f dB max=%.1f dB compress=%s",
            file_path.name,
            stats.mean_volume_db,
            stats.max_volume_db,
            stats.requires_compression,
        )
        return stats
