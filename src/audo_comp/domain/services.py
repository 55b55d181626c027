"""Domain services that contain pure business rules."""

from __future__ import annotations

import math
from pathlib import Path

from audo_comp.domain.policies import DEFAULT_COMPRESSION_POLICY, CompressionPolicy
from audo_comp.errors import ValidationError


def validate_db_value(name: str, value: float, policy: CompressionPolicy = DEFAULT_COMPRESSION_POLICY) -> float:
    """Return ``value`` as float or raise if it falls outside the valid dB range."""

    try:
        numeric = float(value)
    except (TypeError, ValueError) as exc:
        raise ValidationError(f"{name} must be a number, got {value!r}.") from exc
    if not math.isfinite(numeric):
        raise ValidationError(f"{name} must be finite, got {numeric}.")
    if not (policy.valid_min_db <= numeric <= policy.valid_max_db):
        raise ValidationError(
            f"{name}={numeric} dB is outside [{policy.valid_min_db}, {policy.valid_max_db}] dB."
        )
    return numeric


def adjusted_threshold_db(mean_volume_db: float, policy: CompressionPolicy = DEFAULT_COMPRESSION_POLICY) -> float:
    """Gain-correction target, capped so it never requests positive gain."""

    return min(mean_volume_db + policy.reference_offset_db, policy.threshold_ceiling_db)


def requires_compression(
    mean_volume_db: float,
    max_volume_db: float,
    min_volume_db: float,
    policy: CompressionPolicy = DEFAULT_COMPRESSION_POLICY,
) -> bool:
    """Excessive dynamic range or overall quietness both trigger compression."""

    dynamic_range = max_volume_db - min_volume_db
    return dynamic_range > policy.dynamic_range_trigger_db or mean_volume_db < policy.quietness_trigger_db


def processed_output_path(source_path: Path, marker: str = "_processed") -> Path:
    """Deterministic output path: same directory, same suffix, marker appended to the stem."""

    return source_path.with_name(f"{source_path.stem}{marker}{source_path.suffix}")
