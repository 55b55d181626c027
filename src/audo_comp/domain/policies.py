"""Domain value objects representing stable processing policies."""

from __future__ import annotations

from dataclasses import dataclass

SUPPORTED_EXTENSIONS: tuple[str, ...] = (".wav", ".flac", ".mp3", ".m4a", ".aac", ".ogg", ".opus", ".wma")


@dataclass(frozen=True, slots=True)
class CompressionCurve:
    """Fixed compressor shape applied whenever compression runs."""

    ratio: float = 4.0
    attack_ms: float = 20.0
    release_ms: float = 250.0


@dataclass(frozen=True, slots=True)
class CompressionPolicy:
    """Constants of the loudness-to-decision policy."""

    policy_id: str
    reference_offset_db: float = 27.4
    threshold_ceiling_db: float = 0.0
    dynamic_range_trigger_db: float = 40.0
    quietness_trigger_db: float = -24.0
    min_volume_floor_db: float = -100.0
    valid_min_db: float = -100.0
    valid_max_db: float = 0.0
    curve: CompressionCurve = CompressionCurve()
    policy_version: str = "v1"


@dataclass(frozen=True, slots=True)
class SelectionPolicy:
    """Name-based inclusion/exclusion rules for candidate files."""

    policy_id: str
    include_tokens: tuple[str, ...] = ()
    extensions: tuple[str, ...] = SUPPORTED_EXTENSIONS
    processed_marker: str = "_processed"
    metadata_filename: str = "loudness_metadata.json"
    policy_version: str = "v1"


DEFAULT_COMPRESSION_POLICY = CompressionPolicy(policy_id="dynamic-range-default", policy_version="v1")
DEFAULT_SELECTION_POLICY = SelectionPolicy(policy_id="directory-selection-default", policy_version="v1")
