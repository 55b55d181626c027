from __future__ import annotations

from pathlib import Path
from typing import Literal

import json

from pydantic import BaseModel, Field, field_validator

from audo_comp.domain.policies import (
    DEFAULT_COMPRESSION_POLICY,
    DEFAULT_SELECTION_POLICY,
    SUPPORTED_EXTENSIONS,
    CompressionCurve,
    CompressionPolicy,
    SelectionPolicy,
)


class CompressionCurveConfig(BaseModel):
    ratio: float = Field(4.0, ge=1.0, le=20.0)
    attack_ms: float = Field(20.0, gt=0.0, le=2000.0)
    release_ms: float = Field(250.0, gt=0.0, le=9000.0)

    def to_curve(self) -> CompressionCurve:
        return CompressionCurve(ratio=self.ratio, attack_ms=self.attack_ms, release_ms=self.release_ms)


class BatchConfig(BaseModel):
    backend: Literal["ffmpeg", "pedalboard"] = "ffmpeg"
    ffmpeg_binary: str | None = None
    concurrency_limit: int = Field(4, ge=1)
    timeout_seconds: float | None = Field(None, gt=0.0)
    include_tokens: list[str] = Field(default_factory=list)
    extensions: list[str] = Field(default_factory=lambda: list(SUPPORTED_EXTENSIONS))
    processed_marker: str = Field("_processed", min_length=1)
    metadata_filename: str = Field("loudness_metadata.json", min_length=1)
    compression: CompressionCurveConfig = Field(default_factory=CompressionCurveConfig)

    @field_validator("extensions")
    @classmethod
    def _normalize_extensions(cls, value: list[str]) -> list[str]:
        normalized = []
        for extension in value:
            extension = extension.strip().lower()
            if not extension:
                continue
            normalized.append(extension if extension.startswith(".") else f".{extension}")
        if not normalized:
            raise ValueError("extensions must list at least one audio suffix.")
        return normalized

    @field_validator("metadata_filename")
    @classmethod
    def _validate_metadata_filename(cls, value: str) -> str:
        if Path(value).name != value:
            raise ValueError("metadata_filename must be a bare file name.")
        return value

    def compression_policy(self) -> CompressionPolicy:
        return CompressionPolicy(
            policy_id=DEFAULT_COMPRESSION_POLICY.policy_id,
            curve=self.compression.to_curve(),
            policy_version=DEFAULT_COMPRESSION_POLICY.policy_version,
        )

    def selection_policy(self) -> SelectionPolicy:
        return SelectionPolicy(
            policy_id=DEFAULT_SELECTION_POLICY.policy_id,
            include_tokens=tuple(self.include_tokens),
            extensions=tuple(self.extensions),
            processed_marker=self.processed_marker,
            metadata_filename=self.metadata_filename,
            policy_version=DEFAULT_SELECTION_POLICY.policy_version,
        )


def load_batch_config(path: Path | None) -> BatchConfig:
    if path is None:
        return BatchConfig()
    data = _load_config_data(path)
    return BatchConfig.model_validate(data)


def _load_config_data(path: Path) -> dict:
    if path.suffix.lower() in {".yaml", ".yml"}:
        try:
            import yaml
        except ImportError as exc:
            raise ImportError("PyYAML is required to load YAML configs.") from exc

        with path.open("r", encoding="utf-8") as handle:
            return yaml.safe_load(handle) or {}

    with path.open("r", encoding="utf-8") as handle:
        return json.load(handle)
