"""CLI-facing handlers that delegate to application services."""

from __future__ import annotations

from pathlib import Path

from audo_comp.application.audio_tools import LoudnessMeter, Transcoder
from audo_comp.application.batch_service import BatchCoordinator, validate_concurrency_limit
from audo_comp.application.compression_executor import CompressionExecutor
from audo_comp.application.loudness_analyzer import LoudnessAnalyzer
from audo_comp.domain.models import BatchResult, LoudnessStats, ProcessingOutcome
from audo_comp.infrastructure.ffmpeg import FFmpegCompressor, FFmpegVolumeDetector, resolve_ffmpeg_binary
from audo_comp.infrastructure.json_metadata_store import JsonMetadataStore
from audo_comp.infrastructure.logging_event_publisher import LoggingEventPublisher
from audo_comp.infrastructure.pedalboard_backend import PedalboardCompressor, PedalboardVolumeMeter
from audo_comp.selection import FileSelector
from audo_comp.utils.config import BatchConfig

_event_publisher = LoggingEventPublisher()


def build_tools(config: BatchConfig) -> tuple[LoudnessMeter, Transcoder]:
    """Pick meter/transcoder adapters for the configured backend."""

    if config.backend == "pedalboard":
        return PedalboardVolumeMeter(), PedalboardCompressor()

    binary = resolve_ffmpeg_binary(config.ffmpeg_binary)
    return (
        FFmpegVolumeDetector(binary=binary, timeout_seconds=config.timeout_seconds),
        FFmpegCompressor(binary=binary, timeout_seconds=config.timeout_seconds),
    )


def build_coordinator(config: BatchConfig) -> BatchCoordinator:
    meter, transcoder = build_tools(config)
    selection_policy = config.selection_policy()
    compression_policy = config.compression_policy()
    return BatchCoordinator(
        selector=FileSelector(policy=selection_policy),
        analyzer=LoudnessAnalyzer(meter=meter, policy=compression_policy),
        executor=CompressionExecutor(
            transcoder=transcoder,
            policy=compression_policy,
            processed_marker=selection_policy.processed_marker,
        ),
        metadata_store=JsonMetadataStore(document_name=selection_policy.metadata_filename),
        event_publisher=_event_publisher,
    )


def process_directory(root_dir: Path, config: BatchConfig, concurrency_limit: int | None = None) -> BatchResult:
    limit = validate_concurrency_limit(config.concurrency_limit if concurrency_limit is None else concurrency_limit)
    coordinator = build_coordinator(config)
    return coordinator.run(root_dir, concurrency_limit=limit)


def analyze_file(path: Path, config: BatchConfig) -> LoudnessStats:
    meter, _ = build_tools(config)
    return LoudnessAnalyzer(meter=meter, policy=config.compression_policy()).analyze(path)


def format_outcome(outcome: ProcessingOutcome) -> str:
    if outcome.is_success:
        loudness = outcome.loudness
        line = (
            f"[OK] {outcome.file_name} "
            f"mean={loudness.mean_volume_db:.1f}dB max={loudness.max_volume_db:.1f}dB"
        )
        if outcome.compressed_path is not None:
            line += f" compressed={outcome.compressed_path}"
        else:
            line += " compressed=no"
        return line
    return f"[FAILED] {outcome.file_name} error={outcome.error_message}"


def format_stats(path: Path, stats: LoudnessStats) -> list[str]:
    return [
        f"File: {path}",
        f"Mean volume: {stats.mean_volume_db:.1f} dB",
        f"Max volume: {stats.max_volume_db:.1f} dB",
        f"Min volume: {stats.min_volume_db:.1f} dB",
        f"Adjusted threshold: {stats.adjusted_threshold_db:.1f} dB",
        f"Requires compression: {'yes' if stats.requires_compression else 'no'}",
    ]
