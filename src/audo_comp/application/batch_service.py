"""Application service orchestrating the concurrent per-file pipeline."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from pathlib import Path
from uuid import uuid4

from audo_comp.application.compression_executor import CompressionExecutor
from audo_comp.application.event_publisher import EventPublisher, NullEventPublisher
from audo_comp.application.loudness_analyzer import LoudnessAnalyzer
from audo_comp.application.metadata_repository import MetadataRepository
from audo_comp.domain.events import BatchCompleted, BatchStarted, FileAnalyzed, FileCompressed, FileFailed, MetadataPersisted
from audo_comp.domain.models import BatchResult, ProcessingOutcome
from audo_comp.errors import AnalysisError, CompressionError, PersistenceError, ValidationError
from audo_comp.selection import FileSelector

logger = logging.getLogger(__name__)

DEFAULT_CONCURRENCY_LIMIT = 4


def validate_concurrency_limit(concurrency_limit: int) -> int:
    if isinstance(concurrency_limit, bool) or not isinstance(concurrency_limit, int):
        raise ValidationError(f"concurrency_limit must be an integer, got {concurrency_limit!r}.")
    if concurrency_limit <= 0:
        raise ValidationError(f"concurrency_limit must be positive, got {concurrency_limit}.")
    return concurrency_limit


@dataclass(slots=True)
class BatchCoordinator:
    """Fan selected files out over a bounded thread pool and collect outcomes.

    Outcomes are appended by the calling thread as futures complete, so
    ``BatchResult.outcomes`` is in completion order and no worker ever touches
    the shared aggregate.
    """

    selector: FileSelector
    analyzer: LoudnessAnalyzer
    executor: CompressionExecutor
    metadata_store: MetadataRepository
    event_publisher: EventPublisher = NullEventPublisher()

    def run(self, root_dir: Path, concurrency_limit: int = DEFAULT_CONCURRENCY_LIMIT) -> BatchResult:
        validate_concurrency_limit(concurrency_limit)
        files = self.selector.select(root_dir)

        batch_id = str(uuid4())
        result = BatchResult(root_dir=root_dir, batch_id=batch_id)
        if not files:
            logger.info("No eligible audio files under %s", root_dir)
            return result

        self.event_publisher.publish(
            BatchStarted(
                correlation_id=batch_id,
                payload_summary={
                    "root_dir": root_dir.as_posix(),
                    "file_count": len(files),
                    "concurrency_limit": concurrency_limit,
                },
            )
        )

        with ThreadPoolExecutor(max_workers=concurrency_limit, thread_name_prefix="audo-comp") as pool:
            futures = {pool.submit(self.process_file, path, batch_id): path for path in files}
            for future in as_completed(futures):
                result.outcomes.append(self._outcome_from_future(future, futures[future], batch_id))

        if result.success_count > 0:
            self._persist(result)

        self.event_publisher.publish(
            BatchCompleted(
                correlation_id=batch_id,
                payload_summary={
                    **result.summary(),
                    "metadata_path": result.metadata_path.as_posix() if result.metadata_path else None,
                    "persistence_error": result.persistence_error,
                },
            )
        )
        return result

    def process_file(self, file_path: Path, correlation_id: str) -> ProcessingOutcome:
        """Run analyze -> decide -> (optional) compress for a single file."""

        try:
            loudness = self.analyzer.analyze(file_path)
        except AnalysisError as error:
            return self._failed(ProcessingOutcome.failed(file_path, str(error)), correlation_id, stage="analysis")

        self.event_publisher.publish(
            FileAnalyzed(
                correlation_id=correlation_id,
                payload_summary={"file_name": file_path.name, **loudness.as_dict()},
            )
        )
        if not loudness.requires_compression:
            return ProcessingOutcome.succeeded(file_path, loudness)

        try:
            compressed_path = self.executor.compress(file_path, loudness.adjusted_threshold_db)
        except (CompressionError, ValidationError) as error:
            return self._failed(
                ProcessingOutcome.failed(file_path, str(error), loudness=loudness),
                correlation_id,
                stage="compression",
            )

        self.event_publisher.publish(
            FileCompressed(
                correlation_id=correlation_id,
                payload_summary={
                    "file_name": file_path.name,
                    "compressed_path": compressed_path.as_posix(),
                    "threshold_db": loudness.adjusted_threshold_db,
                },
            )
        )
        return ProcessingOutcome.succeeded(file_path, loudness, compressed_path=compressed_path)

    def _outcome_from_future(self, future, file_path: Path, correlation_id: str) -> ProcessingOutcome:
        try:
            return future.result()
        except Exception as error:  # noqa: BLE001
            logger.exception("Unexpected error while processing %s", file_path)
            return self._failed(
                ProcessingOutcome.failed(file_path, f"unexpected error: {error}"),
                correlation_id,
                stage="pipeline",
            )

    def _failed(self, outcome: ProcessingOutcome, correlation_id: str, stage: str) -> ProcessingOutcome:
        logger.warning("Processing failed for %s: %s", outcome.file_name, outcome.error_message)
        self.event_publisher.publish(
            FileFailed(
                correlation_id=correlation_id,
                payload_summary={"file_name": outcome.file_name, "stage": stage, "error": outcome.error_message},
            )
        )
        return outcome

    def _persist(self, result: BatchResult) -> None:
        entries = {outcome.file_name: outcome.success_data() for outcome in result.successes()}
        try:
            result.metadata_path = self.metadata_store.persist(result.root_dir, entries)
        except PersistenceError as error:
            logger.error("Metadata persistence failed for batch %s: %s", result.batch_id, error)
            result.persistence_error = str(error)
            return

        self.event_publisher.publish(
            MetadataPersisted(
                correlation_id=result.batch_id,
                payload_summary={"destination": result.metadata_path.as_posix(), "entry_count": len(entries)},
            )
        )
