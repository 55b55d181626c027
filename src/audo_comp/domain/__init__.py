"""DDD domain layer."""

from .events import BatchCompleted, BatchStarted, DomainEvent, FileAnalyzed, FileCompressed, FileFailed, MetadataPersisted
from .models import BatchResult, LoudnessStats, OutcomeStatus, ProcessingOutcome
from .policies import (
    DEFAULT_COMPRESSION_POLICY,
    DEFAULT_SELECTION_POLICY,
    CompressionCurve,
    CompressionPolicy,
    SelectionPolicy,
)
from .services import adjusted_threshold_db, processed_output_path, requires_compression, validate_db_value

__all__ = [
    "DomainEvent",
    "BatchStarted",
    "FileAnalyzed",
    "FileCompressed",
    "FileFailed",
    "MetadataPersisted",
    "BatchCompleted",
    "BatchResult",
    "LoudnessStats",
    "OutcomeStatus",
    "ProcessingOutcome",
    "CompressionCurve",
    "CompressionPolicy",
    "SelectionPolicy",
    "DEFAULT_COMPRESSION_POLICY",
    "DEFAULT_SELECTION_POLICY",
    "adjusted_threshold_db",
    "processed_output_path",
    "requires_compression",
    "validate_db_value",
]
