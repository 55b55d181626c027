"""Domain event contracts for batch loudness workflows."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any


@dataclass(frozen=True, slots=True)
class DomainEvent:
    """Base domain event emitted by application services."""

    correlation_id: str
    payload_summary: dict[str, Any]
    occurred_at: datetime = field(default_factory=lambda: datetime.now(tz=timezone.utc))


@dataclass(frozen=True, slots=True)
class BatchStarted(DomainEvent):
    """Candidate files were selected and handed to the worker pool."""


@dataclass(frozen=True, slots=True)
class FileAnalyzed(DomainEvent):
    """Loudness stats and the compression decision were computed for a file."""


@dataclass(frozen=True, slots=True)
class FileCompressed(DomainEvent):
    """A compressed output file was written."""


@dataclass(frozen=True, slots=True)
class FileFailed(DomainEvent):
    """A per-file pipeline ended in failure."""


@dataclass(frozen=True, slots=True)
class MetadataPersisted(DomainEvent):
    """The metadata document was written for the batch."""


@dataclass(frozen=True, slots=True)
class BatchCompleted(DomainEvent):
    """Every per-file pipeline has finished."""
