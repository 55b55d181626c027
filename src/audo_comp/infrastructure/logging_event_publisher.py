"""Logging-backed event publisher for batch runs."""

from __future__ import annotations

import logging

from audo_comp.domain.events import DomainEvent, FileFailed

LOGGER = logging.getLogger("audo_comp.events")

_EVENT_LEVELS: dict[type[DomainEvent], int] = {FileFailed: logging.WARNING}


class LoggingEventPublisher:
    """Emit batch events as structured log records; failures log at WARNING."""

    def publish(self, event: DomainEvent) -> None:
        LOGGER.log(
            _EVENT_LEVELS.get(type(event), logging.INFO),
            "batch_event",
            extra={
                "event_name": type(event).__name__,
                "batch_id": event.correlation_id,
                "file_name": event.payload_summary.get("file_name"),
                "payload_summary": event.payload_summary,
                "occurred_at": event.occurred_at.isoformat(),
            },
        )
