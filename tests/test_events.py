from __future__ import annotations

import logging

from audo_comp.application.event_publisher import NullEventPublisher
from audo_comp.domain.events import BatchCompleted, FileFailed, MetadataPersisted
from audo_comp.infrastructure.logging_event_publisher import LoggingEventPublisher


def test_logging_publisher_emits_structured_record(caplog) -> None:
    event = FileFailed(
        correlation_id="batch-1",
        payload_summary={"file_name": "a.wav", "stage": "analysis", "error": "boom"},
    )

    with caplog.at_level(logging.INFO, logger="audo_comp.events"):
        LoggingEventPublisher().publish(event)

    (record,) = caplog.records
    assert record.getMessage() == "batch_event"
    assert record.event_name == "FileFailed"
    assert record.batch_id == "batch-1"
    assert record.file_name == "a.wav"
    assert record.payload_summary["stage"] == "analysis"
    assert record.occurred_at == event.occurred_at.isoformat()


def test_file_failures_log_at_warning_and_other_events_at_info(caplog) -> None:
    publisher = LoggingEventPublisher()

    with caplog.at_level(logging.INFO, logger="audo_comp.events"):
        publisher.publish(FileFailed(correlation_id="b", payload_summary={"file_name": "a.wav"}))
        publisher.publish(BatchCompleted(correlation_id="b", payload_summary={"succeeded": 2}))

    assert [record.levelno for record in caplog.records] == [logging.WARNING, logging.INFO]
    assert caplog.records[1].file_name is None


def test_null_publisher_ignores_events(caplog) -> None:
    with caplog.at_level(logging.DEBUG):
        NullEventPublisher().publish(MetadataPersisted(correlation_id="batch-2", payload_summary={}))

    assert caplog.records == []
