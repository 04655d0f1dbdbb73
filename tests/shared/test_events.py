"""Tests for event sinks and best-effort emission."""

from __future__ import annotations

import logging

import pytest

from packages.records_shared.events import (
    EventEntry,
    EventLevel,
    LoggingEventSink,
    RecordEvent,
    RecordingEventSink,
    emit_event,
)
from packages.records_shared.logging.config import ContextFilter


class _BrokenSink:
    def emit(self, entry: EventEntry) -> None:
        raise OSError("disk full")


def test_recording_sink_keeps_entries_in_order() -> None:
    sink = RecordingEventSink()

    assert emit_event(sink, EventLevel.INFO, RecordEvent.RECORD_ADDED, "a", record_id=1)
    assert emit_event(sink, EventLevel.WARNING, RecordEvent.RECORD_REJECTED, "b")

    assert [entry.event for entry in sink.entries] == [
        RecordEvent.RECORD_ADDED,
        RecordEvent.RECORD_REJECTED,
    ]
    assert sink.of(RecordEvent.RECORD_ADDED)[0].fields == {"record_id": 1}


def test_emit_event_isolates_sink_failures(caplog: pytest.LogCaptureFixture) -> None:
    accepted = emit_event(
        _BrokenSink(), EventLevel.INFO, RecordEvent.PURGE_COMPLETED, "done"
    )

    assert accepted is False
    assert any(
        record.getMessage() == "Event sink emission failed for purge_completed"
        and record.exc_info is not None
        for record in caplog.records
    )


def test_logging_sink_maps_levels_and_fields(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.INFO, logger="records.events")
    caplog.handler.addFilter(ContextFilter())
    sink = LoggingEventSink()

    sink.emit(
        EventEntry(
            level=EventLevel.WARNING,
            event=RecordEvent.RECORD_NOT_FOUND,
            message="Record 9 not found",
            fields={"record_id": 9},
        )
    )

    record = caplog.records[-1]
    assert record.levelno == logging.WARNING
    assert record.getMessage() == "Record 9 not found"
    assert record.event == "record_not_found"
    assert record.record_id == 9
