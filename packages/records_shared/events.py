"""Leveled event sink shared by the record store and lifecycle engine.

Emission is best-effort: ``emit_event`` isolates sink failures so a broken
sink never changes the outcome of the store or engine call that produced the
event.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping, Protocol

from packages.records_shared.logging import fields, get_logger, log_context

_LOGGER = get_logger(__name__)


class EventLevel(str, Enum):
    """Severity levels accepted by event sinks."""

    INFO = "info"
    WARNING = "warning"


class RecordEvent(str, Enum):
    """Event names emitted by record components."""

    RECORD_ADDED = "record_added"
    RECORD_REJECTED = "record_rejected"
    RECORD_NOT_FOUND = "record_not_found"
    RECORD_REMOVED = "record_removed"
    BULK_INSERT_COMPLETED = "bulk_insert_completed"
    BULK_DELETE_COMPLETED = "bulk_delete_completed"
    PURGE_COMPLETED = "purge_completed"
    SEED_COMPLETED = "seed_completed"
    DAILY_REPORT = "daily_report"
    IMPORT_PROGRESS = "import_progress"
    IMPORT_COMPLETED = "import_completed"


@dataclass(frozen=True)
class EventEntry:
    """One emitted event with its structured fields."""

    level: EventLevel
    event: RecordEvent
    message: str
    fields: Mapping[str, Any] = field(default_factory=dict)


class EventSink(Protocol):
    """Write-only destination for record events."""

    def emit(self, entry: EventEntry) -> None:
        """Accept one event."""


class LoggingEventSink:
    """Event sink writing through the shared structured logger."""

    _LEVELS = {EventLevel.INFO: logging.INFO, EventLevel.WARNING: logging.WARNING}

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self._logger = logger or get_logger("records.events")

    def emit(self, entry: EventEntry) -> None:
        context = {fields.EVENT: entry.event.value, **entry.fields}
        with log_context(context):
            self._logger.log(self._LEVELS[entry.level], entry.message)


class RecordingEventSink:
    """In-memory sink that keeps every emitted event, in order."""

    def __init__(self) -> None:
        self.entries: list[EventEntry] = []

    def emit(self, entry: EventEntry) -> None:
        self.entries.append(entry)

    def of(self, event: RecordEvent) -> list[EventEntry]:
        """Return emitted entries matching one event name."""
        return [entry for entry in self.entries if entry.event is event]


def emit_event(
    sink: EventSink,
    level: EventLevel,
    event: RecordEvent,
    message: str,
    **values: Any,
) -> bool:
    """Emit one event and return whether the sink accepted it."""
    try:
        sink.emit(EventEntry(level=level, event=event, message=message, fields=values))
    except Exception:
        _LOGGER.exception("Event sink emission failed for %s", event.value)
        return False
    return True
