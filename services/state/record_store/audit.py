"""Store-side event emission shared by every record store backing."""

from __future__ import annotations

from datetime import datetime

from packages.records_shared.errors import ErrorDetail
from packages.records_shared.events import EventLevel, EventSink, RecordEvent, emit_event
from packages.records_shared.logging import fields
from services.state.record_store.domain import Record

_PREVIEW_LENGTH = 64


def record_added(sink: EventSink, record: Record) -> None:
    emit_event(
        sink,
        EventLevel.INFO,
        RecordEvent.RECORD_ADDED,
        f"Added record {record.name!r} with id {record.id}",
        **{fields.RECORD_NAME: record.name, fields.RECORD_ID: record.id},
    )


def record_rejected(sink: EventSink, name: object, error: ErrorDetail) -> None:
    """Emit a warning for a rejected name without echoing oversized input."""
    preview = name[:_PREVIEW_LENGTH] if isinstance(name, str) else repr(name)
    emit_event(
        sink,
        EventLevel.WARNING,
        RecordEvent.RECORD_REJECTED,
        f"Rejected record: {error.message}",
        **{fields.REASON: error.message, fields.RECORD_NAME: preview},
    )


def record_not_found(sink: EventSink, record_id: int, *, operation: str) -> None:
    if record_id <= 0:
        message = f"Invalid record id {record_id} for {operation}"
    else:
        message = f"Record with id {record_id} not found for {operation}"
    emit_event(
        sink,
        EventLevel.WARNING,
        RecordEvent.RECORD_NOT_FOUND,
        message,
        **{fields.RECORD_ID: record_id, "operation": operation},
    )


def record_removed(sink: EventSink, record_id: int, name: str) -> None:
    emit_event(
        sink,
        EventLevel.INFO,
        RecordEvent.RECORD_REMOVED,
        f"Removed record {name!r} with id {record_id}",
        **{fields.RECORD_NAME: name, fields.RECORD_ID: record_id},
    )


def bulk_insert_completed(sink: EventSink, count: int, rejected: int) -> None:
    emit_event(
        sink,
        EventLevel.INFO,
        RecordEvent.BULK_INSERT_COMPLETED,
        f"Bulk insert stored {count} records ({rejected} rejected)",
        **{fields.COUNT: count, "rejected": rejected},
    )


def bulk_delete_completed(sink: EventSink, count: int, cutoff: datetime) -> None:
    emit_event(
        sink,
        EventLevel.INFO,
        RecordEvent.BULK_DELETE_COMPLETED,
        f"Deleted {count} records created before {cutoff.isoformat()}",
        **{fields.COUNT: count, "cutoff": cutoff.isoformat()},
    )
