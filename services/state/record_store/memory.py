"""Process-local record store backing."""

from __future__ import annotations

import threading
from collections.abc import Iterable, Iterator
from datetime import datetime

from packages.records_shared.clock import Clock, SystemClock, to_utc
from packages.records_shared.events import EventSink, LoggingEventSink
from packages.records_shared.result import Result, failure, success
from services.state.record_store import audit
from services.state.record_store.domain import HealthStatus, Record
from services.state.record_store.interfaces import RecordStore
from services.state.record_store.validation import validate_record_name


class InMemoryRecordStore(RecordStore):
    """Lock-guarded dictionary store with monotonic, never-reused ids."""

    def __init__(
        self,
        *,
        sink: EventSink | None = None,
        clock: Clock | None = None,
    ) -> None:
        self._sink = sink or LoggingEventSink()
        self._clock = clock or SystemClock()
        self._lock = threading.Lock()
        self._rows: dict[int, Record] = {}
        self._last_id = 0

    def insert(self, name: str) -> Result[Record]:
        error = validate_record_name(name)
        if error is not None:
            audit.record_rejected(self._sink, name, error)
            return failure([error])

        created_at = to_utc(self._clock.now())
        with self._lock:
            record = self._append(name, created_at)
        audit.record_added(self._sink, record)
        return success(record)

    def bulk_insert(self, names: Iterable[str]) -> int:
        created_at = to_utc(self._clock.now())
        accepted: list[str] = []
        rejected = 0
        for name in names:
            error = validate_record_name(name)
            if error is not None:
                audit.record_rejected(self._sink, name, error)
                rejected += 1
                continue
            accepted.append(name)

        with self._lock:
            for name in accepted:
                self._append(name, created_at)
        audit.bulk_insert_completed(self._sink, len(accepted), rejected)
        return len(accepted)

    def get_all(self) -> Iterator[Record]:
        """Yield a point-in-time snapshot ordered by creation time, then id."""
        with self._lock:
            snapshot = sorted(
                self._rows.values(), key=lambda row: (row.created_at, row.id)
            )
        yield from snapshot

    def count(self) -> int:
        with self._lock:
            return len(self._rows)

    def count_between(self, start: datetime, end: datetime) -> int:
        lower, upper = to_utc(start), to_utc(end)
        with self._lock:
            return sum(1 for row in self._rows.values() if lower <= row.created_at < upper)

    def exists_by_name(self, name: str) -> bool:
        with self._lock:
            return any(row.name == name for row in self._rows.values())

    def get_by_id(self, record_id: int) -> Record | None:
        with self._lock:
            record = self._rows.get(record_id) if record_id > 0 else None
        if record is None:
            audit.record_not_found(self._sink, record_id, operation="get")
        return record

    def delete_by_id(self, record_id: int) -> bool:
        with self._lock:
            record = self._rows.pop(record_id, None) if record_id > 0 else None
        if record is None:
            audit.record_not_found(self._sink, record_id, operation="delete")
            return False
        audit.record_removed(self._sink, record.id, record.name)
        return True

    def delete_older_than(self, cutoff: datetime) -> int:
        cutoff_utc = to_utc(cutoff)
        with self._lock:
            expired = [
                record_id
                for record_id, row in self._rows.items()
                if row.created_at < cutoff_utc
            ]
            for record_id in expired:
                del self._rows[record_id]
        audit.bulk_delete_completed(self._sink, len(expired), cutoff_utc)
        return len(expired)

    def health(self) -> HealthStatus:
        return HealthStatus(ready=True, detail="ok")

    def _append(self, name: str, created_at: datetime) -> Record:
        """Assign the next id and store the record. Caller holds the lock."""
        self._last_id += 1
        record = Record(id=self._last_id, name=name, created_at=created_at)
        self._rows[record.id] = record
        return record
