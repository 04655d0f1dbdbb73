"""SQL record store over the store-owned ``records`` table."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from datetime import UTC, datetime
from typing import Any

from sqlalchemy import delete, exists, func, insert, select, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from packages.records_shared.clock import Clock, SystemClock, to_utc
from packages.records_shared.events import EventSink, LoggingEventSink
from packages.records_shared.result import Result, failure, success
from resources.substrates.sql import transactional_session
from services.state.record_store import audit
from services.state.record_store.domain import HealthStatus, Record
from services.state.record_store.interfaces import RecordStore
from services.state.record_store.validation import validate_record_name

from .schema import records


class SqlRecordStore(RecordStore):
    """Record store backed by any SQLAlchemy-supported database.

    Every call runs in its own transactional session, so each operation is
    atomic and releases its connection on all exit paths.
    """

    def __init__(
        self,
        session_factory: sessionmaker[Session],
        *,
        sink: EventSink | None = None,
        clock: Clock | None = None,
        scan_batch_size: int = 1000,
    ) -> None:
        self._session_factory = session_factory
        self._sink = sink or LoggingEventSink()
        self._clock = clock or SystemClock()
        self._scan_batch_size = scan_batch_size

    def insert(self, name: str) -> Result[Record]:
        """Validate and persist one record."""
        error = validate_record_name(name)
        if error is not None:
            audit.record_rejected(self._sink, name, error)
            return failure([error])

        created_at = to_utc(self._clock.now())
        with transactional_session(self._session_factory) as session:
            result = session.execute(
                insert(records).values(name=name, created_at=created_at)
            )
            record_id = int(result.inserted_primary_key[0])

        record = Record(id=record_id, name=name, created_at=created_at)
        audit.record_added(self._sink, record)
        return success(record)

    def bulk_insert(self, names: Iterable[str]) -> int:
        """Insert every valid name with one executemany in one transaction."""
        created_at = to_utc(self._clock.now())
        rows: list[dict[str, Any]] = []
        rejected = 0
        for name in names:
            error = validate_record_name(name)
            if error is not None:
                audit.record_rejected(self._sink, name, error)
                rejected += 1
                continue
            rows.append({"name": name, "created_at": created_at})

        if rows:
            with transactional_session(self._session_factory) as session:
                session.execute(insert(records), rows)
        audit.bulk_insert_completed(self._sink, len(rows), rejected)
        return len(rows)

    def get_all(self) -> Iterator[Record]:
        """Stream records ordered by creation time, then id."""
        with transactional_session(self._session_factory) as session:
            result = session.execute(
                select(records)
                .order_by(records.c.created_at, records.c.id)
                .execution_options(yield_per=self._scan_batch_size)
            )
            for row in result.mappings():
                yield _to_record(row)

    def count(self) -> int:
        with transactional_session(self._session_factory) as session:
            return int(
                session.execute(select(func.count()).select_from(records)).scalar_one()
            )

    def count_between(self, start: datetime, end: datetime) -> int:
        with transactional_session(self._session_factory) as session:
            return int(
                session.execute(
                    select(func.count())
                    .select_from(records)
                    .where(
                        records.c.created_at >= to_utc(start),
                        records.c.created_at < to_utc(end),
                    )
                ).scalar_one()
            )

    def exists_by_name(self, name: str) -> bool:
        with transactional_session(self._session_factory) as session:
            return bool(
                session.execute(select(exists().where(records.c.name == name))).scalar()
            )

    def get_by_id(self, record_id: int) -> Record | None:
        if record_id <= 0:
            audit.record_not_found(self._sink, record_id, operation="get")
            return None

        with transactional_session(self._session_factory) as session:
            row = (
                session.execute(select(records).where(records.c.id == record_id))
                .mappings()
                .one_or_none()
            )
        if row is None:
            audit.record_not_found(self._sink, record_id, operation="get")
            return None
        return _to_record(row)

    def delete_by_id(self, record_id: int) -> bool:
        if record_id <= 0:
            audit.record_not_found(self._sink, record_id, operation="delete")
            return False

        with transactional_session(self._session_factory) as session:
            name = session.execute(
                select(records.c.name).where(records.c.id == record_id)
            ).scalar_one_or_none()
            if name is not None:
                session.execute(delete(records).where(records.c.id == record_id))

        if name is None:
            audit.record_not_found(self._sink, record_id, operation="delete")
            return False
        audit.record_removed(self._sink, record_id, str(name))
        return True

    def delete_older_than(self, cutoff: datetime) -> int:
        """Delete with one set-based statement; rows are never loaded."""
        cutoff_utc = to_utc(cutoff)
        with transactional_session(self._session_factory) as session:
            result = session.execute(
                delete(records).where(records.c.created_at < cutoff_utc)
            )
            removed = int(result.rowcount or 0)
        audit.bulk_delete_completed(self._sink, removed, cutoff_utc)
        return removed

    def health(self) -> HealthStatus:
        try:
            with transactional_session(self._session_factory) as session:
                session.execute(text("SELECT 1"))
        except SQLAlchemyError as exc:
            return HealthStatus(
                ready=False, detail=f"sql health probe failed: {type(exc).__name__}"
            )
        return HealthStatus(ready=True, detail="ok")


def _to_record(row: Any) -> Record:
    """Map one SQL row to a domain record."""
    return Record(
        id=int(row["id"]),
        name=str(row["name"]),
        created_at=_row_dt(row, "created_at"),
    )


def _row_dt(row: Any, column: str) -> datetime:
    """Read one datetime column and normalize it to a UTC-aware value."""
    value = row.get(column)
    if not isinstance(value, datetime):
        raise ValueError(f"expected datetime column for {column}")
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)
