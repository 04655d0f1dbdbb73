"""Shared pytest fixtures for records components."""

from __future__ import annotations

from collections.abc import Iterator
from datetime import datetime, timezone

import pytest

from packages.records_shared.clock import FixedClock
from packages.records_shared.events import RecordingEventSink
from resources.substrates.sql import SqlSettings, create_session_factory, create_sql_engine
from services.state.record_store.data.repository import SqlRecordStore
from services.state.record_store.data.schema import metadata
from services.state.record_store.interfaces import RecordStore
from services.state.record_store.memory import InMemoryRecordStore

BASE_TIME = datetime(2026, 3, 14, 12, 0, tzinfo=timezone.utc)


@pytest.fixture()
def clock() -> FixedClock:
    """Provide a settable clock pinned to a known midday instant."""
    return FixedClock(BASE_TIME)


@pytest.fixture()
def sink() -> RecordingEventSink:
    """Provide an event sink that keeps every emitted event."""
    return RecordingEventSink()


@pytest.fixture()
def sql_store(clock: FixedClock, sink: RecordingEventSink) -> Iterator[SqlRecordStore]:
    """Provide a SQL record store over a fresh in-memory SQLite database."""
    engine = create_sql_engine(SqlSettings(url="sqlite://"))
    metadata.create_all(engine)
    yield SqlRecordStore(create_session_factory(engine), sink=sink, clock=clock)
    engine.dispose()


@pytest.fixture(params=["memory", "sql"])
def store(
    request: pytest.FixtureRequest,
    clock: FixedClock,
    sink: RecordingEventSink,
) -> RecordStore:
    """Provide each record store backing in turn."""
    if request.param == "memory":
        return InMemoryRecordStore(sink=sink, clock=clock)
    return request.getfixturevalue("sql_store")
