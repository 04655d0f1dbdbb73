"""Concurrency and failure-isolation tests for record store backings."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

import pytest

from packages.records_shared.events import EventEntry
from resources.substrates.sql import SqlSettings, create_session_factory, create_sql_engine
from services.state.record_store.data.repository import SqlRecordStore
from services.state.record_store.data.schema import metadata
from services.state.record_store.memory import InMemoryRecordStore

_WORKERS = 16


@pytest.fixture(params=["memory", "sqlite-file"])
def threaded_store(request: pytest.FixtureRequest, tmp_path: Path, clock, sink):
    """Store backings that allow concurrent callers from separate threads."""
    if request.param == "memory":
        yield InMemoryRecordStore(sink=sink, clock=clock)
        return
    engine = create_sql_engine(SqlSettings(url=f"sqlite:///{tmp_path / 'c.db'}"))
    metadata.create_all(engine)
    yield SqlRecordStore(create_session_factory(engine), sink=sink, clock=clock)
    engine.dispose()


def test_concurrent_inserts_produce_unique_ids(threaded_store) -> None:
    """K parallel inserts of distinct names yield K records with K ids."""
    names = [f"parallel-{index}" for index in range(_WORKERS)]

    with ThreadPoolExecutor(max_workers=_WORKERS) as pool:
        results = list(pool.map(threaded_store.insert, names))

    assert all(result.ok for result in results)
    ids = {result.unwrap().id for result in results}
    assert len(ids) == _WORKERS
    assert threaded_store.count() == _WORKERS
    assert sorted(record.name for record in threaded_store.get_all()) == sorted(names)


class _ExplodingSink:
    """Sink whose every emission fails."""

    def __init__(self) -> None:
        self.attempts = 0

    def emit(self, entry: EventEntry) -> None:
        self.attempts += 1
        raise RuntimeError(f"sink down for {entry.event.value}")


@pytest.mark.parametrize("backing", ["memory", "sql"])
def test_sink_failures_never_change_store_outcomes(
    backing: str, clock, caplog: pytest.LogCaptureFixture
) -> None:
    """Broken sinks are logged and otherwise ignored."""
    sink = _ExplodingSink()
    if backing == "memory":
        store = InMemoryRecordStore(sink=sink, clock=clock)
        engine = None
    else:
        engine = create_sql_engine(SqlSettings(url="sqlite://"))
        metadata.create_all(engine)
        store = SqlRecordStore(create_session_factory(engine), sink=sink, clock=clock)

    try:
        record = store.insert("resilient").unwrap()
        assert store.insert("").ok is False
        assert store.delete_by_id(record.id) is True
        assert store.count() == 0
    finally:
        if engine is not None:
            engine.dispose()

    assert sink.attempts == 3
    assert any("Event sink emission failed" in r.getMessage() for r in caplog.records)
