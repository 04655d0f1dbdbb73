"""Construction entrypoint for the configured record store backing."""

from __future__ import annotations

from typing import TYPE_CHECKING

from packages.records_shared.clock import Clock
from packages.records_shared.config import RecordsSettings
from packages.records_shared.events import EventSink
from services.state.record_store.interfaces import RecordStore

if TYPE_CHECKING:
    from services.state.record_store.data import RecordSqlRuntime


def build_record_store(
    *,
    settings: RecordsSettings,
    sink: EventSink,
    clock: Clock,
) -> tuple[RecordStore, RecordSqlRuntime | None]:
    """Build the record store selected by ``components.service.record_store``.

    Returns the store plus the SQL runtime owning its engine (``None`` for the
    in-memory backing) so the caller can release connections on shutdown.
    """
    from services.state.record_store.config import resolve_record_store_settings
    from services.state.record_store.data import RecordSqlRuntime, SqlRecordStore
    from services.state.record_store.memory import InMemoryRecordStore

    store_settings = resolve_record_store_settings(settings)
    if store_settings.backend == "memory":
        return InMemoryRecordStore(sink=sink, clock=clock), None

    runtime = RecordSqlRuntime.from_settings(settings)
    store = SqlRecordStore(
        runtime.substrate.session_factory,
        sink=sink,
        clock=clock,
        scan_batch_size=store_settings.scan_batch_size,
    )
    return store, runtime
