"""Concrete record lifecycle engine."""

from __future__ import annotations

import threading
from collections.abc import Iterator, Sequence
from datetime import timedelta

from packages.records_shared.clock import Clock, start_of_day
from packages.records_shared.errors import RecordValidationError
from packages.records_shared.events import EventLevel, EventSink, RecordEvent, emit_event
from packages.records_shared.logging import fields, get_logger, public_api_logged
from services.action.record_lifecycle.config import (
    DEFAULT_IMPORT_BATCH_SIZE,
    DEFAULT_IMPORT_COUNT,
    DEFAULT_PROGRESS_INTERVAL,
    SERVICE_COMPONENT_ID,
    LifecycleSettings,
)
from services.action.record_lifecycle.domain import (
    DailyReport,
    ImportResult,
    MaintenanceSummary,
    PurgeResult,
    SeedResult,
)
from services.action.record_lifecycle.service import RecordLifecycleService
from services.state.record_store.interfaces import RecordStore

_LOGGER = get_logger(__name__)

LOAD_TEST_PREFIX = "LoadTest-"

# Serializes check-then-insert seeding within this process.
_SEED_LOCK = threading.Lock()


class DefaultRecordLifecycleService(RecordLifecycleService):
    """Lifecycle workflows running exclusively through the store contract.

    The engine keeps no copy of the data set and no state between calls; the
    store owns atomicity and the caller owns retry policy.
    """

    def __init__(
        self,
        *,
        store: RecordStore,
        sink: EventSink,
        clock: Clock,
        progress_interval: int = DEFAULT_PROGRESS_INTERVAL,
    ) -> None:
        if progress_interval <= 0:
            raise ValueError("progress_interval must be > 0")
        self._store = store
        self._sink = sink
        self._clock = clock
        self._progress_interval = progress_interval

    @public_api_logged(logger=_LOGGER, component_id=SERVICE_COMPONENT_ID)
    def report_daily(self) -> DailyReport:
        """Count today's records in ``[UTC midnight, +1 day)`` and the total."""
        day_start = start_of_day(self._clock.now())
        today_count = self._store.count_between(day_start, day_start + timedelta(days=1))
        total_count = self._store.count()

        emit_event(
            self._sink,
            EventLevel.INFO,
            RecordEvent.DAILY_REPORT,
            f"Daily report: {today_count} records created today, "
            f"{total_count} records total",
            today_count=today_count,
            total_count=total_count,
        )
        return DailyReport(
            day_start=day_start, today_count=today_count, total_count=total_count
        )

    @public_api_logged(
        logger=_LOGGER,
        component_id=SERVICE_COMPONENT_ID,
        id_fields=("retention_days",),
    )
    def purge_expired(self, *, retention_days: int) -> PurgeResult:
        """Delete records created before ``now - retention_days`` in one call.

        A retention of zero removes everything created before now.
        """
        if retention_days < 0:
            raise ValueError("retention_days must be >= 0")

        cutoff = self._clock.now() - timedelta(days=retention_days)
        removed = self._store.delete_older_than(cutoff)

        emit_event(
            self._sink,
            EventLevel.INFO,
            RecordEvent.PURGE_COMPLETED,
            f"Cleanup completed: removed {removed} records older than "
            f"{retention_days} days",
            **{fields.COUNT: removed, "retention_days": retention_days},
        )
        return PurgeResult(cutoff=cutoff, removed_count=removed)

    @public_api_logged(
        logger=_LOGGER,
        component_id=SERVICE_COMPONENT_ID,
        id_fields=("prefix",),
    )
    def seed_from_catalog(
        self, *, prefix: str, catalog: Sequence[str]
    ) -> SeedResult:
        """Insert each prefixed catalog name unless a record already has it.

        Names are checked and inserted one at a time, in catalog order. A name
        the store rejects aborts the workflow with ``RecordValidationError``;
        names inserted before it stay stored.
        """
        inserted = 0
        skipped = 0
        with _SEED_LOCK:
            for base_name in catalog:
                full_name = f"{prefix}{base_name}"
                if self._store.exists_by_name(full_name):
                    skipped += 1
                    continue
                result = self._store.insert(full_name)
                if not result.ok:
                    raise RecordValidationError(result.errors)
                inserted += 1

        emit_event(
            self._sink,
            EventLevel.INFO,
            RecordEvent.SEED_COMPLETED,
            f"Import completed: {inserted} new records added, "
            f"{skipped} duplicates skipped",
            inserted=inserted,
            skipped=skipped,
            prefix=prefix,
        )
        return SeedResult(inserted=inserted, skipped=skipped)

    @public_api_logged(
        logger=_LOGGER,
        component_id=SERVICE_COMPONENT_ID,
        id_fields=("total_count", "batch_size"),
    )
    def bulk_import(
        self,
        *,
        total_count: int = DEFAULT_IMPORT_COUNT,
        batch_size: int = DEFAULT_IMPORT_BATCH_SIZE,
    ) -> ImportResult:
        """Insert ``LoadTest-1`` .. ``LoadTest-<total_count>`` batch by batch.

        Only one batch of names exists in memory at a time. A failure part way
        through leaves earlier batches stored; rerunning starts from batch zero.
        """
        if total_count < 0:
            raise ValueError("total_count must be >= 0")
        if batch_size <= 0:
            raise ValueError("batch_size must be > 0")

        inserted = 0
        batches = 0
        for batch in _load_test_batches(total_count, batch_size):
            previous = inserted
            inserted += self._store.bulk_insert(batch)
            batches += 1
            if inserted // self._progress_interval > previous // self._progress_interval:
                emit_event(
                    self._sink,
                    EventLevel.INFO,
                    RecordEvent.IMPORT_PROGRESS,
                    f"Progress: {inserted}/{total_count} records added",
                    inserted=inserted,
                    total=total_count,
                )

        emit_event(
            self._sink,
            EventLevel.INFO,
            RecordEvent.IMPORT_COMPLETED,
            f"Large dataset import completed: {inserted} records added",
            inserted=inserted,
            total=total_count,
            batches=batches,
        )
        return ImportResult(inserted=inserted, batches=batches)

    def run_maintenance(self, settings: LifecycleSettings) -> MaintenanceSummary:
        """Purge with configured retention, seed the catalog, then report."""
        purge = self.purge_expired(retention_days=settings.data_retention_days)
        seed = self.seed_from_catalog(
            prefix=settings.batch_operation_prefix, catalog=settings.seed_products
        )
        report = self.report_daily()
        return MaintenanceSummary(purge=purge, seed=seed, report=report)


def _load_test_batches(total_count: int, batch_size: int) -> Iterator[list[str]]:
    """Yield synthetic 1-based names, one freshly built batch at a time."""
    for offset in range(0, total_count, batch_size):
        size = min(batch_size, total_count - offset)
        yield [f"{LOAD_TEST_PREFIX}{offset + index + 1}" for index in range(size)]
