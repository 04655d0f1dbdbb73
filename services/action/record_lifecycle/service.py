"""Authoritative in-process Python API for record lifecycle workflows."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence

from packages.records_shared.clock import Clock
from packages.records_shared.events import EventSink
from services.action.record_lifecycle.config import (
    DEFAULT_IMPORT_BATCH_SIZE,
    DEFAULT_IMPORT_COUNT,
    DEFAULT_PROGRESS_INTERVAL,
    LifecycleSettings,
)
from services.action.record_lifecycle.domain import (
    DailyReport,
    ImportResult,
    MaintenanceSummary,
    PurgeResult,
    SeedResult,
)
from services.state.record_store.interfaces import RecordStore


class RecordLifecycleService(ABC):
    """Public API for reporting, purging, seeding and importing records."""

    @abstractmethod
    def report_daily(self) -> DailyReport:
        """Count records created since UTC midnight and records overall."""

    @abstractmethod
    def purge_expired(self, *, retention_days: int) -> PurgeResult:
        """Delete every record older than ``retention_days`` days."""

    @abstractmethod
    def seed_from_catalog(
        self, *, prefix: str, catalog: Sequence[str]
    ) -> SeedResult:
        """Insert ``prefix + name`` for each catalog name not already stored."""

    @abstractmethod
    def bulk_import(
        self,
        *,
        total_count: int = DEFAULT_IMPORT_COUNT,
        batch_size: int = DEFAULT_IMPORT_BATCH_SIZE,
    ) -> ImportResult:
        """Insert ``total_count`` synthetic records in fixed-size batches."""

    @abstractmethod
    def run_maintenance(self, settings: LifecycleSettings) -> MaintenanceSummary:
        """Purge with configured retention, seed the catalog, then report."""


def build_record_lifecycle_service(
    *,
    store: RecordStore,
    sink: EventSink,
    clock: Clock,
    progress_interval: int = DEFAULT_PROGRESS_INTERVAL,
) -> RecordLifecycleService:
    """Build the default lifecycle implementation over an existing store."""
    from services.action.record_lifecycle.implementation import (
        DefaultRecordLifecycleService,
    )

    return DefaultRecordLifecycleService(
        store=store, sink=sink, clock=clock, progress_interval=progress_interval
    )
