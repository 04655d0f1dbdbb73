"""Record lifecycle engine package exports."""

from services.action.record_lifecycle.config import (
    LifecycleSettings,
    resolve_lifecycle_settings,
)
from services.action.record_lifecycle.domain import (
    DailyReport,
    ImportResult,
    MaintenanceSummary,
    PurgeResult,
    SeedResult,
)
from services.action.record_lifecycle.implementation import (
    DefaultRecordLifecycleService,
)
from services.action.record_lifecycle.service import (
    RecordLifecycleService,
    build_record_lifecycle_service,
)

__all__ = [
    "DailyReport",
    "DefaultRecordLifecycleService",
    "ImportResult",
    "LifecycleSettings",
    "MaintenanceSummary",
    "PurgeResult",
    "RecordLifecycleService",
    "SeedResult",
    "build_record_lifecycle_service",
    "resolve_lifecycle_settings",
]
