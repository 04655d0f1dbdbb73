"""Record store package exports."""

from services.state.record_store.config import RecordStoreSettings
from services.state.record_store.data import RecordSqlRuntime, SqlRecordStore
from services.state.record_store.domain import MAX_NAME_LENGTH, HealthStatus, Record
from services.state.record_store.interfaces import RecordStore
from services.state.record_store.memory import InMemoryRecordStore
from services.state.record_store.service import build_record_store

__all__ = [
    "MAX_NAME_LENGTH",
    "HealthStatus",
    "InMemoryRecordStore",
    "Record",
    "RecordSqlRuntime",
    "RecordStore",
    "RecordStoreSettings",
    "SqlRecordStore",
    "build_record_store",
]
