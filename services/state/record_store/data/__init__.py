"""Data-layer exports for the SQL record store."""

from services.state.record_store.data.repository import SqlRecordStore
from services.state.record_store.data.runtime import RecordSqlRuntime

__all__ = ["RecordSqlRuntime", "SqlRecordStore"]
