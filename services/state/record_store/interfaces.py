"""Storage contract shared by every record store backing."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from datetime import datetime
from typing import Protocol

from packages.records_shared.result import Result
from services.state.record_store.domain import HealthStatus, Record


class RecordStore(Protocol):
    """Protocol for durable or in-memory record persistence."""

    def insert(self, name: str) -> Result[Record]:
        """Validate and persist one record stamped with the current UTC time."""

    def bulk_insert(self, names: Iterable[str]) -> int:
        """Persist every valid name in one unit of work and return the count."""

    def get_all(self) -> Iterator[Record]:
        """Lazily scan all records ordered by ``created_at`` then insertion order."""

    def count(self) -> int:
        """Return the total number of stored records."""

    def count_between(self, start: datetime, end: datetime) -> int:
        """Count records with ``start <= created_at < end``."""

    def exists_by_name(self, name: str) -> bool:
        """Return whether any record carries exactly this name."""

    def get_by_id(self, record_id: int) -> Record | None:
        """Read one record, or ``None`` for invalid or unknown ids."""

    def delete_by_id(self, record_id: int) -> bool:
        """Delete one record and return whether it existed."""

    def delete_older_than(self, cutoff: datetime) -> int:
        """Delete every record created before ``cutoff`` and return the count."""

    def health(self) -> HealthStatus:
        """Report backing readiness."""
