"""Record-store-owned SQL runtime wiring."""

from __future__ import annotations

from dataclasses import dataclass

from packages.records_shared.config import RecordsSettings
from packages.records_shared.logging import get_logger
from resources.substrates.sql import SharedSqlSubstrate, resolve_sql_settings

from .schema import metadata

_LOGGER = get_logger(__name__)


@dataclass(frozen=True)
class RecordSqlRuntime:
    """Concrete handle for record-store SQL access."""

    substrate: SharedSqlSubstrate

    @classmethod
    def from_settings(cls, settings: RecordsSettings) -> "RecordSqlRuntime":
        """Build the runtime and create the ``records`` table when enabled."""
        substrate = SharedSqlSubstrate(settings=resolve_sql_settings(settings))
        runtime = cls(substrate=substrate)
        if substrate.settings.create_schema:
            runtime.create_schema()
        return runtime

    def create_schema(self) -> None:
        """Create store-owned tables that do not exist yet."""
        metadata.create_all(self.substrate.engine)
        _LOGGER.info("Record store schema ready")

    def close(self) -> None:
        self.substrate.dispose()
