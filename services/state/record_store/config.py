"""Pydantic settings for record store behavior."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from packages.records_shared.config import RecordsSettings, resolve_component_settings

SERVICE_COMPONENT_ID = "service_record_store"


class RecordStoreSettings(BaseModel):
    """Record store runtime behavior settings."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    backend: str = Field(default="sql", pattern="^(sql|memory)$")
    scan_batch_size: int = Field(default=1000, gt=0)


def resolve_record_store_settings(settings: RecordsSettings) -> RecordStoreSettings:
    """Resolve store settings from ``components.service.record_store``."""
    return resolve_component_settings(
        settings=settings,
        component_id=SERVICE_COMPONENT_ID,
        model=RecordStoreSettings,
    )
