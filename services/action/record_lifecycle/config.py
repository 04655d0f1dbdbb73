"""Pydantic settings for record lifecycle workflows."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from packages.records_shared.config import RecordsSettings, resolve_component_settings

SERVICE_COMPONENT_ID = "service_record_lifecycle"

DEFAULT_IMPORT_COUNT = 1_000_000
DEFAULT_IMPORT_BATCH_SIZE = 10_000
DEFAULT_PROGRESS_INTERVAL = 50_000


class LifecycleSettings(BaseModel):
    """Business rules and seed data consumed by lifecycle workflows."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    data_retention_days: int = Field(default=30, ge=0)
    batch_operation_prefix: str = "Batch-"
    seed_products: tuple[str, ...] = ("Alpha", "Beta", "Gamma")
    import_default_count: int = Field(default=DEFAULT_IMPORT_COUNT, ge=0)
    import_batch_size: int = Field(default=DEFAULT_IMPORT_BATCH_SIZE, gt=0)
    import_progress_interval: int = Field(default=DEFAULT_PROGRESS_INTERVAL, gt=0)

    @field_validator("seed_products")
    @classmethod
    def _reject_blank_products(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        """Catalog entries must carry text; order and duplicates are preserved."""
        for product in value:
            if product.strip() == "":
                raise ValueError("seed_products entries must be non-empty")
        return value


def resolve_lifecycle_settings(settings: RecordsSettings) -> LifecycleSettings:
    """Resolve lifecycle settings from ``components.service.record_lifecycle``."""
    return resolve_component_settings(
        settings=settings,
        component_id=SERVICE_COMPONENT_ID,
        model=LifecycleSettings,
    )
