"""Configuration model for shared SQL substrate access."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from packages.records_shared.config import RecordsSettings, resolve_component_settings

SUBSTRATE_COMPONENT_ID = "substrate_sql"


class SqlSettings(BaseModel):
    """Runtime settings for constructing SQLAlchemy engines and pools."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    url: str = "sqlite:///records.db"
    echo: bool = False
    pool_pre_ping: bool = True
    pool_size: int = Field(default=5, gt=0)
    max_overflow: int = Field(default=10, ge=0)
    pool_timeout_seconds: float = Field(default=30.0, gt=0)
    create_schema: bool = True

    @field_validator("url")
    @classmethod
    def _validate_url(cls, value: str) -> str:
        """Require a non-empty SQLAlchemy URL."""
        normalized = value.strip()
        if normalized == "":
            raise ValueError("url is required")
        return normalized

    @property
    def is_sqlite(self) -> bool:
        """Return ``True`` when the URL targets SQLite."""
        return self.url.startswith("sqlite")


def resolve_sql_settings(settings: RecordsSettings) -> SqlSettings:
    """Resolve SQL settings from ``components.substrate.sql``."""
    return resolve_component_settings(
        settings=settings,
        component_id=SUBSTRATE_COMPONENT_ID,
        model=SqlSettings,
    )
