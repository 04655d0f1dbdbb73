"""Domain contracts for stored records."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

MAX_NAME_LENGTH = 500


class Record(BaseModel):
    """One named, timestamped record. Immutable once created."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: int = Field(gt=0)
    name: str = Field(min_length=1, max_length=MAX_NAME_LENGTH)
    created_at: datetime


class HealthStatus(BaseModel):
    """Record store readiness payload."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    ready: bool
    detail: str
