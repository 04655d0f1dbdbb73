"""Result payloads returned by record lifecycle workflows."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class DailyReport(BaseModel):
    """Counts of records created today (UTC) and stored overall."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    day_start: datetime
    today_count: int = Field(ge=0)
    total_count: int = Field(ge=0)


class PurgeResult(BaseModel):
    """Outcome of one retention purge."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    cutoff: datetime
    removed_count: int = Field(ge=0)


class SeedResult(BaseModel):
    """Outcome of one deduplicated catalog seeding."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    inserted: int = Field(ge=0)
    skipped: int = Field(ge=0)


class ImportResult(BaseModel):
    """Outcome of one batched synthetic import."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    inserted: int = Field(ge=0)
    batches: int = Field(ge=0)


class MaintenanceSummary(BaseModel):
    """Combined results of the purge, seed and report maintenance pass."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    purge: PurgeResult
    seed: SeedResult
    report: DailyReport
