"""UTC clock abstraction injected into the store and lifecycle engine."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Protocol


class Clock(Protocol):
    """Source of the current UTC time."""

    def now(self) -> datetime:
        """Return the current time as a UTC-aware datetime."""


class SystemClock:
    """Wall clock reading ``datetime.now`` in UTC."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class FixedClock:
    """Settable clock for deterministic runs and tests."""

    def __init__(self, value: datetime) -> None:
        self._value = to_utc(value)

    def now(self) -> datetime:
        return self._value

    def set(self, value: datetime) -> None:
        """Move the clock to an absolute instant."""
        self._value = to_utc(value)

    def advance(self, delta: timedelta) -> None:
        """Move the clock forward (or backward, for negative deltas)."""
        self._value = self._value + delta


def to_utc(value: datetime) -> datetime:
    """Convert a datetime to UTC, treating naive values as already UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def start_of_day(value: datetime) -> datetime:
    """Return UTC midnight of the day containing ``value``."""
    utc_value = to_utc(value)
    return utc_value.replace(hour=0, minute=0, second=0, microsecond=0)
