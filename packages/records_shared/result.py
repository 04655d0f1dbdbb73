"""Typed success/failure result for in-process store calls."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Generic, Iterable, TypeVar

from packages.records_shared.errors import ErrorDetail, RecordValidationError

T = TypeVar("T")


@dataclass(frozen=True)
class Result(Generic[T]):
    """Payload-or-errors response returned by validating store operations."""

    payload: T | None
    errors: list[ErrorDetail] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        """Return ``True`` when no errors are present."""
        return len(self.errors) == 0

    def unwrap(self) -> T:
        """Return the payload or raise ``RecordValidationError`` on failure."""
        if not self.ok or self.payload is None:
            raise RecordValidationError(self.errors)
        return self.payload


def success(payload: T) -> Result[T]:
    """Build a successful result with payload and no errors."""
    return Result(payload=payload, errors=[])


def failure(errors: Iterable[ErrorDetail]) -> Result[T]:
    """Build a failed result carrying one or more errors."""
    return Result(payload=None, errors=list(errors))
