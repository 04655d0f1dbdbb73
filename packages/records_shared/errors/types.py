"""Error taxonomy shared across record store and lifecycle boundaries.

Validation rejections travel as ``ErrorDetail`` values inside failure
results; store failures are left as the raising backend's exceptions and only
normalized into ``ErrorDetail`` at the outermost boundary (the CLI).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Mapping


class ErrorCategory(str, Enum):
    """High-level error categories."""

    UNSPECIFIED = "unspecified"
    VALIDATION = "validation"
    CONFLICT = "conflict"
    NOT_FOUND = "not_found"
    DEPENDENCY = "dependency"
    INTERNAL = "internal"


@dataclass(frozen=True)
class ErrorDetail:
    """Structured error object carried by failure results."""

    code: str
    message: str
    category: ErrorCategory
    retryable: bool = False
    metadata: Mapping[str, str] = field(default_factory=dict)


class RecordValidationError(ValueError):
    """Raised when a workflow cannot continue past a rejected record name."""

    def __init__(self, errors: list[ErrorDetail]) -> None:
        self.errors = list(errors)
        message = "; ".join(error.message for error in self.errors)
        super().__init__(message or "record validation failed")
