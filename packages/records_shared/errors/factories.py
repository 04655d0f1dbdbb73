"""Constructors for ``ErrorDetail`` values, one per error category."""

from __future__ import annotations

from typing import Mapping

from . import codes
from .types import ErrorCategory, ErrorDetail

Metadata = Mapping[str, str] | None


def _detail(
    category: ErrorCategory,
    message: str,
    code: str,
    metadata: Metadata,
    *,
    retryable: bool = False,
) -> ErrorDetail:
    return ErrorDetail(
        code=code,
        message=message,
        category=category,
        retryable=retryable,
        metadata=dict(metadata or {}),
    )


def validation_error(
    message: str, *, code: str = codes.VALIDATION_ERROR, metadata: Metadata = None
) -> ErrorDetail:
    """Rejected input; the call made no change."""
    return _detail(ErrorCategory.VALIDATION, message, code, metadata)


def not_found_error(
    message: str, *, code: str = codes.NOT_FOUND, metadata: Metadata = None
) -> ErrorDetail:
    return _detail(ErrorCategory.NOT_FOUND, message, code, metadata)


def conflict_error(
    message: str, *, code: str = codes.CONFLICT, metadata: Metadata = None
) -> ErrorDetail:
    return _detail(ErrorCategory.CONFLICT, message, code, metadata)


def dependency_error(
    message: str,
    *,
    code: str = codes.DEPENDENCY_FAILURE,
    retryable: bool = True,
    metadata: Metadata = None,
) -> ErrorDetail:
    """The record store (or its driver) failed; ``retryable`` marks transient faults."""
    return _detail(ErrorCategory.DEPENDENCY, message, code, metadata, retryable=retryable)


def internal_error(
    message: str, *, code: str = codes.INTERNAL_ERROR, metadata: Metadata = None
) -> ErrorDetail:
    return _detail(ErrorCategory.INTERNAL, message, code, metadata)
