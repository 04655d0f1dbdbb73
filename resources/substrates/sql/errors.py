"""SQLAlchemy exception normalization helpers."""

from __future__ import annotations

from sqlalchemy import exc as sa_exc

from packages.records_shared.errors import (
    ErrorDetail,
    codes,
    conflict_error,
    dependency_error,
    exception_to_error,
    internal_error,
)


def normalize_sql_error(exc: Exception) -> ErrorDetail:
    """Map low-level DB exceptions into shared structured error semantics."""
    metadata = {"exception_type": type(exc).__name__}

    if isinstance(exc, sa_exc.IntegrityError):
        return conflict_error(
            "record violates a store constraint",
            code=codes.ALREADY_EXISTS,
            metadata=metadata,
        )

    if isinstance(exc, (sa_exc.OperationalError, sa_exc.TimeoutError)):
        return dependency_error(
            "record store unavailable",
            code=codes.STORE_UNAVAILABLE,
            retryable=True,
            metadata=metadata,
        )

    if isinstance(exc, (sa_exc.InterfaceError, sa_exc.ProgrammingError)):
        return dependency_error(
            "record store request failed",
            code=codes.DEPENDENCY_FAILURE,
            retryable=False,
            metadata=metadata,
        )

    if isinstance(exc, sa_exc.SQLAlchemyError):
        return internal_error(
            "unexpected record store failure",
            code=codes.UNEXPECTED_EXCEPTION,
            metadata=metadata,
        )

    return exception_to_error(exc)
