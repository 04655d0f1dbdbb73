"""Generic exception normalization into ``ErrorDetail``."""

from __future__ import annotations

from . import codes
from .factories import dependency_error, internal_error, not_found_error, validation_error
from .types import ErrorDetail, RecordValidationError


def exception_to_error(exc: Exception) -> ErrorDetail:
    """Normalize a Python exception into a shared ``ErrorDetail``.

    Backend-specific normalizers (for example the SQL substrate's) should run
    first and fall back to this mapping.
    """
    metadata = {"exception_type": type(exc).__name__}

    if isinstance(exc, RecordValidationError) and exc.errors:
        return exc.errors[0]

    if isinstance(exc, ValueError):
        return validation_error(str(exc), code=codes.INVALID_ARGUMENT, metadata=metadata)

    if isinstance(exc, LookupError):
        return not_found_error(str(exc), code=codes.RECORD_NOT_FOUND, metadata=metadata)

    if isinstance(exc, TimeoutError):
        return dependency_error(
            str(exc) or "store timeout",
            code=codes.DEPENDENCY_TIMEOUT,
            metadata=metadata,
        )

    if isinstance(exc, ConnectionError):
        return dependency_error(
            str(exc) or "store unavailable",
            code=codes.STORE_UNAVAILABLE,
            metadata=metadata,
        )

    return internal_error(
        str(exc) or "unexpected exception",
        code=codes.UNEXPECTED_EXCEPTION,
        metadata=metadata,
    )
