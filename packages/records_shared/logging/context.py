"""Structured logging context carried in a ``ContextVar``.

Values keep their Python types; formatters decide how to render them.
"""

from __future__ import annotations

from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, Iterator, Mapping

_LOG_CONTEXT: ContextVar[Mapping[str, Any]] = ContextVar("records_log_context", default={})


def get_context() -> dict[str, Any]:
    """Return a copy of the fields bound in the current context."""
    return dict(_LOG_CONTEXT.get())


def bind_context(**values: Any) -> None:
    """Add fields to the current context, ignoring ``None`` values."""
    merged = {**_LOG_CONTEXT.get()}
    merged.update((key, value) for key, value in values.items() if value is not None)
    _LOG_CONTEXT.set(merged)


def clear_context() -> None:
    _LOG_CONTEXT.set({})


@contextmanager
def log_context(values: Mapping[str, Any]) -> Iterator[None]:
    """Bind ``values`` for the duration of the block only."""
    token = _LOG_CONTEXT.set(_LOG_CONTEXT.get())
    try:
        bind_context(**values)
        yield
    finally:
        _LOG_CONTEXT.reset(token)
