"""Invocation/completion logging for public service methods."""

from __future__ import annotations

from dataclasses import dataclass
from functools import wraps
from time import perf_counter
from typing import Any, Callable, Mapping

from . import fields
from .context import log_context


@dataclass(frozen=True)
class InvocationContext:
    """Structured metadata describing one public API invocation."""

    component_id: str
    api_name: str
    references: Mapping[str, Any]


@dataclass(frozen=True)
class CompletionContext:
    """Structured metadata describing one completed public API invocation."""

    invocation: InvocationContext
    success: bool
    duration_ms: float
    errors: list[str]


def public_api_logged(
    *,
    logger: Any,
    component_id: str,
    api_name: str | None = None,
    id_fields: tuple[str, ...] = (),
) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """Decorate one public API method with structured invocation logging.

    Exceptions raised by the wrapped method are logged as failed completions
    and re-raised unchanged.
    """

    def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
        method_name = api_name or func.__name__

        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            invocation = InvocationContext(
                component_id=component_id,
                api_name=method_name,
                references={
                    name: kwargs[name]
                    for name in id_fields
                    if kwargs.get(name) not in (None, "")
                },
            )
            with log_context(_invocation_log_context(invocation)):
                logger.info("Public API invocation")

            started = perf_counter()
            try:
                result = func(*args, **kwargs)
            except Exception as exc:
                _log_completion(
                    logger=logger,
                    context=CompletionContext(
                        invocation=invocation,
                        success=False,
                        duration_ms=_elapsed_ms(started),
                        errors=[f"{type(exc).__name__}: {exc}"],
                    ),
                )
                raise

            success, errors = _result_summary(result)
            _log_completion(
                logger=logger,
                context=CompletionContext(
                    invocation=invocation,
                    success=success,
                    duration_ms=_elapsed_ms(started),
                    errors=errors,
                ),
            )
            return result

        return wrapper

    return decorator


def _elapsed_ms(started: float) -> float:
    return round((perf_counter() - started) * 1000.0, 3)


def _result_summary(result: object) -> tuple[bool, list[str]]:
    """Infer success and error summaries from a result-like value."""
    errors_obj = getattr(result, "errors", [])
    errors: list[str] = []
    if isinstance(errors_obj, list):
        for item in errors_obj:
            code = getattr(item, "code", None)
            message = getattr(item, "message", None)
            if message in (None, ""):
                continue
            errors.append(str(message) if code in (None, "") else f"{code}: {message}")
    ok_value = getattr(result, "ok", None)
    if isinstance(ok_value, bool):
        return ok_value, errors
    return len(errors) == 0, errors


def _invocation_log_context(context: InvocationContext) -> dict[str, object]:
    return {
        fields.EVENT: fields.PUBLIC_API_INVOCATION_EVENT,
        fields.COMPONENT_ID: context.component_id,
        fields.API_NAME: context.api_name,
        **context.references,
    }


def _log_completion(*, logger: Any, context: CompletionContext) -> None:
    payload = _invocation_log_context(context.invocation)
    payload.update(
        {
            fields.EVENT: fields.PUBLIC_API_COMPLETION_EVENT,
            fields.SUCCESS: context.success,
            fields.DURATION_MS: context.duration_ms,
            fields.ERRORS: context.errors,
        }
    )
    with log_context(payload):
        if context.success:
            logger.info("Public API completion")
        else:
            logger.warning("Public API completion")
