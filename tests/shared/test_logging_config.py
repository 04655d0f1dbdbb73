"""Tests for stdout logging configuration and structured context."""

from __future__ import annotations

import io
import json
import logging
import sys
from collections.abc import Iterator

import pytest

from packages.records_shared.config import LoggingSettings
from packages.records_shared.logging import (
    bind_context,
    clear_context,
    configure_logging,
    get_context,
    log_context,
)
from packages.records_shared.logging.config import (
    ContextFilter,
    JsonFormatter,
    PlainFormatter,
)


@pytest.fixture(autouse=True)
def _isolated_logging() -> Iterator[None]:
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    clear_context()
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    clear_context()


def _record(message: str = "hello", level: int = logging.INFO) -> logging.LogRecord:
    record = logging.LogRecord(
        name="records.test",
        level=level,
        pathname=__file__,
        lineno=1,
        msg=message,
        args=(),
        exc_info=None,
    )
    ContextFilter().filter(record)
    return record


def test_log_context_binds_only_within_block() -> None:
    bind_context(service="records")

    with log_context({"record_id": 5, "skipped": None}):
        assert get_context() == {"service": "records", "record_id": 5}

    assert get_context() == {"service": "records"}


def test_clear_context_drops_every_field() -> None:
    bind_context(a=1, b=2)

    clear_context()

    assert get_context() == {}


def test_json_formatter_emits_core_fields_and_context() -> None:
    with log_context({"event": "record_added", "record_id": 3, "success": True}):
        payload = json.loads(JsonFormatter().format(_record("added")))

    assert payload["level"] == "INFO"
    assert payload["logger"] == "records.test"
    assert payload["message"] == "added"
    assert payload["event"] == "record_added"
    assert payload["record_id"] == 3
    assert payload["success"] is True
    assert "timestamp" in payload


def test_plain_formatter_appends_sorted_context() -> None:
    with log_context({"zeta": "z", "alpha": "a"}):
        line = PlainFormatter().format(_record("plain"))

    assert line.endswith("INFO records.test plain alpha=a zeta=z")


def test_plain_formatter_without_context_has_no_suffix() -> None:
    line = PlainFormatter().format(_record("bare"))

    assert line.endswith("INFO records.test bare")


def test_configure_logging_replaces_root_handlers() -> None:
    configure_logging(LoggingSettings(level="WARNING", json_output=False))
    configure_logging(LoggingSettings(level="DEBUG", service="records"))

    root = logging.getLogger()
    assert len(root.handlers) == 1
    handler = root.handlers[0]
    assert isinstance(handler.formatter, JsonFormatter)
    assert handler.stream is sys.stdout
    assert root.level == logging.DEBUG
    assert get_context()["service"] == "records"
    assert get_context()["environment"] == "dev"


def test_configure_logging_writes_to_the_given_stream() -> None:
    stream = io.StringIO()
    configure_logging(LoggingSettings(level="INFO"), stream=stream)

    with log_context({"count": 2}):
        logging.getLogger("records.test").info("purged")

    payload = json.loads(stream.getvalue())
    assert payload["message"] == "purged"
    assert payload["count"] == 2
    assert payload["service"] == "records"
