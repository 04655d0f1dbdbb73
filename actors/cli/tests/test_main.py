"""CLI tests for the records Typer commands."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterator
from pathlib import Path
from typing import Any

import pytest
from typer.testing import CliRunner

from actors.cli.main import (
    NOT_FOUND_EXIT_CODE,
    STORE_UNAVAILABLE_EXIT_CODE,
    VALIDATION_ERROR_EXIT_CODE,
    app,
)
from packages.records_shared.logging import clear_context

runner = CliRunner()


@pytest.fixture(autouse=True)
def _restore_root_logging() -> Iterator[None]:
    """Undo the root handler swap performed by each CLI invocation."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    clear_context()


@pytest.fixture()
def config_path(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the CLI at a throwaway SQLite file and a missing YAML file."""
    monkeypatch.setenv(
        "RECORDS_COMPONENTS__SUBSTRATE__SQL__URL",
        f"sqlite:///{tmp_path / 'records.db'}",
    )
    monkeypatch.setenv("RECORDS_LOGGING__LEVEL", "ERROR")
    return tmp_path / "absent.yaml"


def _invoke(config_path: Path, *args: str) -> Any:
    return runner.invoke(app, ["--config", str(config_path), "--json", *args])


def _json(result: Any) -> Any:
    assert result.exit_code == 0, result.output
    return json.loads(result.stdout)


def test_add_then_get_round_trips(config_path: Path) -> None:
    added = _json(_invoke(config_path, "add", "Widget"))
    fetched = _json(_invoke(config_path, "get", str(added["id"])))

    assert fetched == added
    assert fetched["name"] == "Widget"


def test_add_rejects_overlong_name_with_validation_exit(config_path: Path) -> None:
    result = _invoke(config_path, "add", "x" * 501)

    assert result.exit_code == VALIDATION_ERROR_EXIT_CODE
    assert "cannot exceed 500 characters" in result.output
    assert _json(_invoke(config_path, "list")) == []


def test_get_and_remove_unknown_ids_exit_not_found(config_path: Path) -> None:
    assert _invoke(config_path, "get", "42").exit_code == NOT_FOUND_EXIT_CODE
    assert _invoke(config_path, "remove", "42").exit_code == NOT_FOUND_EXIT_CODE


def test_remove_deletes_once(config_path: Path) -> None:
    added = _json(_invoke(config_path, "add", "Doomed"))

    assert _invoke(config_path, "remove", str(added["id"])).exit_code == 0
    assert (
        _invoke(config_path, "remove", str(added["id"])).exit_code
        == NOT_FOUND_EXIT_CODE
    )


def test_seed_is_idempotent_across_invocations(config_path: Path) -> None:
    first = _json(_invoke(config_path, "seed"))
    second = _json(_invoke(config_path, "seed"))
    names = [record["name"] for record in _json(_invoke(config_path, "list"))]

    assert first == {"inserted": 3, "skipped": 0}
    assert second == {"inserted": 0, "skipped": 3}
    assert names == ["Batch-Alpha", "Batch-Beta", "Batch-Gamma"]


def test_seed_prefix_option_overrides_settings(config_path: Path) -> None:
    _json(_invoke(config_path, "seed", "--prefix", "Nightly-"))
    names = [record["name"] for record in _json(_invoke(config_path, "list"))]

    assert names == ["Nightly-Alpha", "Nightly-Beta", "Nightly-Gamma"]


def test_report_counts_records_created_today(config_path: Path) -> None:
    _invoke(config_path, "add", "one")
    _invoke(config_path, "add", "two")

    report = _json(_invoke(config_path, "report"))

    assert report["today_count"] == 2
    assert report["total_count"] == 2


def test_purge_keeps_fresh_records_and_rejects_negative_days(
    config_path: Path,
) -> None:
    _invoke(config_path, "add", "fresh")

    purged = _json(_invoke(config_path, "purge"))
    rejected = _invoke(config_path, "purge", "--days", "-1")

    assert purged["removed_count"] == 0
    assert rejected.exit_code == VALIDATION_ERROR_EXIT_CODE
    assert "retention_days" in rejected.output


def test_import_generates_sequential_load_test_records(config_path: Path) -> None:
    result = _json(_invoke(config_path, "import", "--count", "25", "--batch-size", "10"))
    names = [record["name"] for record in _json(_invoke(config_path, "list"))]

    assert result == {"inserted": 25, "batches": 3}
    assert names == [f"LoadTest-{index}" for index in range(1, 26)]


def test_run_purges_seeds_reports_and_lists(config_path: Path) -> None:
    output = _json(_invoke(config_path, "run"))

    assert output["summary"]["seed"] == {"inserted": 3, "skipped": 0}
    assert output["summary"]["report"]["total_count"] == 3
    assert [record["name"] for record in output["records"]] == [
        "Batch-Alpha",
        "Batch-Beta",
        "Batch-Gamma",
    ]


def test_yaml_settings_drive_catalog(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("RECORDS_LOGGING__LEVEL", "ERROR")
    config_file = tmp_path / "records.yaml"
    config_file.write_text(
        "\n".join(
            [
                "components:",
                "  substrate:",
                "    sql:",
                f"      url: sqlite:///{tmp_path / 'yaml.db'}",
                "  service:",
                "    record_lifecycle:",
                "      batch_operation_prefix: Cfg-",
                "      seed_products: [X, Y]",
            ]
        ),
        encoding="utf-8",
    )

    _json(_invoke(config_file, "seed"))
    names = [record["name"] for record in _json(_invoke(config_file, "list"))]

    assert names == ["Cfg-X", "Cfg-Y"]
    assert (tmp_path / "yaml.db").exists()


def test_memory_backend_is_selectable(
    config_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("RECORDS_COMPONENTS__SERVICE__RECORD_STORE__BACKEND", "memory")

    added = _json(_invoke(config_path, "add", "ephemeral"))

    assert added["id"] == 1
    assert _json(_invoke(config_path, "list")) == []


def test_unreachable_store_exits_with_store_unavailable(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("RECORDS_LOGGING__LEVEL", "ERROR")
    monkeypatch.setenv(
        "RECORDS_COMPONENTS__SUBSTRATE__SQL__URL",
        f"sqlite:///{tmp_path / 'missing' / 'records.db'}",
    )

    result = _invoke(tmp_path / "absent.yaml", "report")

    assert result.exit_code == STORE_UNAVAILABLE_EXIT_CODE
    assert "STORE_UNAVAILABLE" in result.output


def test_health_reports_ready(config_path: Path) -> None:
    status = _json(_invoke(config_path, "health"))

    assert status["ready"] is True


def test_human_output_lists_records(config_path: Path) -> None:
    empty = runner.invoke(app, ["--config", str(config_path), "list"])
    runner.invoke(app, ["--config", str(config_path), "add", "Plain"])
    listed = runner.invoke(app, ["--config", str(config_path), "list"])

    assert empty.output.strip() == "No records found."
    assert listed.exit_code == 0
    assert "Name: Plain" in listed.output
    assert listed.output.startswith("ID: 1,")


def test_json_stdout_stays_parseable_with_info_logging(
    config_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("RECORDS_LOGGING__LEVEL", "INFO")

    result = _invoke(config_path, "report")
    report = _json(result)

    assert report["total_count"] == 0
    assert "Public API invocation" in result.stderr
    assert "Public API invocation" not in result.stdout
