"""Records CLI actor implemented with Typer."""

from __future__ import annotations

import json
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable

import typer
from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError

from packages.records_shared.clock import SystemClock
from packages.records_shared.config import RecordsSettings, load_settings
from packages.records_shared.errors import (
    ErrorDetail,
    RecordValidationError,
    exception_to_error,
)
from packages.records_shared.events import LoggingEventSink
from packages.records_shared.logging import configure_logging
from resources.substrates.sql import normalize_sql_error
from services.action.record_lifecycle import (
    LifecycleSettings,
    RecordLifecycleService,
    build_record_lifecycle_service,
    resolve_lifecycle_settings,
)
from services.state.record_store import Record, RecordStore, build_record_store

SUCCESS_EXIT_CODE = 0
VALIDATION_ERROR_EXIT_CODE = 2
NOT_FOUND_EXIT_CODE = 3
STORE_UNAVAILABLE_EXIT_CODE = 4


@dataclass(frozen=True)
class CliConfig:
    """Global CLI runtime options shared by every command."""

    config_path: Path | None
    as_json: bool


@dataclass(frozen=True)
class CliRuntime:
    """Store and engine wired from resolved settings for one command."""

    settings: RecordsSettings
    lifecycle: LifecycleSettings
    store: RecordStore
    engine: RecordLifecycleService


class RecordNotFound(LookupError):
    """Raised by record-level commands addressing an unknown id."""

    def __init__(self, record_id: int) -> None:
        super().__init__(f"record {record_id} not found")
        self.record_id = record_id


class RecordStoreDegraded(ConnectionError):
    """Raised when the store health check reports not ready."""


def _serialize(value: Any) -> Any:
    """Convert command results to JSON-serializable structures."""
    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    if isinstance(value, dict):
        return {str(key): _serialize(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_serialize(item) for item in value]
    return str(value)


def _emit_output(result: Any, as_json: bool) -> None:
    """Render command output in requested format."""
    if as_json:
        typer.echo(json.dumps(_serialize(result), sort_keys=True, separators=(",", ":")))
        return
    typer.echo(_render_human(result))


def _emit_error(error: ErrorDetail, as_json: bool) -> None:
    """Render one mapped failure to stderr."""
    payload = {"code": error.code, "message": error.message}
    if as_json:
        typer.echo(json.dumps({"error": payload}, sort_keys=True), err=True)
        return
    typer.echo(f"error: {payload['message']}", err=True)


def _render_human(result: Any) -> str:
    """Return operator-oriented text for recognized result shapes."""
    if isinstance(result, dict) and "summary" in result:
        lines = [_render_human(result["summary"]), "", "All records:"]
        lines.append(_render_human(result["records"]))
        return "\n".join(lines)
    if isinstance(result, list):
        if len(result) == 0:
            return "No records found."
        return "\n".join(_render_record(item) for item in result)
    if isinstance(result, Record):
        return _render_record(result)
    if isinstance(result, BaseModel):
        return json.dumps(result.model_dump(mode="json"), indent=2, sort_keys=True)
    if result is None:
        return "ok"
    return str(result)


def _render_record(record: Record) -> str:
    """Render one record as a single line."""
    return f"ID: {record.id}, Name: {record.name}, Created: {record.created_at.isoformat()}"


@contextmanager
def _open_runtime(cfg: CliConfig) -> Iterator[CliRuntime]:
    """Wire settings, logging, store and engine; release the engine pool on exit."""
    settings = load_settings(config_path=cfg.config_path)
    configure_logging(settings.logging, stream=sys.stderr)
    lifecycle = resolve_lifecycle_settings(settings)
    sink = LoggingEventSink()
    clock = SystemClock()

    store, sql_runtime = build_record_store(settings=settings, sink=sink, clock=clock)
    try:
        engine = build_record_lifecycle_service(
            store=store,
            sink=sink,
            clock=clock,
            progress_interval=lifecycle.import_progress_interval,
        )
        yield CliRuntime(
            settings=settings, lifecycle=lifecycle, store=store, engine=engine
        )
    finally:
        if sql_runtime is not None:
            sql_runtime.close()


def _run_command(cfg: CliConfig, invoke: Callable[[CliRuntime], Any]) -> None:
    """Execute one command and map outputs/errors to process semantics."""
    try:
        with _open_runtime(cfg) as runtime:
            result = invoke(runtime)
    except RecordValidationError as exc:
        for error in exc.errors or [exception_to_error(exc)]:
            _emit_error(error, cfg.as_json)
        raise typer.Exit(code=VALIDATION_ERROR_EXIT_CODE) from exc
    except RecordNotFound as exc:
        _emit_error(exception_to_error(exc), cfg.as_json)
        raise typer.Exit(code=NOT_FOUND_EXIT_CODE) from exc
    except SQLAlchemyError as exc:
        _emit_error(normalize_sql_error(exc), cfg.as_json)
        raise typer.Exit(code=STORE_UNAVAILABLE_EXIT_CODE) from exc
    except RecordStoreDegraded as exc:
        _emit_error(exception_to_error(exc), cfg.as_json)
        raise typer.Exit(code=STORE_UNAVAILABLE_EXIT_CODE) from exc
    except ValueError as exc:
        _emit_error(exception_to_error(exc), cfg.as_json)
        raise typer.Exit(code=VALIDATION_ERROR_EXIT_CODE) from exc

    _emit_output(result, cfg.as_json)
    raise typer.Exit(code=SUCCESS_EXIT_CODE)


def _require_config(ctx: typer.Context) -> CliConfig:
    """Return required CLI config from Typer context."""
    config = ctx.obj
    if not isinstance(config, CliConfig):
        raise RuntimeError("CLI configuration not initialized")
    return config


app = typer.Typer(no_args_is_help=True, help="Records maintenance command-line interface")


@app.callback()
def main(
    ctx: typer.Context,
    config: Path | None = typer.Option(
        None,
        "--config",
        envvar="RECORDS_CONFIG_PATH",
        help="YAML settings file (default ~/.config/records/records.yaml)",
    ),
    as_json: bool = typer.Option(False, "--json", help="Emit JSON output"),
) -> None:
    """Store global options for all commands."""
    ctx.obj = CliConfig(config_path=config, as_json=as_json)


@app.command("run")
def run_command(ctx: typer.Context) -> None:
    """Purge expired records, seed the catalog, report, then list every record."""
    cfg = _require_config(ctx)

    def _invoke(runtime: CliRuntime) -> dict[str, Any]:
        summary = runtime.engine.run_maintenance(runtime.lifecycle)
        return {"summary": summary, "records": list(runtime.store.get_all())}

    _run_command(cfg, _invoke)


@app.command("report")
def report_command(ctx: typer.Context) -> None:
    """Report records created today (UTC) and stored in total."""
    cfg = _require_config(ctx)
    _run_command(cfg, lambda runtime: runtime.engine.report_daily())


@app.command("purge")
def purge_command(
    ctx: typer.Context,
    days: int | None = typer.Option(
        None, "--days", help="Retention window in days (default from settings)"
    ),
) -> None:
    """Delete records older than the retention window."""
    cfg = _require_config(ctx)
    _run_command(
        cfg,
        lambda runtime: runtime.engine.purge_expired(
            retention_days=runtime.lifecycle.data_retention_days if days is None else days
        ),
    )


@app.command("seed")
def seed_command(
    ctx: typer.Context,
    prefix: str | None = typer.Option(
        None, "--prefix", help="Name prefix (default from settings)"
    ),
) -> None:
    """Insert the configured catalog names that are not stored yet."""
    cfg = _require_config(ctx)
    _run_command(
        cfg,
        lambda runtime: runtime.engine.seed_from_catalog(
            prefix=runtime.lifecycle.batch_operation_prefix if prefix is None else prefix,
            catalog=runtime.lifecycle.seed_products,
        ),
    )


@app.command("import")
def import_command(
    ctx: typer.Context,
    count: int | None = typer.Option(
        None, "--count", help="Records to generate (default from settings)"
    ),
    batch_size: int | None = typer.Option(
        None, "--batch-size", help="Records per batch (default from settings)"
    ),
) -> None:
    """Insert synthetic LoadTest-N records in bounded batches."""
    cfg = _require_config(ctx)
    _run_command(
        cfg,
        lambda runtime: runtime.engine.bulk_import(
            total_count=runtime.lifecycle.import_default_count if count is None else count,
            batch_size=(
                runtime.lifecycle.import_batch_size if batch_size is None else batch_size
            ),
        ),
    )


@app.command("add")
def add_command(
    ctx: typer.Context, name: str = typer.Argument(..., help="Record name")
) -> None:
    """Insert one record."""
    cfg = _require_config(ctx)
    _run_command(cfg, lambda runtime: runtime.store.insert(name).unwrap())


@app.command("get")
def get_command(
    ctx: typer.Context, record_id: int = typer.Argument(..., help="Record id")
) -> None:
    """Show one record."""
    cfg = _require_config(ctx)

    def _invoke(runtime: CliRuntime) -> Record:
        record = runtime.store.get_by_id(record_id)
        if record is None:
            raise RecordNotFound(record_id)
        return record

    _run_command(cfg, _invoke)


@app.command("remove")
def remove_command(
    ctx: typer.Context, record_id: int = typer.Argument(..., help="Record id")
) -> None:
    """Delete one record."""
    cfg = _require_config(ctx)

    def _invoke(runtime: CliRuntime) -> None:
        if not runtime.store.delete_by_id(record_id):
            raise RecordNotFound(record_id)

    _run_command(cfg, _invoke)


@app.command("list")
def list_command(ctx: typer.Context) -> None:
    """List every record, oldest first."""
    cfg = _require_config(ctx)
    _run_command(cfg, lambda runtime: list(runtime.store.get_all()))


@app.command("health")
def health_command(ctx: typer.Context) -> None:
    """Report record store readiness."""
    cfg = _require_config(ctx)

    def _invoke(runtime: CliRuntime) -> Any:
        status = runtime.store.health()
        if not status.ready:
            raise RecordStoreDegraded(f"record store degraded: {status.detail}")
        return status

    _run_command(cfg, _invoke)


if __name__ == "__main__":
    app()
