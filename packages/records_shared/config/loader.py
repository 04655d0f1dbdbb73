"""Settings loading with deterministic precedence.

The cascade is always:
1) CLI params
2) Environment variables (``RECORDS_`` prefix, ``__`` nesting)
3) YAML config file (``~/.config/records/records.yaml`` by default)
4) Model defaults

Example: ``RECORDS_LOGGING__LEVEL=DEBUG`` -> ``logging.level = "DEBUG"``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, ClassVar, Mapping

from .models import DEFAULT_CONFIG_PATH, RecordsSettings


def load_settings(
    *,
    cli_params: Mapping[str, Any] | None = None,
    config_path: str | Path | None = None,
) -> RecordsSettings:
    """Load ``RecordsSettings`` applying the standard precedence cascade."""
    resolved = Path(config_path) if config_path is not None else DEFAULT_CONFIG_PATH

    class _BoundSettings(RecordsSettings):
        _config_path: ClassVar[Path] = resolved

    return _BoundSettings(**dict(cli_params or {}))
