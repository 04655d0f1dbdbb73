"""SQLAlchemy engine construction for the shared SQL substrate."""

from __future__ import annotations

from typing import Any

from sqlalchemy import Engine, create_engine, make_url
from sqlalchemy.pool import StaticPool

from resources.substrates.sql.config import SqlSettings


def create_sql_engine(config: SqlSettings) -> Engine:
    """Construct a configured SQLAlchemy engine.

    SQLite in-memory databases share one connection so every session sees the
    same data; file-backed SQLite allows connections to cross threads. Other
    backends get a sized connection pool.
    """
    kwargs: dict[str, Any] = {
        "echo": config.echo,
        "pool_pre_ping": config.pool_pre_ping,
    }
    if config.is_sqlite:
        kwargs["connect_args"] = {"check_same_thread": False}
        if is_sqlite_memory_url(config.url):
            kwargs["poolclass"] = StaticPool
    else:
        kwargs.update(
            pool_size=config.pool_size,
            max_overflow=config.max_overflow,
            pool_timeout=config.pool_timeout_seconds,
        )
    return create_engine(config.url, **kwargs)


def is_sqlite_memory_url(url: str) -> bool:
    """Return ``True`` for SQLite URLs that address a private in-memory database."""
    parsed = make_url(url)
    if parsed.get_backend_name() != "sqlite":
        return False
    return parsed.database in (None, "", ":memory:")
