"""Shared SQL substrate owning one engine and its session factory."""

from __future__ import annotations

from sqlalchemy import Engine
from sqlalchemy.orm import Session, sessionmaker

from resources.substrates.sql.config import SqlSettings
from resources.substrates.sql.engine import create_sql_engine
from resources.substrates.sql.session import create_session_factory


class SharedSqlSubstrate:
    """Concrete SQL substrate handing out sessions over one pooled engine."""

    def __init__(self, *, settings: SqlSettings) -> None:
        self._settings = settings
        self._engine = create_sql_engine(settings)
        self._session_factory = create_session_factory(self._engine)

    @property
    def settings(self) -> SqlSettings:
        return self._settings

    @property
    def engine(self) -> Engine:
        """Return underlying SQLAlchemy engine."""
        return self._engine

    @property
    def session_factory(self) -> sessionmaker[Session]:
        return self._session_factory

    def dispose(self) -> None:
        """Release every pooled connection held by the engine."""
        self._engine.dispose()
