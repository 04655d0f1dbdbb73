"""Shared SQL substrate primitives for records components."""

from resources.substrates.sql.config import (
    SUBSTRATE_COMPONENT_ID,
    SqlSettings,
    resolve_sql_settings,
)
from resources.substrates.sql.engine import create_sql_engine, is_sqlite_memory_url
from resources.substrates.sql.errors import normalize_sql_error
from resources.substrates.sql.session import (
    create_session_factory,
    transactional_session,
)
from resources.substrates.sql.substrate import SharedSqlSubstrate

__all__ = [
    "SUBSTRATE_COMPONENT_ID",
    "SharedSqlSubstrate",
    "SqlSettings",
    "create_session_factory",
    "create_sql_engine",
    "is_sqlite_memory_url",
    "normalize_sql_error",
    "resolve_sql_settings",
    "transactional_session",
]
