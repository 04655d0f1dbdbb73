"""SQLAlchemy table definitions owned by the record store."""

from __future__ import annotations

from sqlalchemy import (
    CheckConstraint,
    Column,
    DateTime,
    Index,
    Integer,
    MetaData,
    String,
    Table,
)

from services.state.record_store.domain import MAX_NAME_LENGTH

metadata = MetaData()

records = Table(
    "records",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", String(MAX_NAME_LENGTH), nullable=False),
    Column("created_at", DateTime(timezone=True), nullable=False),
    CheckConstraint(
        f"length(name) BETWEEN 1 AND {MAX_NAME_LENGTH}",
        name="ck_records_name_length",
    ),
    Index("ix_records_created_at", "created_at"),
    Index("ix_records_name", "name"),
    # Without AUTOINCREMENT SQLite may hand a deleted max id to the next row.
    sqlite_autoincrement=True,
)
