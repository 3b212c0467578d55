"""Translate storage-engine IntegrityErrors into structured field information.

PostgreSQL (asyncpg) and SQLite report constraint violations in different
shapes. The allocator only needs to know *which field* collided, so this
module hides the engine-specific parsing behind two small functions.
"""

import re
from typing import NamedTuple

from sqlalchemy import Index, Table, UniqueConstraint
from sqlalchemy.exc import IntegrityError

# PostgreSQL
_PG_UNIQUE_SQLSTATE = "23505"
_PG_CONSTRAINT_RE = re.compile(r'unique constraint "(?P<name>[^"]+)"')
_PG_DETAIL_RE = re.compile(r"Key \((?P<columns>[^)]+)\)=\((?P<value>.*)\) already exists")
_PG_NOT_NULL_RE = re.compile(r'null value in column "(?P<column>[^"]+)"')

# SQLite
_SQLITE_UNIQUE_RE = re.compile(r"UNIQUE constraint failed: (?P<columns>[\w.]+(?:, [\w.]+)*)")
_SQLITE_NOT_NULL_RE = re.compile(r"NOT NULL constraint failed: (?P<column>[\w.]+)")


class DuplicateKey(NamedTuple):
    """Field (or comma-joined fields) whose unique constraint was violated."""

    field: str
    value: str | None = None


def duplicate_key(exc: IntegrityError, table: Table) -> DuplicateKey | None:
    """Return the offending field if `exc` is a uniqueness violation on `table`, else None."""
    cause = getattr(exc.orig, "__cause__", None)  # asyncpg exception behind SQLAlchemy's adapter
    message = str(exc.orig) if exc.orig is not None else str(exc)

    # PostgreSQL: structured detail first, constraint name as a fallback
    detail = getattr(cause, "detail", None) or message
    if match := _PG_DETAIL_RE.search(detail):
        return DuplicateKey(_column_names(match.group("columns")), match.group("value"))

    constraint_name = getattr(cause, "constraint_name", None)
    if constraint_name is None and (match := _PG_CONSTRAINT_RE.search(message)):
        constraint_name = match.group("name")
    if constraint_name is not None:
        columns = _constraint_columns(table, constraint_name)
        if columns is not None:
            return DuplicateKey(columns)
        return DuplicateKey(constraint_name)

    sqlstate = getattr(exc.orig, "sqlstate", None) or getattr(cause, "sqlstate", None)
    if sqlstate == _PG_UNIQUE_SQLSTATE:
        return DuplicateKey("unknown")

    # SQLite
    if match := _SQLITE_UNIQUE_RE.search(message):
        return DuplicateKey(_column_names(match.group("columns")))

    return None


def violated_column(exc: IntegrityError) -> str | None:
    """Return the column named by a NOT NULL violation, if any."""
    message = str(exc.orig) if exc.orig is not None else str(exc)
    for pattern in (_PG_NOT_NULL_RE, _SQLITE_NOT_NULL_RE):
        if match := pattern.search(message):
            return _column_names(match.group("column"))
    return None


def _column_names(raw: str) -> str:
    """Strip table qualifiers: "medicines.batch_number" -> "batch_number"."""
    return ", ".join(part.strip().rsplit(".", 1)[-1] for part in raw.split(","))


def _constraint_columns(table: Table, name: str) -> str | None:
    """Map a unique constraint or unique index name back to its column names."""
    candidates: list[UniqueConstraint | Index] = [
        *(c for c in table.constraints if isinstance(c, UniqueConstraint)),
        *(i for i in table.indexes if i.unique),
    ]
    for candidate in candidates:
        if candidate.name == name:
            return ", ".join(column.name for column in candidate.columns)
    return None
