from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Protocol

import psycopg2
from psycopg2 import sql

"""Product store: the single persistence boundary of the importer.

The driver only needs ``create(row)``; it either returns (row persisted) or
raises StoreError carrying a classified error type and a human-readable
reason. Each create is independent: the Postgres store runs on an autocommit
connection, so a failed row never poisons the rows after it and earlier
successes are never rolled back.
"""

__all__ = [
    "DryRunProductStore",
    "PostgresProductStore",
    "ProductStore",
    "StoreError",
    "classify_db_error",
]

logger = logging.getLogger(__name__)


class StoreError(Exception):
    """A single product could not be persisted."""

    def __init__(self, message: str, error_type: str = "DATABASE_INSERT_ERROR") -> None:
        super().__init__(message)
        self.error_type = error_type


class ProductStore(Protocol):
    def create(self, row: Mapping[str, Any]) -> None:  # pragma: no cover (protocol)
        ...


def classify_db_error(exc: BaseException) -> str:
    """Map a psycopg2 exception to an UPPER_SNAKE error type."""
    if isinstance(exc, psycopg2.IntegrityError):
        return "CONSTRAINT_VIOLATION"
    if isinstance(exc, psycopg2.DataError):
        return "DATA_ERROR"
    if isinstance(exc, (psycopg2.OperationalError, psycopg2.InterfaceError)):
        return "CONNECTION_ERROR"
    return "DATABASE_INSERT_ERROR"


def _db_message(exc: BaseException) -> str:
    # pgerror carries the server text without the psycopg2 prefix
    message = getattr(exc, "pgerror", None) or str(exc)
    return message.strip().splitlines()[0] if message.strip() else ""


class PostgresProductStore:
    """Insert products one row at a time through a psycopg2 cursor."""

    def __init__(self, cursor: Any, table: str = "products") -> None:
        self.cursor = cursor
        self.table = table

    def _table_identifier(self) -> sql.Composable:
        return sql.SQL(".").join(sql.Identifier(part) for part in self.table.split("."))

    def build_insert(self, columns: list[str]) -> sql.Composed:
        return sql.SQL("INSERT INTO {table} ({cols}) VALUES ({vals})").format(
            table=self._table_identifier(),
            cols=sql.SQL(", ").join(sql.Identifier(c) for c in columns),
            vals=sql.SQL(", ").join(sql.Placeholder() for _ in columns),
        )

    def create(self, row: Mapping[str, Any]) -> None:
        columns = list(row.keys())
        values = [row[c] for c in columns]
        try:
            self.cursor.execute(self.build_insert(columns), values)
        except psycopg2.Error as e:
            raise StoreError(_db_message(e), classify_db_error(e)) from e


class DryRunProductStore:
    """Accepts every row and persists nothing (``--dry-run``)."""

    def __init__(self) -> None:
        self.rows: list[dict[str, Any]] = []

    def create(self, row: Mapping[str, Any]) -> None:
        logger.debug("dry-run: would insert slug=%s", row.get("slug"))
        self.rows.append(dict(row))
