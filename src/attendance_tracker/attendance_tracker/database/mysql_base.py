from __future__ import annotations

from contextlib import contextmanager
from datetime import time, timedelta
from typing import Any, Dict, List, Optional

import mysql.connector
from mysql.connector import errors as mysql_errors

from ..core.exceptions import DuplicateRecordError, StorageError
from .connection import DatabaseConnection


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True, operation: Optional[str] = None):
    """One connection, one transaction.

    Commits when the block finishes, rolls back on any exception. Driver
    errors are re-raised as ``DuplicateRecordError`` / ``StorageError`` with
    the original exception chained.
    """

    try:
        conn = conn_factory.connect()
    except mysql.connector.Error as exc:
        raise StorageError(operation=operation) from exc

    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except mysql_errors.IntegrityError as exc:
        conn.rollback()
        raise DuplicateRecordError("Record already exists") from exc
    except mysql.connector.Error as exc:
        conn.rollback()
        raise StorageError(operation=operation) from exc
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def in_clause(values) -> tuple[str, tuple]:
    """Placeholders for ``IN (...)``; callers must handle empty input first."""
    values = tuple(values)
    return ", ".join(["%s"] * len(values)), values


def normalize_mysql_time(value: Any) -> Optional[str]:
    """Normalize MySQL TIME values to ``HH:MM``.

    mysql-connector can return TIME as:
    - datetime.time
    - datetime.timedelta
    - string (e.g. '08:30:00')
    """

    if value is None:
        return None

    if isinstance(value, time):
        return value.strftime("%H:%M")

    if isinstance(value, timedelta):
        total_seconds = int(value.total_seconds()) % 86400
        hours = total_seconds // 3600
        minutes = (total_seconds % 3600) // 60
        return f"{hours:02d}:{minutes:02d}"

    if isinstance(value, str):
        parts = value.strip().split(":")
        if len(parts) < 2:
            raise ValueError(f"Invalid time string: {value!r}")
        return f"{int(parts[0]):02d}:{int(parts[1]):02d}"

    raise TypeError(f"Unsupported MySQL TIME value type: {type(value)!r}")
