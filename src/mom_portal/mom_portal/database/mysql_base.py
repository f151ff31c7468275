from __future__ import annotations

from contextlib import contextmanager
from datetime import time, timedelta
from typing import Any, Dict, Iterator, List, Optional

import mysql.connector
from mysql.connector import errorcode

from ..core.exceptions import ConflictError, NotFoundError
from .connection import DatabaseConnection


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    """One connection, one transaction: commit on success, rollback on any error."""
    conn = conn_factory.connect()
    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


@contextmanager
def integrity_guard(
    *,
    duplicate: Optional[str] = None,
    referenced: Optional[str] = None,
    missing: Optional[str] = None,
) -> Iterator[None]:
    """Translate unique/foreign-key violations raised by the store into domain errors.

    ``missing`` covers inserts whose parent row vanished (deleted concurrently).
    """
    try:
        yield
    except mysql.connector.IntegrityError as e:
        if duplicate and e.errno == errorcode.ER_DUP_ENTRY:
            raise ConflictError(duplicate) from e
        if referenced and e.errno in (errorcode.ER_ROW_IS_REFERENCED, errorcode.ER_ROW_IS_REFERENCED_2):
            raise ConflictError(referenced) from e
        if missing and e.errno == errorcode.ER_NO_REFERENCED_ROW_2:
            raise NotFoundError(missing) from e
        raise


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def placeholders(count: int) -> str:
    return ",".join(["%s"] * count)


def like_pattern(text: str) -> str:
    escaped = text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def normalize_mysql_time(value: Any) -> Optional[time]:
    """TIME columns come back as time, timedelta or 'HH:MM[:SS]' depending on the connector."""
    if value is None or isinstance(value, time):
        return value
    if isinstance(value, timedelta):
        seconds = int(value.total_seconds()) % 86400
        return time(seconds // 3600, seconds % 3600 // 60, seconds % 60)
    if isinstance(value, str):
        parts = [int(p) for p in value.strip().split(":") if p]
        if len(parts) not in (2, 3):
            raise ValueError(f"Invalid time string: {value!r}")
        return time(*parts)
    raise TypeError(f"Unsupported MySQL TIME value type: {type(value)!r}")
