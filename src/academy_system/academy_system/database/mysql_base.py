from __future__ import annotations

import json
from contextlib import contextmanager
from datetime import time, timedelta
from typing import Any, Dict, List, Optional

from ..core.exceptions import DataIntegrityError
from .connection import DatabaseConnection


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
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


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    return list(cur.fetchall() or [])


def in_clause(values) -> str:
    """Placeholder list for `IN (...)`; callers must not pass an empty sequence."""
    return ", ".join(["%s"] * len(values))


def normalize_mysql_time(value: Any) -> Optional[time]:
    """Normalize MySQL TIME values across connector implementations.

    mysql-connector returns TIME as datetime.timedelta by default, but
    datetime.time and 'HH:MM[:SS]' strings show up too.
    """

    if value is None:
        return None
    if isinstance(value, time):
        return value
    if isinstance(value, timedelta):
        total = int(value.total_seconds()) % 86400
        return time(hour=total // 3600, minute=(total % 3600) // 60, second=total % 60)
    if isinstance(value, str):
        parts = value.strip().split(":")
        try:
            hours, minutes = int(parts[0]), int(parts[1])
            seconds = int(parts[2]) if len(parts) > 2 and parts[2] else 0
            return time(hour=hours, minute=minutes, second=seconds)
        except (IndexError, ValueError):
            raise DataIntegrityError(f"Invalid time value: {value!r}")
    raise DataIntegrityError(f"Unsupported MySQL TIME value type: {type(value)!r}")


def load_json_column(value: Any, column: str) -> Any:
    """Decode a MySQL JSON column (str/bytes from the connector, or already decoded)."""

    if value is None:
        return None
    if isinstance(value, (bytes, bytearray, str)):
        try:
            if not isinstance(value, str):
                value = value.decode("utf-8")
            return json.loads(value)
        except (UnicodeDecodeError, ValueError):
            raise DataIntegrityError(f"Invalid JSON in {column}")
    return value
