from __future__ import annotations

from contextlib import contextmanager
from decimal import Decimal
from typing import Any, Dict, List, Optional

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
    rows = cur.fetchall()
    return list(rows or [])


def normalize_mysql_number(value: Any) -> float:
    """Normalize DECIMAL/INT/NULL columns into a plain float.

    mysql-connector returns DECIMAL as decimal.Decimal and SUM() over an
    empty set as NULL.
    """

    if value is None:
        return 0.0
    if isinstance(value, Decimal):
        return float(value)
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        return float(value.strip() or 0)
    raise TypeError(f"Unsupported MySQL numeric value type: {type(value)!r}")


def split_csv(value: Optional[str]) -> list[str]:
    """Split a GROUP_CONCAT result into its non-empty parts."""

    if not value:
        return []
    return [p for p in (s.strip() for s in str(value).split(",")) if p]
