from __future__ import annotations

from contextlib import contextmanager
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

import mysql.connector
from mysql.connector import errorcode

from ..core.exceptions import ConflictError
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
    except mysql.connector.IntegrityError as e:
        conn.rollback()
        if e.errno == errorcode.ER_DUP_ENTRY:
            raise ConflictError("Bu kayıt zaten mevcut") from e
        raise
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


def update_clause(changes: Dict[str, Any], columns: Dict[str, str]) -> Tuple[str, List[Any]]:
    """Build "col=%s, ..." for a partial update.

    `columns` maps domain field names to column names and doubles as the whitelist.
    """
    parts: List[str] = []
    params: List[Any] = []
    for field_name, value in changes.items():
        column = columns.get(field_name)
        if column is None:
            continue
        parts.append(f"{column}=%s")
        params.append(value.value if isinstance(value, Enum) else value)
    return ", ".join(parts), params


def as_bool(value: Any, default: bool = True) -> bool:
    if value is None:
        return default
    return bool(value)

