from __future__ import annotations

import uuid
from typing import Any, Dict, Optional, Sequence

from ..core.enums import ShiftType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_bool, db_cursor, fetchall, fetchone
from .model import Shift
from .repository import ShiftRepository

_SELECT = "SELECT id, name, type, start_time, end_time, branch_id, is_active, created_at FROM shifts"


def _row_to_shift(row: Dict[str, Any]) -> Shift:
    return Shift(
        id=row["id"],
        name=row["name"],
        type=ShiftType(row["type"]),
        start_time=str(row["start_time"])[:5],
        end_time=str(row["end_time"])[:5],
        branch_id=row["branch_id"],
        is_active=as_bool(row.get("is_active")),
        created_at=row.get("created_at"),
    )


class MySQLShiftRepository(ShiftRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_active(self, *, branch_id: Optional[str] = None) -> Sequence[Shift]:
        with db_cursor(self._conn_factory) as (_, cur):
            if branch_id:
                cur.execute(_SELECT + " WHERE is_active=1 AND branch_id=%s ORDER BY name", (branch_id,))
            else:
                cur.execute(_SELECT + " WHERE is_active=1 ORDER BY name")
            return [_row_to_shift(r) for r in fetchall(cur)]

    def create(
        self,
        *,
        name: str,
        shift_type: ShiftType,
        start_time: str,
        end_time: str,
        branch_id: str,
        is_active: bool,
    ) -> Shift:
        shift_id = str(uuid.uuid4())
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO shifts(id, name, type, start_time, end_time, branch_id, is_active)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (shift_id, name, shift_type.value, start_time, end_time, branch_id, int(is_active)),
            )
            cur.execute(_SELECT + " WHERE id=%s", (shift_id,))
            return _row_to_shift(fetchone(cur))

    def count_active(self) -> int:
        with db_cursor(self._conn_factory, dictionary=False) as (_, cur):
            cur.execute("SELECT COUNT(*) FROM shifts WHERE is_active=1")
            return int(cur.fetchone()[0])
