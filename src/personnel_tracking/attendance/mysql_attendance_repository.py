from __future__ import annotations

import uuid
from datetime import date, datetime
from typing import Any, Dict, List, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import AttendanceRecord
from .repository import AttendanceRepository

_SELECT = """
    SELECT id, personnel_id, date, check_in, check_out, location, qr_code, notes, created_at
    FROM attendance
"""


def _row_to_record(row: Dict[str, Any]) -> AttendanceRecord:
    return AttendanceRecord(
        id=row["id"],
        personnel_id=row["personnel_id"],
        date=row["date"],
        check_in=row.get("check_in"),
        check_out=row.get("check_out"),
        location=row.get("location"),
        qr_code=row.get("qr_code"),
        notes=row.get("notes"),
        created_at=row.get("created_at"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_personnel(
        self,
        personnel_id: str,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> Sequence[AttendanceRecord]:
        where = ["personnel_id=%s"]
        params: List[Any] = [personnel_id]
        if start_date:
            where.append("date >= %s")
            params.append(start_date)
        if end_date:
            where.append("date <= %s")
            params.append(end_date)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _SELECT + f" WHERE {' AND '.join(where)} ORDER BY date DESC, created_at DESC",
                tuple(params),
            )
            return [_row_to_record(r) for r in fetchall(cur)]

    def list_for_date(self, day: date) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE date=%s ORDER BY check_in DESC, created_at DESC", (day,))
            return [_row_to_record(r) for r in fetchall(cur)]

    def get_for_personnel_and_date(self, personnel_id: str, day: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _SELECT + " WHERE personnel_id=%s AND date=%s ORDER BY created_at DESC LIMIT 1",
                (personnel_id, day),
            )
            row = fetchone(cur)
            return _row_to_record(row) if row else None

    def create(
        self,
        *,
        personnel_id: str,
        day: date,
        check_in: Optional[datetime],
        check_out: Optional[datetime],
        location: Optional[str],
        qr_code: Optional[str],
        notes: Optional[str],
    ) -> AttendanceRecord:
        attendance_id = str(uuid.uuid4())
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance(id, personnel_id, date, check_in, check_out, location, qr_code, notes)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (attendance_id, personnel_id, day, check_in, check_out, location, qr_code, notes),
            )
            cur.execute(_SELECT + " WHERE id=%s", (attendance_id,))
            return _row_to_record(fetchone(cur))

    def set_check_out(self, attendance_id: str, check_out: datetime) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE attendance SET check_out=%s WHERE id=%s AND check_out IS NULL",
                (check_out, attendance_id),
            )
            return cur.rowcount > 0

    def count_for_date(self, day: date) -> int:
        with db_cursor(self._conn_factory, dictionary=False) as (_, cur):
            cur.execute("SELECT COUNT(*) FROM attendance WHERE date=%s", (day,))
            return int(cur.fetchone()[0])
