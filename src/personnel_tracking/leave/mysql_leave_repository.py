from __future__ import annotations

import uuid
from datetime import date, datetime
from typing import Any, Dict, Optional, Sequence

from ..core.enums import LeaveStatus, LeaveType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import LeaveRequest
from .repository import LeaveRequestRepository

_SELECT = """
    SELECT id, personnel_id, type, start_date, end_date, reason, status, approved_by, approved_at, created_at
    FROM leave_requests
"""


def _row_to_leave(row: Dict[str, Any]) -> LeaveRequest:
    return LeaveRequest(
        id=row["id"],
        personnel_id=row["personnel_id"],
        type=LeaveType(row["type"]),
        start_date=row["start_date"],
        end_date=row["end_date"],
        reason=row.get("reason"),
        status=LeaveStatus(row["status"]),
        approved_by=row.get("approved_by"),
        approved_at=row.get("approved_at"),
        created_at=row.get("created_at"),
    )


class MySQLLeaveRequestRepository(LeaveRequestRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_requests(self, *, personnel_id: Optional[str] = None) -> Sequence[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            if personnel_id:
                cur.execute(_SELECT + " WHERE personnel_id=%s ORDER BY created_at DESC", (personnel_id,))
            else:
                cur.execute(_SELECT + " ORDER BY created_at DESC")
            return [_row_to_leave(r) for r in fetchall(cur)]

    def get_by_id(self, request_id: str) -> Optional[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE id=%s", (request_id,))
            row = fetchone(cur)
            return _row_to_leave(row) if row else None

    def create(
        self,
        *,
        personnel_id: str,
        leave_type: LeaveType,
        start_date: date,
        end_date: date,
        reason: Optional[str],
    ) -> LeaveRequest:
        request_id = str(uuid.uuid4())
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO leave_requests(id, personnel_id, type, start_date, end_date, reason, status)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (request_id, personnel_id, leave_type.value, start_date, end_date, reason, LeaveStatus.PENDING.value),
            )
            cur.execute(_SELECT + " WHERE id=%s", (request_id,))
            return _row_to_leave(fetchone(cur))

    def set_status(
        self,
        request_id: str,
        *,
        status: LeaveStatus,
        approved_by: Optional[str],
        approved_at: Optional[datetime],
    ) -> Optional[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE leave_requests SET status=%s, approved_by=%s, approved_at=%s WHERE id=%s",
                (status.value, approved_by, approved_at, request_id),
            )
            cur.execute(_SELECT + " WHERE id=%s", (request_id,))
            row = fetchone(cur)
            return _row_to_leave(row) if row else None

    def count_approved_on(self, day: date) -> int:
        with db_cursor(self._conn_factory, dictionary=False) as (_, cur):
            cur.execute(
                """
                SELECT COUNT(*) FROM leave_requests
                WHERE status=%s AND start_date <= %s AND end_date >= %s
                """,
                (LeaveStatus.APPROVED.value, day, day),
            )
            return int(cur.fetchone()[0])
