from __future__ import annotations

import uuid
from typing import Any, Dict, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_bool, db_cursor, fetchall, fetchone, update_clause
from .model import Personnel
from .repository import PersonnelRepository

_SELECT = """
    SELECT id, employee_number, first_name, last_name, phone, email, national_id, birth_date,
           address, position, department, branch_id, start_date, salary, is_active,
           created_at, updated_at
    FROM personnel
"""

# Domain field -> column; also the whitelist for inserts and partial updates.
_COLUMNS = {
    "employee_number": "employee_number",
    "first_name": "first_name",
    "last_name": "last_name",
    "phone": "phone",
    "email": "email",
    "national_id": "national_id",
    "birth_date": "birth_date",
    "address": "address",
    "position": "position",
    "department": "department",
    "branch_id": "branch_id",
    "start_date": "start_date",
    "salary": "salary",
    "is_active": "is_active",
}


def _row_to_personnel(row: Dict[str, Any]) -> Personnel:
    return Personnel(
        id=row["id"],
        employee_number=row["employee_number"],
        first_name=row["first_name"],
        last_name=row["last_name"],
        phone=row["phone"],
        email=row.get("email"),
        national_id=row["national_id"],
        birth_date=row.get("birth_date"),
        address=row.get("address"),
        position=row["position"],
        department=row.get("department"),
        branch_id=row["branch_id"],
        start_date=row["start_date"],
        salary=row.get("salary"),
        is_active=as_bool(row.get("is_active")),
        created_at=row.get("created_at"),
        updated_at=row.get("updated_at"),
    )


class MySQLPersonnelRepository(PersonnelRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_active(self, *, branch_id: Optional[str] = None) -> Sequence[Personnel]:
        with db_cursor(self._conn_factory) as (_, cur):
            if branch_id:
                cur.execute(_SELECT + " WHERE is_active=1 AND branch_id=%s ORDER BY first_name", (branch_id,))
            else:
                cur.execute(_SELECT + " WHERE is_active=1 ORDER BY first_name")
            return [_row_to_personnel(r) for r in fetchall(cur)]

    def search(self, term: str) -> Sequence[Personnel]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _SELECT
                + """
                WHERE is_active=1
                  AND LOWER(CONCAT(first_name, ' ', last_name)) LIKE %s
                ORDER BY first_name
                """,
                (f"%{term.lower()}%",),
            )
            return [_row_to_personnel(r) for r in fetchall(cur)]

    def get_by_id(self, personnel_id: str) -> Optional[Personnel]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE id=%s", (personnel_id,))
            row = fetchone(cur)
            return _row_to_personnel(row) if row else None

    def create(self, fields: Dict[str, Any]) -> Personnel:
        personnel_id = str(uuid.uuid4())
        columns = ["id"]
        params: list[Any] = [personnel_id]
        for field_name, value in fields.items():
            column = _COLUMNS.get(field_name)
            if column is None:
                continue
            columns.append(column)
            params.append(value)

        placeholders = ",".join(["%s"] * len(columns))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"INSERT INTO personnel({', '.join(columns)}) VALUES({placeholders})", tuple(params))
            cur.execute(_SELECT + " WHERE id=%s", (personnel_id,))
            return _row_to_personnel(fetchone(cur))

    def update(self, personnel_id: str, changes: Dict[str, Any]) -> Optional[Personnel]:
        clause, params = update_clause(changes, _COLUMNS)
        with db_cursor(self._conn_factory) as (_, cur):
            if clause:
                cur.execute(f"UPDATE personnel SET {clause} WHERE id=%s", (*params, personnel_id))
            cur.execute(_SELECT + " WHERE id=%s", (personnel_id,))
            row = fetchone(cur)
            return _row_to_personnel(row) if row else None

    def count_active(self) -> int:
        with db_cursor(self._conn_factory, dictionary=False) as (_, cur):
            cur.execute("SELECT COUNT(*) FROM personnel WHERE is_active=1")
            return int(cur.fetchone()[0])
