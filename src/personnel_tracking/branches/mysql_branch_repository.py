from __future__ import annotations

import uuid
from typing import Any, Dict, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_bool, db_cursor, fetchall, fetchone, update_clause
from .model import Branch
from .repository import BranchRepository

_SELECT = """
    SELECT id, name, address, phone, parent_branch_id, manager_id, is_active, created_at, updated_at
    FROM branches
"""

_UPDATABLE = {
    "name": "name",
    "address": "address",
    "phone": "phone",
    "parent_branch_id": "parent_branch_id",
    "manager_id": "manager_id",
    "is_active": "is_active",
}


def _row_to_branch(row: Dict[str, Any]) -> Branch:
    return Branch(
        id=row["id"],
        name=row["name"],
        address=row.get("address"),
        phone=row.get("phone"),
        parent_branch_id=row.get("parent_branch_id"),
        manager_id=row.get("manager_id"),
        is_active=as_bool(row.get("is_active")),
        created_at=row.get("created_at"),
        updated_at=row.get("updated_at"),
    )


class MySQLBranchRepository(BranchRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_active(self) -> Sequence[Branch]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE is_active=1 ORDER BY name")
            return [_row_to_branch(r) for r in fetchall(cur)]

    def get_by_id(self, branch_id: str) -> Optional[Branch]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE id=%s", (branch_id,))
            row = fetchone(cur)
            return _row_to_branch(row) if row else None

    def create(
        self,
        *,
        name: str,
        address: Optional[str],
        phone: Optional[str],
        parent_branch_id: Optional[str],
        manager_id: Optional[str],
        is_active: bool,
    ) -> Branch:
        branch_id = str(uuid.uuid4())
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO branches(id, name, address, phone, parent_branch_id, manager_id, is_active)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (branch_id, name, address, phone, parent_branch_id, manager_id, int(is_active)),
            )
            cur.execute(_SELECT + " WHERE id=%s", (branch_id,))
            return _row_to_branch(fetchone(cur))

    def update(self, branch_id: str, changes: Dict[str, Any]) -> Optional[Branch]:
        clause, params = update_clause(changes, _UPDATABLE)
        with db_cursor(self._conn_factory) as (_, cur):
            if clause:
                cur.execute(f"UPDATE branches SET {clause} WHERE id=%s", (*params, branch_id))
            cur.execute(_SELECT + " WHERE id=%s", (branch_id,))
            row = fetchone(cur)
            return _row_to_branch(row) if row else None
