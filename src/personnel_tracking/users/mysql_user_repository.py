from __future__ import annotations

import uuid
from datetime import datetime
from typing import Any, Dict, Optional

from ..core.enums import UserRole
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_bool, db_cursor, fetchone
from .model import User
from .repository import UserRepository

_USER_COLUMNS = """
    id, phone, password, name, role, branch_id, is_active,
    two_factor_code, two_factor_expiry, created_at, updated_at
"""


def _row_to_user(row: Dict[str, Any]) -> User:
    return User(
        id=row["id"],
        phone=row["phone"],
        password_hash=row["password"],
        name=row["name"],
        role=UserRole(row["role"]),
        branch_id=row.get("branch_id"),
        is_active=as_bool(row.get("is_active")),
        two_factor_code=row.get("two_factor_code"),
        two_factor_expiry=row.get("two_factor_expiry"),
        created_at=row.get("created_at"),
        updated_at=row.get("updated_at"),
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, user_id: str) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_USER_COLUMNS} FROM users WHERE id=%s", (user_id,))
            row = fetchone(cur)
            return _row_to_user(row) if row else None

    def get_by_phone(self, phone: str) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_USER_COLUMNS} FROM users WHERE phone=%s", (phone,))
            row = fetchone(cur)
            return _row_to_user(row) if row else None

    def create_user(
        self,
        *,
        phone: str,
        password_hash: str,
        name: str,
        role: UserRole,
        branch_id: Optional[str],
    ) -> User:
        user_id = str(uuid.uuid4())
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO users(id, phone, password, name, role, branch_id, is_active)
                VALUES(%s,%s,%s,%s,%s,%s,1)
                """,
                (user_id, phone, password_hash, name, role.value, branch_id),
            )
            cur.execute(f"SELECT {_USER_COLUMNS} FROM users WHERE id=%s", (user_id,))
            return _row_to_user(fetchone(cur))

    def set_two_factor(self, user_id: str, *, code: str, expiry: datetime) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE users SET two_factor_code=%s, two_factor_expiry=%s WHERE id=%s",
                (code, expiry, user_id),
            )

    def consume_two_factor(self, user_id: str, *, code: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE users
                SET two_factor_code=NULL, two_factor_expiry=NULL
                WHERE id=%s AND two_factor_code=%s
                """,
                (user_id, code),
            )
            return cur.rowcount > 0
