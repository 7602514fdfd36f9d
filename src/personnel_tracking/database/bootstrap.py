from __future__ import annotations

import logging
import re
import uuid
from pathlib import Path
from typing import Iterable, Optional

from ..users.passwords import hash_password
from .connection import DatabaseConnection

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parent / "schema.sql"


def _strip_create_db_and_use(sql: str) -> str:
    # Keep schema.sql compatible regardless of DB name.
    sql = re.sub(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$", "", sql)
    sql = re.sub(r"(?im)^\s*USE\b.*?;\s*$", "", sql)
    return sql


def _strip_comments(sql: str) -> str:
    return re.sub(r"(?m)^\s*--.*$", "", sql)


def _iter_sql_statements(sql: str) -> Iterable[str]:
    # Minimal SQL splitter for schema files (handles ';' inside quotes).
    buf: list[str] = []
    in_single = False
    in_double = False
    escape = False

    for ch in sql:
        if escape:
            buf.append(ch)
            escape = False
            continue

        if ch == "\\":
            buf.append(ch)
            escape = True
            continue

        if ch == "'" and not in_double:
            in_single = not in_single
        elif ch == '"' and not in_single:
            in_double = not in_double
        elif ch == ";" and not in_single and not in_double:
            stmt = "".join(buf).strip()
            buf.clear()
            if stmt:
                yield stmt
            continue

        buf.append(ch)

    tail = "".join(buf).strip()
    if tail:
        yield tail


def ensure_database_exists(conn_factory: DatabaseConnection) -> None:
    conn = conn_factory.connect(with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{conn_factory.config.database}` "
            "CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(conn_factory: DatabaseConnection, *, schema_path: Optional[Path] = None) -> None:
    ensure_database_exists(conn_factory)

    path = Path(schema_path or SCHEMA_PATH)
    sql = _strip_comments(_strip_create_db_and_use(path.read_text(encoding="utf-8")))

    conn = conn_factory.connect()
    try:
        cur = conn.cursor()
        for stmt in _iter_sql_statements(sql):
            cur.execute(stmt)
        conn.commit()
    finally:
        conn.close()
    logger.info("Schema applied from %s", path.name)


def ensure_super_admin(conn_factory: DatabaseConnection, *, phone: str, password: str, name: str) -> str:
    """Create the seed super admin, or reset its password/role if the phone exists."""

    if not phone or not password:
        raise ValueError("SEED_ADMIN_PHONE and SEED_ADMIN_PASSWORD must be set")

    password_hash = hash_password(password)
    conn = conn_factory.connect()
    try:
        cur = conn.cursor(dictionary=True)
        cur.execute("SELECT id FROM users WHERE phone=%s", (phone,))
        existing = cur.fetchone()
        if existing:
            user_id = existing["id"]
            cur.execute(
                """
                UPDATE users
                SET name=%s, password=%s, role='super_admin', is_active=1
                WHERE id=%s
                """,
                (name, password_hash, user_id),
            )
        else:
            user_id = str(uuid.uuid4())
            cur.execute(
                """
                INSERT INTO users (id, phone, password, name, role, is_active)
                VALUES (%s, %s, %s, %s, 'super_admin', 1)
                """,
                (user_id, phone, password_hash, name),
            )
        conn.commit()
    finally:
        conn.close()

    logger.info("Seed super admin ready (phone=%s)", phone)
    return user_id


def list_tables(conn_factory: DatabaseConnection) -> list[str]:
    conn = conn_factory.connect()
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()
