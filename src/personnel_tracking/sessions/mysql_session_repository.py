from __future__ import annotations

import json
import logging
from datetime import datetime
from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import StoredSession
from .repository import SessionRepository

logger = logging.getLogger(__name__)


class MySQLSessionRepository(SessionRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self, sid: str) -> Optional[StoredSession]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT sid, data, expires_at FROM sessions WHERE sid=%s", (sid,))
            row = fetchone(cur)
            if not row:
                return None
            try:
                data = json.loads(row["data"] or "{}")
            except ValueError:
                logger.warning("Discarding unreadable session data (sid=%s...)", sid[:8])
                data = {}
            return StoredSession(sid=row["sid"], expires_at=row["expires_at"], data=data)

    def save(self, session: StoredSession) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO sessions(sid, data, expires_at)
                VALUES(%s,%s,%s)
                ON DUPLICATE KEY UPDATE data=VALUES(data), expires_at=VALUES(expires_at)
                """,
                (session.sid, json.dumps(session.data), session.expires_at),
            )

    def delete(self, sid: str) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM sessions WHERE sid=%s", (sid,))

    def purge_expired(self, now: datetime) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM sessions WHERE expires_at <= %s", (now,))
            return int(cur.rowcount or 0)
