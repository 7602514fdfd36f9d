from __future__ import annotations

import json
import logging
from typing import Any, Dict, Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .repository import SettingsRepository

logger = logging.getLogger(__name__)


class MySQLSettingsRepository(SettingsRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self, key: str) -> Optional[Dict[str, Any]]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT value FROM system_settings WHERE setting_key=%s", (key,))
            row = fetchone(cur)
            if not row:
                return None
            try:
                document = json.loads(row["value"])
            except ValueError:
                logger.error("Stored settings '%s' are not valid JSON; using defaults", key)
                return None
            return document if isinstance(document, dict) else None

    def save(self, key: str, document: Dict[str, Any]) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO system_settings(setting_key, value)
                VALUES(%s,%s)
                ON DUPLICATE KEY UPDATE value=VALUES(value)
                """,
                (key, json.dumps(document, ensure_ascii=False)),
            )
