"""Delete expired login sessions. Safe to run from cron."""

from __future__ import annotations

import importlib

from dotenv import load_dotenv

from personnel_tracking.common.datetime_utils import utc_now
from personnel_tracking.config import get_settings_module
from personnel_tracking.database.connection import DatabaseConnection, DBConfig
from personnel_tracking.logging_config import setup_logging
from personnel_tracking.sessions.mysql_session_repository import MySQLSessionRepository


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    setup_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    repo = MySQLSessionRepository(DatabaseConnection(DBConfig.from_mapping(settings.DB_CONFIG)))
    removed = repo.purge_expired(utc_now())
    print(f"OK: Removed {removed} expired session(s)")


if __name__ == "__main__":
    main()
