from __future__ import annotations

import importlib

from dotenv import load_dotenv

from personnel_tracking.config import get_settings_module
from personnel_tracking.database.bootstrap import apply_schema, list_tables
from personnel_tracking.database.connection import DatabaseConnection, DBConfig
from personnel_tracking.logging_config import setup_logging


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    setup_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    config = DBConfig.from_mapping(settings.DB_CONFIG)
    conn = DatabaseConnection(config)

    apply_schema(conn)
    tables = list_tables(conn)
    print(
        "OK: Applied schema.sql -> "
        f"{config.user}@{config.host}:{config.port}/{config.database} "
        f"(tables={len(tables)})"
    )


if __name__ == "__main__":
    main()
