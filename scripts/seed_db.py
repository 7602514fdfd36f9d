"""Create (or reset) the initial super admin from SEED_ADMIN_* settings."""

from __future__ import annotations

import importlib

from dotenv import load_dotenv

from personnel_tracking.config import get_settings_module
from personnel_tracking.database.bootstrap import ensure_super_admin
from personnel_tracking.database.connection import DatabaseConnection, DBConfig
from personnel_tracking.logging_config import setup_logging


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    setup_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    config = DBConfig.from_mapping(settings.DB_CONFIG)
    try:
        user_id = ensure_super_admin(
            DatabaseConnection(config),
            phone=settings.SEED_ADMIN_PHONE,
            password=settings.SEED_ADMIN_PASSWORD,
            name=settings.SEED_ADMIN_NAME,
        )
    except ValueError as exc:
        raise SystemExit(str(exc))

    print(f"OK: Super admin {settings.SEED_ADMIN_PHONE} ready (id={user_id}) -> {config.database}")


if __name__ == "__main__":
    main()
