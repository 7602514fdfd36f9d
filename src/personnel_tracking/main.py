from __future__ import annotations

import atexit
import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from .attendance.controller import register as register_attendance
from .auth.controller import register as register_auth
from .auth.guards import EXTENSION_KEY
from .branches.controller import register as register_branches
from .config import get_settings_module
from .container import Container, build_container
from .core.constants import DEFAULT_TIMEZONE
from .database.bootstrap import apply_schema, ensure_super_admin, list_tables
from .database.connection import DatabaseConnection, DBConfig
from .errors import register_error_handlers
from .leave.controller import register as register_leave
from .logging_config import setup_logging
from .personnel.controller import register as register_personnel
from .sessions.interface import ServerSessionInterface
from .shifts.controller import register as register_shifts
from .stats.controller import register as register_stats
from .system_settings.controller import register as register_settings

logger = logging.getLogger(__name__)


def _bootstrap_database(settings) -> None:
    conn = DatabaseConnection(DBConfig.from_mapping(getattr(settings, "DB_CONFIG")))
    if bool(getattr(settings, "AUTO_INIT_DB", False)):
        apply_schema(conn)
        logger.info("Database schema ready (tables=%d)", len(list_tables(conn)))
    if bool(getattr(settings, "AUTO_SEED_DB", False)):
        ensure_super_admin(
            conn,
            phone=getattr(settings, "SEED_ADMIN_PHONE", ""),
            password=getattr(settings, "SEED_ADMIN_PASSWORD", ""),
            name=getattr(settings, "SEED_ADMIN_NAME", "Sistem Yöneticisi"),
        )


def create_app(settings_module: Optional[str] = None, *, container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)

    setup_logging(getattr(settings, "LOG_LEVEL", "INFO"), getattr(settings, "TIMEZONE", DEFAULT_TIMEZONE))

    app = Flask(__name__)
    secret_key = getattr(settings, "SECRET_KEY", "")
    if not secret_key:
        raise RuntimeError(f"SECRET_KEY is not set (settings={settings_module})")

    app.secret_key = secret_key
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.json.ensure_ascii = False
    app.config["SESSION_COOKIE_NAME"] = getattr(settings, "SESSION_COOKIE_NAME", "pts.sid")
    app.config["SESSION_COOKIE_SECURE"] = bool(getattr(settings, "SESSION_COOKIE_SECURE", False))
    app.config["SESSION_COOKIE_HTTPONLY"] = True
    app.config["SESSION_COOKIE_SAMESITE"] = "Lax"

    logger.info("Starting with settings=%s", settings_module)

    if container is None:
        _bootstrap_database(settings)
        container = build_container(settings)
        atexit.register(container.close)

    app.extensions[EXTENSION_KEY] = container
    app.session_interface = ServerSessionInterface(
        container.sessions_repo,
        lifetime=container.session_lifetime,
        clock=container.clock,
    )

    register_error_handlers(app)

    register_auth(app, container)
    register_branches(app, container)
    register_personnel(app, container)
    register_shifts(app, container)
    register_attendance(app, container)
    register_leave(app, container)
    register_stats(app, container)
    register_settings(app, container)

    return app
