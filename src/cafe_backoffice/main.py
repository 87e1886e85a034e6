from __future__ import annotations

import importlib
import logging
from datetime import timedelta
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from .attendance.controller import register as register_attendance
from .audit.controller import register as register_audit
from .config import get_settings_module
from .container import Container, build_container
from .core.constants import DEFAULT_SESSION_DAYS
from .database.bootstrap import apply_schema, apply_sql_file, ensure_super_admin, list_tables
from .payroll.controller import register as register_payroll
from .security.controller import register as register_security
from .users.controller import register as register_users

logger = logging.getLogger(__name__)

DATABASE_DIR = Path(__file__).resolve().parents[2] / "database"


def _bootstrap_database(settings) -> None:
    db_config = getattr(settings, "DB_CONFIG")

    if getattr(settings, "AUTO_INIT_DB", False):
        apply_schema(db_config, schema_path=DATABASE_DIR / "schema.sql")
        logger.info("Schema ready (tables=%d)", len(list_tables(db_config)))

    if getattr(settings, "AUTO_SEED_DB", False):
        apply_sql_file(db_config, path=DATABASE_DIR / "seed.sql")
        logger.info("Demo seed ready")

    admin_email = getattr(settings, "BOOTSTRAP_ADMIN_EMAIL", "")
    admin_password = getattr(settings, "BOOTSTRAP_ADMIN_PASSWORD", "")
    if admin_email and admin_password:
        ensure_super_admin(db_config, name="Super Admin", email=admin_email, password=admin_password)


def create_app(*, container: Optional[Container] = None, settings_module: Optional[str] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.permanent_session_lifetime = timedelta(days=DEFAULT_SESSION_DAYS)

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        logger.info(
            "settings=%s db=%s@%s:%s/%s",
            settings_module,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )
        _bootstrap_database(settings)
        container = build_container(settings)

    register_users(app, container)
    register_security(app, container)
    register_attendance(app, container)
    register_payroll(app, container)
    register_audit(app, container)

    return app
