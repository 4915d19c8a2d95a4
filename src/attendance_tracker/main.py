from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from .common.web import register_error_handlers
from .config import get_settings_module
from .container import Container, build_container
from .database.bootstrap import apply_procedures, apply_schema, ensure_admin_user, list_tables

from .attendance.controller import register as register_attendance
from .backup.controller import register as register_backup
from .employees.controller import register as register_employees
from .reports.controller import register as register_reports
from .settings.controller import register as register_settings
from .users.controller import register as register_users

logger = logging.getLogger(__name__)


def create_app(container: Optional[Container] = None) -> Flask:
    """Build the Flask app. A ready-made container (e.g. in-memory) skips all DB setup."""
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    logging.basicConfig(
        level=str(getattr(settings, "LOG_LEVEL", "INFO")).upper(),
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

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config)
            apply_procedures(db_config)
            logger.info("Schema ready (tables=%d)", len(list_tables(db_config)))
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            ensure_admin_user(db_config)
            logger.info("Demo admin account ready")

        container = build_container(
            db_config=db_config,
            punctuality_source=str(getattr(settings, "PUNCTUALITY_SOURCE", "fixed")),
        )

    app.extensions["attendance_tracker"] = container
    register_error_handlers(app)

    register_users(app, container)
    register_employees(app, container)
    register_attendance(app, container)
    register_settings(app, container)
    register_reports(app, container)
    register_backup(app, container)

    return app
