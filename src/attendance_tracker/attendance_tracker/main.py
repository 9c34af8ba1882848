from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .database.bootstrap import apply_schema, list_tables

from .container import Container, build_container
from .common.http import register_error_handlers
from .academics.controller import register as register_academics
from .attendance.controller import register as register_attendance
from .reports.controller import register as register_reports
from .sessions.controller import register as register_sessions
from .users.controller import register as register_users

logger = logging.getLogger(__name__)


def create_app(container: Optional[Container] = None, *, settings_module: Optional[str] = None) -> Flask:
    """Flask app factory.

    Pass a prebuilt ``container`` to skip MySQL wiring (tests use in-memory repositories).
    """

    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    logging.basicConfig(level=getattr(settings, "LOG_LEVEL", "INFO"))

    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        logger.debug(
            "settings=%s db=%s@%s:%s/%s",
            settings_module,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )
        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            schema_path = Path(__file__).resolve().parents[3] / "database" / "schema.sql"
            apply_schema(db_config, schema_path=schema_path)
            logger.info("Schema ready (tables=%s)", len(list_tables(db_config)))
        container = build_container(db_config=db_config, settings=settings)

    app.extensions["container"] = container

    register_error_handlers(app)
    register_users(app, container)
    register_academics(app, container)
    register_sessions(app, container)
    register_attendance(app, container)
    register_reports(app, container)

    return app
