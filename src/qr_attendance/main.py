from __future__ import annotations

import atexit
import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from .common.web import register_error_handlers
from .config import get_settings_module
from .container import Container, build_container
from .core.constants import DEFAULT_TOKEN_ROTATION_SECONDS
from .database.bootstrap import apply_schema, list_tables
from .database.connection import DBConfig
from .attendance.controller import register as register_attendance
from .employees.controller import register as register_employees
from .payroll.controller import register as register_payroll
from .reports.controller import register as register_reports
from .settings.controller import register as register_settings
from .tokens.controller import register as register_tokens

logger = logging.getLogger(__name__)


def create_app(container: Optional[Container] = None) -> Flask:
    """Build the Flask app.

    ``container`` lets callers (tests) supply pre-wired services; otherwise the
    MySQL-backed container is built from the active settings module.
    """
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    db_config = getattr(settings, "DB_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info(
        "settings=%s db=%s@%s:%s/%s",
        settings_module,
        db_config.get("user"),
        db_config.get("host"),
        db_config.get("port", 3306),
        db_config.get("database"),
    )

    if container is None:
        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            config = DBConfig.from_dict(db_config)
            apply_schema(config)
            logger.info("schema ready (tables=%d)", len(list_tables(config)))

        container = build_container(
            db_config=db_config,
            default_rotation_seconds=int(
                getattr(settings, "DEFAULT_TOKEN_ROTATION_SECONDS", DEFAULT_TOKEN_ROTATION_SECONDS)
            ),
        )

        if bool(getattr(settings, "QR_AUTO_ROTATE", False)):
            container.token_rotator.start()
            atexit.register(container.token_rotator.stop)

    register_error_handlers(app)
    register_employees(app, container)
    register_tokens(app, container)
    register_attendance(app, container)
    register_reports(app, container)
    register_payroll(app, container)
    register_settings(app, container)

    return app


def run() -> None:
    app = create_app()
    app.run(debug=app.config["DEBUG"], use_reloader=False)


if __name__ == "__main__":
    run()
