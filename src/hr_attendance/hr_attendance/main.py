from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .admins.controller import register as register_admins
from .attendance.controller import register as register_attendance
from .auth.controller import register as register_auth
from .container import Container, build_container, token_settings_from
from .database.bootstrap import apply_schema, list_tables
from .database.connection import DBConfig
from .employees.controller import register as register_employees
from .leaves.controller import register as register_leaves
from .web.responses import register_error_handlers

logger = logging.getLogger(__name__)


def create_app(*, container: Optional[Container] = None, settings_module: Optional[str] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
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
            config = DBConfig.from_dict(db_config)
            apply_schema(config)
            logger.info("schema ready (tables=%d)", len(list_tables(config)))

        container = build_container(
            db_config=db_config,
            token_settings=token_settings_from(settings),
            cookie_secure=bool(getattr(settings, "COOKIE_SECURE", True)),
        )

    register_error_handlers(app)
    register_auth(app, container)
    register_admins(app, container)
    register_employees(app, container)
    register_attendance(app, container)
    register_leaves(app, container)

    return app
