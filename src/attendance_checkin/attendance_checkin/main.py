from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .container import Container, build_container
from .reports.controller import register as register_reports

logger = logging.getLogger(__name__)


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.json.sort_keys = False

    logging.basicConfig(
        level=logging.DEBUG if app.config["DEBUG"] else logging.INFO,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    if container is None:
        firebase_config = dict(getattr(settings, "FIREBASE_CONFIG"))
        container = build_container(
            firebase_config=firebase_config,
            report_timezone=getattr(settings, "REPORT_TIMEZONE"),
            company_options=getattr(settings, "COMPANY_OPTIONS", None),
            supervisor_options=getattr(settings, "SUPERVISOR_OPTIONS", None),
        )
        logger.info(
            "settings=%s firestore_project=%s enabled=%s collection=%s timezone=%s",
            settings_module,
            firebase_config.get("project_id"),
            firebase_config.get("enabled", True),
            firebase_config.get("collection"),
            getattr(settings, "REPORT_TIMEZONE"),
        )

    app.extensions["attendance_container"] = container

    register_attendance(app, container)
    register_reports(app, container)

    return app
