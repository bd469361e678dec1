from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify

from config import get_settings_module

from .container import build_container
from .core.exceptions import AuthorizationError, DomainError
from .database.store import KeyedStore
from .attendance.controller import register as register_attendance
from .notifications.controller import register as register_notifications
from .requests.controller import register as register_requests
from .users.controller import register as register_users

logger = logging.getLogger(__name__)


def create_app(settings_module: Optional[str] = None, *, store: Optional[KeyedStore] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info(
        "settings=%s store=%s shift=%s-%s tz=%s",
        settings_module,
        getattr(settings, "STORE_BACKEND", "memory"),
        getattr(settings, "SHIFT_START", None),
        getattr(settings, "SHIFT_END", None),
        getattr(settings, "BUSINESS_TIMEZONE", None),
    )

    container = build_container(settings, store=store)
    app.extensions["shift_attendance"] = container

    @app.errorhandler(DomainError)
    def handle_domain_error(e: DomainError):
        status = 403 if isinstance(e, AuthorizationError) else 400
        return jsonify({"success": False, "message": str(e)}), status

    register_users(app, container)
    register_attendance(app, container)
    register_requests(app, container)
    register_notifications(app, container)

    return app


if __name__ == "__main__":
    create_app().run()
