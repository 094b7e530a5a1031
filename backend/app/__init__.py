"""Application factory and app-wide configuration."""

from __future__ import annotations

import uuid
from typing import Optional

from flask import Flask, g, request
from flask_cors import CORS

from backend.app.api.routes import api_bp
from backend.app.logging import get_logger, set_request_id, setup_logging
from backend.config import Settings, load_settings

logger = get_logger(__name__)


def create_app(settings: Optional[Settings] = None) -> Flask:
    """Build the Flask app instance."""
    settings = settings or load_settings()
    setup_logging(settings.log_level)

    app = Flask(__name__)
    app.config["SETTINGS"] = settings

    CORS(
        app,
        resources={r"/api/*": {"origins": list(settings.cors_origins)}},
        supports_credentials=True,
    )

    @app.before_request
    def _assign_request_id() -> None:
        g.request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex[:12]
        set_request_id(g.request_id)

    @app.after_request
    def _echo_request_id(response):
        response.headers["X-Request-ID"] = g.get("request_id", "-")
        return response

    app.register_blueprint(api_bp, url_prefix="/api")
    logger.info("app ready name=%s env=%s origins=%s", settings.app_name, settings.env, ",".join(settings.cors_origins))
    return app
