from __future__ import annotations

import json

from flask import Flask, jsonify
from pydantic import ValidationError
from werkzeug.exceptions import HTTPException

from .config import load_settings
from .db import init_db
from .logger import configure_logging
from .routes.admin import bp as admin_bp
from .routes.health import bp as health_bp
from .routes.meta import bp as meta_bp
from .routes.results import bp as results_bp
from .routes.schedule import bp as schedule_bp
from .routes.sitemap import bp as sitemap_bp
from .routes.stats import bp as stats_bp
from .services.schedule import ScheduleRepository


def create_app() -> Flask:
    settings = load_settings()
    configure_logging(settings.logging, verbose=settings.flask.debug)

    app = Flask(__name__)
    app.config["SECRET_KEY"] = settings.flask.secret_key
    app.config["SITE_URL"] = settings.site_url
    init_db()
    ScheduleRepository().ensure_defaults()

    app.register_blueprint(health_bp)
    app.register_blueprint(stats_bp, url_prefix="/api/stats")
    app.register_blueprint(results_bp, url_prefix="/api/results")
    app.register_blueprint(meta_bp, url_prefix="/api/metadata")
    app.register_blueprint(schedule_bp, url_prefix="/api/schedule")
    app.register_blueprint(sitemap_bp)
    app.register_blueprint(admin_bp, url_prefix="/admin/api")

    @app.errorhandler(ValidationError)
    def handle_validation_error(exc: ValidationError):
        return jsonify({"error": "invalid request", "details": json.loads(exc.json())}), 400

    @app.errorhandler(Exception)
    def handle_error(exc: Exception):
        if isinstance(exc, HTTPException):
            return exc
        app.logger.exception("Unhandled error: %s", exc)
        return jsonify({"error": str(exc)}), 500

    return app
