from __future__ import annotations

import logging
import time

from flask import Flask, jsonify, request
from werkzeug.exceptions import HTTPException

from vibeflow.config import VibeflowConfig
from vibeflow.log import configure_logging
from vibeflow.theme import ThemeConfig

logger = logging.getLogger(__name__)

_SECURITY_HEADERS = {
    "X-Frame-Options": "DENY",
    "X-Content-Type-Options": "nosniff",
    "X-XSS-Protection": "1; mode=block",
    "Referrer-Policy": "strict-origin-when-cross-origin",
    "Permissions-Policy": "geolocation=(), microphone=(), camera=()",
}


def create_app(config: VibeflowConfig | None = None, theme: ThemeConfig | None = None) -> Flask:
    """Create and configure the Flask app."""
    config = config or VibeflowConfig.from_env()
    configure_logging(config.log_level)

    app = Flask(__name__)
    app.config.update(MAX_CONTENT_LENGTH=config.max_request_bytes)

    # Store config and theme on app for access in routes
    if theme is None:
        theme = ThemeConfig.from_file(config.theme_path) if config.theme_path else ThemeConfig()
    app.extensions["vibeflow_config"] = config
    app.extensions["vibeflow_theme"] = theme
    app.extensions["vibeflow_started"] = time.monotonic()

    @app.before_request
    def require_api_key():
        """Reject requests without the configured ``x-api-key``."""
        if not config.api_key or request.method == "OPTIONS":
            return None
        if request.headers.get("x-api-key") != config.api_key:
            return jsonify({"error": "Unauthorized", "message": "Invalid or missing API key"}), 401
        return None

    @app.after_request
    def add_headers(response):
        """CORS and security headers on every response."""
        origins = config.cors_origins
        origin = request.headers.get("Origin")
        if origins == ["*"]:
            response.headers["Access-Control-Allow-Origin"] = "*"
        elif origin in origins:
            response.headers["Access-Control-Allow-Origin"] = origin
            response.headers["Vary"] = "Origin"
        response.headers["Access-Control-Allow-Headers"] = "Content-Type, x-api-key"
        response.headers["Access-Control-Allow-Methods"] = "GET, POST, OPTIONS"
        response.headers["Access-Control-Max-Age"] = "86400"
        for name, value in _SECURITY_HEADERS.items():
            response.headers.setdefault(name, value)
        if config.is_production:
            response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"
        return response

    @app.errorhandler(HTTPException)
    def http_error(exc: HTTPException):
        if exc.code == 404:
            body = {"error": "Not found", "message": "The requested endpoint does not exist"}
        else:
            body = {"error": exc.name, "message": exc.description}
        return jsonify(body), exc.code

    @app.errorhandler(Exception)
    def unhandled_error(exc: Exception):
        logger.exception("Unhandled error: %s", exc)
        message = "An unexpected error occurred" if config.is_production else str(exc)
        return jsonify({"error": "Internal server error", "message": message}), 500

    # Register blueprints
    from vibeflow.web.routes.api import api_bp
    from vibeflow.web.routes.health import health_bp

    app.register_blueprint(health_bp)
    app.register_blueprint(api_bp, url_prefix="/v1/api")

    return app
