from __future__ import annotations

import time
from datetime import datetime, timezone

from flask import Blueprint, current_app, jsonify

from vibeflow import __version__

health_bp = Blueprint("health", __name__)


@health_bp.route("/health")
def health():
    """Liveness probe."""
    config = current_app.extensions["vibeflow_config"]
    started = current_app.extensions["vibeflow_started"]
    return jsonify({
        "status": "ok",
        "version": __version__,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "uptime": round(time.monotonic() - started, 3),
        "environment": config.environment,
    })
