"""Health check endpoint."""

from __future__ import annotations

import mongoengine
from flask import Blueprint, current_app

from mediahub.api.deps import json_response, timing
from mediahub.core.extensions import MONGO_ALIAS

bp = Blueprint("health", __name__)


@bp.get("/health")
@timing
def healthcheck():
    """Return application and document store health information."""

    db_status = "ok"
    try:
        mongoengine.get_db(alias=MONGO_ALIAS).command("ping")
    except Exception:  # pragma: no cover - depends on store availability
        current_app.logger.exception("healthcheck.db_error")
        db_status = "fail"
    version = current_app.config.get("APP_VERSION", "dev")
    payload = {"status": "ok", "db": db_status, "version": version}
    return json_response(payload)
