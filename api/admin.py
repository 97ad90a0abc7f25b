from __future__ import annotations

import logging

from flask import Blueprint, current_app, abort

from models import storage
from models.user import User

logger = logging.getLogger(__name__)

bp = Blueprint("admin", __name__)

METRICS_TEMPLATE = (
    "<html><body><h1>Welcome, Chirpy Admin</h1>"
    "<p>Chirpy has been visited {hits} times!</p></body></html>"
)


@bp.get("/metrics")
def metrics():
    """
    File server hit count
    ---
    tags:
      - Admin
    produces:
      - text/html
    responses:
      200: { description: OK }
    """
    hits = current_app.extensions["fileserver_metrics"].hits
    return METRICS_TEMPLATE.format(hits=hits), 200, {"Content-Type": "text/html; charset=utf-8"}


@bp.post("/reset")
def reset():
    """
    Zero the hit counter and delete every user (dev platform only)
    ---
    tags:
      - Admin
    responses:
      200: { description: Reset }
      403: { description: Not a dev platform }
    """
    if current_app.config.get("PLATFORM") != "dev":
        abort(403, description="Reset is only allowed on the dev platform")

    current_app.extensions["fileserver_metrics"].reset()
    session = storage.get_session()
    # chirps and refresh tokens go with their users (ON DELETE CASCADE)
    deleted = session.query(User).delete()
    storage.save()
    logger.warning("reset: deleted %d users", deleted)
    return "Reset", 200, {"Content-Type": "text/plain; charset=utf-8"}
