"""Static files under /app/, counted for the admin metrics page."""
from __future__ import annotations

import threading

from flask import Blueprint, current_app, send_from_directory

bp = Blueprint("fileserver", __name__)


class FileserverMetrics:
    """Hit counter shared by every request thread."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._hits = 0

    def increment(self) -> int:
        with self._lock:
            self._hits += 1
            return self._hits

    @property
    def hits(self) -> int:
        with self._lock:
            return self._hits

    def reset(self) -> None:
        with self._lock:
            self._hits = 0


# /app/index.html redirects to /app/ before reaching the view
@bp.get("/", defaults={"path": "index.html"})
@bp.get("/<path:path>")
def serve(path: str):
    current_app.extensions["fileserver_metrics"].increment()
    return send_from_directory(current_app.config["FILESERVER_ROOT"], path)
