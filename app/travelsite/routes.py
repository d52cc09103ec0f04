from flask import Blueprint, abort, current_app, send_from_directory

bp = Blueprint("routes", __name__)


@bp.get("/health")
def health():
    """Health check endpoint. Returns JSON."""
    return {"ok": True}


@bp.get("/healthz")
def healthz():
    """
    Fast health check for load balancer probes. No DB access.
    """
    return "ok", 200


@bp.get("/media/<path:key>")
def media_file(key: str):
    """Serves uploads written by the local media host (development only)."""
    if (current_app.config.get("MEDIA_BACKEND") or "local") != "local":
        abort(404)
    return send_from_directory(current_app.config["MEDIA_ROOT"], key)
