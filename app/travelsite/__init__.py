import logging
import os
import time
import uuid
from datetime import timedelta

from dotenv import load_dotenv
from flask import Flask, g, jsonify, request
from werkzeug.exceptions import HTTPException

# Registers every table on Base.metadata before any blueprint touches the store.
from app.travelsite import models as _models  # noqa: F401
from app.travelsite.auth import bp as auth_bp, load_current_user
from app.travelsite.config import is_production, load_config
from app.travelsite.db import init_db, teardown_db_session
from app.travelsite.errors import ApiError
from app.travelsite.media import missing_media_config
from app.travelsite.routes import bp as routes_bp
from app.travelsite.modules.tours.routes import bp as tours_bp
from app.travelsite.modules.inquiries.routes import bp as inquiries_bp
from app.travelsite.modules.messages.routes import bp as messages_bp
from app.travelsite.modules.testimonials.routes import bp as testimonials_bp
from app.travelsite.modules.gallery.routes import bp as gallery_bp
from app.travelsite.modules.newsletter.routes import bp as newsletter_bp
from app.travelsite.modules.content.routes import bp as content_bp
from app.travelsite.modules.admin.routes import bp as admin_bp

_HTTP_MESSAGES = {
    404: "Not found",
    405: "Method not allowed",
}


def create_app() -> Flask:
    load_dotenv()
    app = Flask(__name__)
    app.config.from_mapping(load_config())
    app.config["PERMANENT_SESSION_LIFETIME"] = timedelta(days=app.config["SESSION_LIFETIME_DAYS"])
    app.json.sort_keys = False  # type: ignore[attr-defined]
    app.logger.setLevel(app.config.get("LOG_LEVEL") or "INFO")
    production = is_production(app.config.get("ENV"))

    # Production guardrails (fail fast with clear logs)
    if production:
        if not app.config.get("DATABASE_URL") or str(app.config["DATABASE_URL"]).strip() == "":
            raise RuntimeError("DATABASE_URL is required in production.")
        if str(app.config["DATABASE_URL"]).startswith("sqlite"):
            raise RuntimeError("DATABASE_URL must be Postgres in production (not sqlite).")
        if not app.config.get("SECRET_KEY") or str(app.config["SECRET_KEY"]) in ("", "change-me"):
            raise RuntimeError("SECRET_KEY must be set to a strong value in production (not default).")

    init_db(app)

    def _dispose_engine_on_fork() -> None:
        if hasattr(os, "register_at_fork"):
            def _after_fork_child():
                engine = app.extensions.get("sqlalchemy_engine")
                if engine:
                    engine.dispose()
                    app.logger.info("Disposed DB engine after fork (pid=%s)", os.getpid())

            os.register_at_fork(after_in_child=_after_fork_child)

    _dispose_engine_on_fork()

    # Media host check (log loudly; requests that need it answer 502)
    missing_media = missing_media_config(app.config)
    if missing_media:
        app.logger.error(
            "MEDIA CONFIG ERROR: backend '%s' missing required env vars: %s",
            app.config.get("MEDIA_BACKEND"),
            ", ".join(missing_media),
        )
    else:
        app.logger.info("Media backend: %s", app.config.get("MEDIA_BACKEND"))

    app.register_blueprint(routes_bp)
    for bp in (auth_bp, tours_bp, inquiries_bp, messages_bp, testimonials_bp, gallery_bp, newsletter_bp, content_bp, admin_bp):
        app.register_blueprint(bp, url_prefix="/api")

    @app.before_request
    def _start_request():
        g.request_id = uuid.uuid4().hex
        g.request_started = time.perf_counter()

    app.before_request(load_current_user)
    app.teardown_appcontext(teardown_db_session)

    @app.after_request
    def _log_api_request(response):
        rid = getattr(g, "request_id", None)
        if rid:
            response.headers["X-Request-ID"] = rid
        if request.path.startswith("/api"):
            started = getattr(g, "request_started", None)
            elapsed_ms = int((time.perf_counter() - started) * 1000) if started else 0
            app.logger.info("%s %s %s in %dms", request.method, request.path, response.status_code, elapsed_ms)
        return response

    @app.errorhandler(ApiError)
    def _err_api(e: ApiError):  # type: ignore[no-redef]
        if e.status_code >= 500:
            app.logger.warning("%s (request_id=%s): %s", type(e).__name__, getattr(g, "request_id", None), e.message)
        return jsonify(e.to_dict()), e.status_code

    @app.errorhandler(HTTPException)
    def _err_http(e: HTTPException):  # type: ignore[no-redef]
        if not request.path.startswith("/api"):
            return e
        code = e.code or 500
        if code == 413:
            message = f"File too large. Maximum size is {app.config['MAX_CONTENT_LENGTH'] // (1024 * 1024)}MB."
        else:
            message = _HTTP_MESSAGES.get(code) or e.name
        return jsonify({"message": message}), code

    @app.errorhandler(Exception)
    def _err_500(e: Exception):  # type: ignore[no-redef]
        # Ensure stack trace shows in logs.
        rid = getattr(g, "request_id", None)
        app.logger.exception("Unhandled 500 (request_id=%s)", rid)
        s = getattr(g, "db_session", None)
        if s is not None:
            s.rollback()
        message = "An unexpected error occurred." if production else str(e) or type(e).__name__
        return jsonify({"message": message}), 500

    logging.getLogger(__name__).info("create_app() complete; app ready to serve")

    return app
