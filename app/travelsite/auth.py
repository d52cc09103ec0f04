from __future__ import annotations

import uuid
from datetime import timedelta

from flask import Blueprint, current_app, g, jsonify, request, session

from app.travelsite.errors import AuthenticationError, AuthorizationError, ConflictError, ValidationError
from app.travelsite.rbac import require_admin
from app.travelsite.security import hash_password, verify_password
from app.travelsite.store import UsernameTaken, get_store
from app.travelsite.utils import json_body
from app.travelsite.validation import ACCOUNT_UPDATE_SCHEMA, REGISTER_SCHEMA, validated

bp = Blueprint("auth", __name__)

_SESSION_KEY = "sid"
_LOGIN_FAILED = "Incorrect username or password."


def _lifetime() -> timedelta:
    return timedelta(days=int(current_app.config.get("SESSION_LIFETIME_DAYS") or 7))


def load_current_user() -> None:
    """
    Resolves g.current_user from the session id in the signed cookie.
    The user_sessions row is authoritative; a missing or expired row clears the cookie.
    """
    if not getattr(g, "request_id", None):
        g.request_id = uuid.uuid4().hex
    if request.path.startswith(("/static/", "/health", "/healthz", "/media/")):
        g.current_user = None
        return

    sid = session.get(_SESSION_KEY)
    if not sid:
        g.current_user = None
        return

    try:
        user = get_store().get_session_user(str(sid))
    except Exception as e:
        current_app.logger.error("load_current_user DB error (clearing session): %s", e)
        user = None
    if user is None:
        session.pop(_SESSION_KEY, None)
    g.current_user = user


def _start_session(user: dict) -> None:
    store = get_store()
    old = session.get(_SESSION_KEY)
    if old:
        store.delete_session(str(old))
    session.clear()
    session.permanent = True
    session[_SESSION_KEY] = store.create_session(user["id"], _lifetime())
    g.current_user = user


@bp.post("/register")
def register():
    if not current_app.config.get("REGISTRATION_ENABLED", True):
        raise AuthorizationError("Registration is disabled.")
    creds = validated(json_body(), REGISTER_SCHEMA)
    try:
        user = get_store().create_user(creds["username"], hash_password(creds["password"]))
    except UsernameTaken:
        current_app.logger.info("Registration rejected: username %r taken", creds["username"])
        raise ConflictError("Username already exists") from None
    _start_session(user)
    current_app.logger.info("Registered user id=%s request_id=%s", user["id"], getattr(g, "request_id", None))
    return jsonify(user), 201


@bp.post("/login")
def login():
    payload = json_body()
    if not isinstance(payload, dict):
        raise ValidationError("Request body must be a JSON object.")
    username = payload.get("username")
    password = payload.get("password")
    if not isinstance(username, str) or not isinstance(password, str) or not username.strip() or not password:
        raise ValidationError("Username and password are required.")

    user, stored = get_store().get_password_hash(username.strip())
    # verify_password runs the full hash even when the user is unknown.
    if not verify_password(password, stored) or user is None:
        current_app.logger.warning("Login failed request_id=%s", getattr(g, "request_id", None))
        raise AuthenticationError(_LOGIN_FAILED)

    _start_session(user)
    current_app.logger.info("Login ok user id=%s request_id=%s", user["id"], getattr(g, "request_id", None))
    return jsonify(user), 200


@bp.post("/logout")
def logout():
    sid = session.get(_SESSION_KEY)
    if sid:
        get_store().delete_session(str(sid))
        current_app.logger.info("Logout user id=%s", (g.current_user or {}).get("id"))
    session.clear()
    g.current_user = None
    return {"message": "Logout successful"}, 200


@bp.get("/user")
def user_get():
    # null (not 401) when signed out, so the client can tell "logged out" from "check failed"
    return jsonify(getattr(g, "current_user", None)), 200


@bp.patch("/user")
@require_admin
def user_patch():
    clean = validated(json_body(), ACCOUNT_UPDATE_SCHEMA)
    if "username" not in clean and "new_password" not in clean:
        raise ValidationError("Nothing to update: provide username and/or newPassword.")

    store = get_store()
    user_id = g.current_user["id"]
    if not verify_password(clean["current_password"], store.get_user_password_hash(user_id)):
        raise AuthenticationError("Current password is incorrect.")

    if clean.get("username") and clean["username"] != g.current_user["username"]:
        try:
            store.update_user_username(user_id, clean["username"])
        except UsernameTaken:
            raise ConflictError("Username already exists") from None
    if clean.get("new_password"):
        store.update_user_password(user_id, hash_password(clean["new_password"]))
        revoked = store.delete_user_sessions(user_id, keep=session.get(_SESSION_KEY))
        current_app.logger.info("Password changed user id=%s; revoked %s other session(s)", user_id, revoked)

    user = store.get_user(user_id)
    g.current_user = user
    return jsonify(user), 200
