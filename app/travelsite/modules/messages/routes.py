from __future__ import annotations

from flask import Blueprint, current_app, jsonify

from app.travelsite.errors import parse_id
from app.travelsite.rbac import require_admin
from app.travelsite.store import get_store
from app.travelsite.utils import deleted, found, json_body
from app.travelsite.validation import CONTACT_SCHEMA, HANDLED_SCHEMA, validated

bp = Blueprint("messages", __name__)


@bp.post("/contact")
def contact_create():
    values = validated(json_body(), CONTACT_SCHEMA, "Invalid contact form data")
    msg = get_store().create_contact_message(values)
    current_app.logger.info("Contact message received id=%s", msg["id"])
    return jsonify(msg), 201


@bp.get("/admin/messages")
@require_admin
def messages_list():
    return jsonify(get_store().get_contact_messages())


@bp.get("/admin/messages/<raw_id>")
@require_admin
def messages_detail(raw_id: str):
    message_id = parse_id(raw_id, "message")
    return jsonify(found(get_store().get_contact_message(message_id), "Message not found"))


@bp.patch("/admin/messages/<raw_id>")
@require_admin
def messages_update(raw_id: str):
    message_id = parse_id(raw_id, "message")
    values = validated(json_body(), HANDLED_SCHEMA)
    return jsonify(found(get_store().update_contact_message(message_id, values), "Message not found"))


@bp.delete("/admin/messages/<raw_id>")
@require_admin
def messages_delete(raw_id: str):
    message_id = parse_id(raw_id, "message")
    return deleted(get_store().delete_contact_message(message_id), "Message")
