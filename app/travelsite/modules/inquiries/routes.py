from __future__ import annotations

from flask import Blueprint, current_app, jsonify

from app.travelsite.errors import ValidationError, parse_id
from app.travelsite.rbac import require_admin
from app.travelsite.store import TourNotFound, get_store
from app.travelsite.utils import deleted, found, json_body
from app.travelsite.validation import HANDLED_SCHEMA, INQUIRY_SCHEMA, validated

bp = Blueprint("inquiries", __name__)


@bp.post("/inquiries")
def inquiries_create():
    values = validated(json_body(), INQUIRY_SCHEMA, "Invalid inquiry data")
    try:
        inquiry = get_store().create_inquiry(values)
    except TourNotFound as e:
        raise ValidationError(str(e), {"tourId": [str(e)]}) from None
    current_app.logger.info("Inquiry received id=%s tour_id=%s", inquiry["id"], inquiry["tourId"])
    return jsonify(inquiry), 201


@bp.get("/inquiries")
@require_admin
def inquiries_list():
    return jsonify(get_store().get_inquiries())


@bp.get("/inquiries/<raw_id>")
@require_admin
def inquiries_detail(raw_id: str):
    inquiry_id = parse_id(raw_id, "inquiry")
    return jsonify(found(get_store().get_inquiry(inquiry_id), "Inquiry not found"))


@bp.patch("/inquiries/<raw_id>")
@require_admin
def inquiries_update(raw_id: str):
    inquiry_id = parse_id(raw_id, "inquiry")
    values = validated(json_body(), HANDLED_SCHEMA)
    return jsonify(found(get_store().update_inquiry(inquiry_id, values), "Inquiry not found"))


@bp.delete("/inquiries/<raw_id>")
@require_admin
def inquiries_delete(raw_id: str):
    inquiry_id = parse_id(raw_id, "inquiry")
    return deleted(get_store().delete_inquiry(inquiry_id), "Inquiry")
