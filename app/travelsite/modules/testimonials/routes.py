from __future__ import annotations

from flask import Blueprint, jsonify

from app.travelsite.errors import parse_id
from app.travelsite.rbac import require_admin
from app.travelsite.store import get_store
from app.travelsite.utils import deleted, found, json_body
from app.travelsite.validation import TESTIMONIAL_SCHEMA, validated

bp = Blueprint("testimonials", __name__)


@bp.get("/testimonials")
def testimonials_public():
    return jsonify(get_store().get_testimonials())


# ---------- Admin ----------
@bp.get("/admin/testimonials")
@require_admin
def testimonials_list():
    return jsonify(get_store().get_testimonials())


@bp.post("/admin/testimonials")
@require_admin
def testimonials_create():
    values = validated(json_body(), TESTIMONIAL_SCHEMA, "Invalid testimonial data")
    return jsonify(get_store().create_testimonial(values)), 201


@bp.get("/admin/testimonials/<raw_id>")
@require_admin
def testimonials_detail(raw_id: str):
    testimonial_id = parse_id(raw_id, "testimonial")
    return jsonify(found(get_store().get_testimonial(testimonial_id), "Testimonial not found"))


@bp.patch("/admin/testimonials/<raw_id>")
@require_admin
def testimonials_update(raw_id: str):
    testimonial_id = parse_id(raw_id, "testimonial")
    values = validated(json_body(), TESTIMONIAL_SCHEMA, "Invalid testimonial data", partial=True)
    return jsonify(found(get_store().update_testimonial(testimonial_id, values), "Testimonial not found"))


@bp.delete("/admin/testimonials/<raw_id>")
@require_admin
def testimonials_delete(raw_id: str):
    testimonial_id = parse_id(raw_id, "testimonial")
    return deleted(get_store().delete_testimonial(testimonial_id), "Testimonial")
