from __future__ import annotations

from flask import Blueprint, current_app, jsonify, request

from app.travelsite.errors import parse_id
from app.travelsite.rbac import require_admin
from app.travelsite.store import get_store
from app.travelsite.utils import deleted, found, json_body
from app.travelsite.validation import TOUR_SCHEMA, validated

bp = Blueprint("tours", __name__)


# ---------- Public ----------
@bp.get("/tours")
def tours_list():
    location = (request.args.get("location") or "").strip() or None
    return jsonify(get_store().get_tours(location))


@bp.get("/tours/featured")
def tours_featured():
    return jsonify(get_store().get_featured_tours())


@bp.get("/tours/<raw_id>")
def tours_detail(raw_id: str):
    tour_id = parse_id(raw_id, "tour")
    return jsonify(found(get_store().get_tour(tour_id), "Tour not found"))


# ---------- Admin ----------
@bp.post("/tours")
@require_admin
def tours_create():
    values = validated(json_body(), TOUR_SCHEMA, "Invalid tour data")
    tour = get_store().create_tour(values)
    current_app.logger.info("Tour created id=%s", tour["id"])
    return jsonify(tour), 201


@bp.patch("/tours/<raw_id>")
@require_admin
def tours_update(raw_id: str):
    tour_id = parse_id(raw_id, "tour")
    values = validated(json_body(), TOUR_SCHEMA, "Invalid tour data", partial=True)
    return jsonify(found(get_store().update_tour(tour_id, values), "Tour not found"))


@bp.delete("/tours/<raw_id>")
@require_admin
def tours_delete(raw_id: str):
    tour_id = parse_id(raw_id, "tour")
    return deleted(get_store().delete_tour(tour_id), "Tour")
