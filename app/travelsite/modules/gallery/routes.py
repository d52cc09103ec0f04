from __future__ import annotations

from flask import Blueprint, jsonify

from app.travelsite.errors import parse_id
from app.travelsite.rbac import require_admin
from app.travelsite.store import get_store
from app.travelsite.utils import deleted, found, json_body
from app.travelsite.validation import GALLERY_IMAGE_SCHEMA, validated

bp = Blueprint("gallery", __name__)


@bp.get("/gallery")
def gallery_public():
    return jsonify(get_store().get_gallery_images())


@bp.get("/gallery/<raw_id>")
def gallery_detail(raw_id: str):
    image_id = parse_id(raw_id, "gallery image")
    return jsonify(found(get_store().get_gallery_image(image_id), "Gallery image not found"))


# ---------- Admin ----------
@bp.get("/admin/gallery")
@require_admin
def gallery_list():
    return jsonify(get_store().get_gallery_images())


@bp.post("/admin/gallery")
@require_admin
def gallery_create():
    values = validated(json_body(), GALLERY_IMAGE_SCHEMA, "Invalid gallery image data")
    return jsonify(get_store().create_gallery_image(values)), 201


@bp.patch("/admin/gallery/<raw_id>")
@require_admin
def gallery_update(raw_id: str):
    image_id = parse_id(raw_id, "gallery image")
    values = validated(json_body(), GALLERY_IMAGE_SCHEMA, "Invalid gallery image data", partial=True)
    return jsonify(found(get_store().update_gallery_image(image_id, values), "Gallery image not found"))


@bp.delete("/admin/gallery/<raw_id>")
@require_admin
def gallery_delete(raw_id: str):
    image_id = parse_id(raw_id, "gallery image")
    return deleted(get_store().delete_gallery_image(image_id), "Gallery image")
