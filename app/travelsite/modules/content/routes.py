"""
Singleton copy blocks: GET seeds the default row, PATCH upserts it.

Site settings are the "site" area, also exposed at /settings/site and
/admin/settings/site.
"""
from __future__ import annotations

from flask import Blueprint, current_app, jsonify

from app.travelsite.errors import NotFoundError
from app.travelsite.modules.content.models import CONTENT_AREAS, editable_fields
from app.travelsite.rbac import require_admin
from app.travelsite.store import get_store
from app.travelsite.utils import json_body
from app.travelsite.validation import content_schema, validated

bp = Blueprint("content", __name__)

_SCHEMAS = {area: content_schema(editable_fields(model)) for area, model in CONTENT_AREAS.items()}


def _area(area: str) -> str:
    if area not in CONTENT_AREAS:
        raise NotFoundError(f"Unknown content area '{area}'")
    return area


def _get(area: str):
    return jsonify(get_store().get_content(_area(area)))


def _patch(area: str):
    values = validated(json_body(), _SCHEMAS[_area(area)], f"Invalid {area} content data", partial=True)
    row = get_store().upsert_content(area, values)
    current_app.logger.info("Content area %s updated (%d field(s))", area, len(values))
    return jsonify(row)


@bp.get("/content/<area>")
def content_get(area: str):
    return _get(area)


@bp.patch("/content/<area>")
@require_admin
def content_patch(area: str):
    return _patch(area)


@bp.get("/settings/site")
def site_settings_public():
    return _get("site")


@bp.get("/admin/settings/site")
@require_admin
def site_settings_get():
    return _get("site")


@bp.patch("/admin/settings/site")
@require_admin
def site_settings_patch():
    return _patch("site")
