from __future__ import annotations

from flask import Blueprint, current_app, jsonify

from app.travelsite.rbac import require_admin
from app.travelsite.store import get_store
from app.travelsite.utils import json_body
from app.travelsite.validation import NEWSLETTER_SCHEMA, validated

bp = Blueprint("newsletter", __name__)


@bp.post("/newsletter")
def newsletter_subscribe():
    values = validated(json_body(), NEWSLETTER_SCHEMA)
    subscriber, created = get_store().add_newsletter_subscriber(values["email"])
    if created:
        current_app.logger.info("Newsletter subscriber added id=%s", subscriber["id"])
    return jsonify(subscriber), 201 if created else 200


@bp.get("/admin/newsletter")
@require_admin
def newsletter_list():
    return jsonify(get_store().get_newsletter_subscribers())
