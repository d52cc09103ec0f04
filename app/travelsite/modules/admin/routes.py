from __future__ import annotations

from flask import Blueprint, current_app, g, jsonify, request

from app.travelsite.errors import UpstreamError, ValidationError
from app.travelsite.media import MediaHost, MediaHostError, folder_path, media_host_from_config
from app.travelsite.rbac import require_admin
from app.travelsite.store import get_store

bp = Blueprint("admin", __name__)


def _media_host() -> MediaHost:
    try:
        return media_host_from_config(current_app.config)
    except MediaHostError as e:
        current_app.logger.error("MEDIA CONFIG ERROR: %s", e)
        raise UpstreamError("Media host is not configured.") from e


def _upstream(what: str, e: MediaHostError) -> UpstreamError:
    current_app.logger.error("Media host %s failed (request_id=%s): %s", what, getattr(g, "request_id", None), e)
    return UpstreamError(f"Image {what} failed. Please try again later.")


@bp.get("/admin/stats")
@require_admin
def stats():
    counts = get_store().get_stats()
    return jsonify(
        [
            {"label": "Active Tours", "value": counts["tours"], "icon": "✈️", "link": "/admin/tours"},
            {"label": "Unhandled Inquiries", "value": counts["inquiries"], "icon": "✉️", "link": "/admin/inquiries"},
            {"label": "Unhandled Messages", "value": counts["messages"], "icon": "💬", "link": "/admin/messages"},
        ]
    )


@bp.post("/admin/upload")
@require_admin
def upload():
    f = request.files.get("imageFile")
    if not f or not f.filename:
        raise ValidationError("No image file provided.", {"imageFile": ["No image file provided."]})
    if not (f.mimetype or "").startswith("image/"):
        raise ValidationError("Only image files can be uploaded.", {"imageFile": ["Only image files can be uploaded."]})
    try:
        folder = folder_path(current_app.config.get("UPLOAD_ROOT_FOLDER") or "/uploads/", request.form.get("folderName") or "")
    except ValueError as e:
        raise ValidationError(str(e), {"folderName": [str(e)]}) from None

    host = _media_host()
    try:
        hosted = host.upload(f.read(), f.filename, folder, content_type=f.mimetype)
    except MediaHostError as e:
        raise _upstream("upload", e) from e
    current_app.logger.info("Uploaded %s to %s", hosted.name, folder)
    return jsonify(hosted.to_dict()), 201


@bp.delete("/admin/media/<path:file_id>")
@require_admin
def media_delete(file_id: str):
    host = _media_host()
    try:
        host.delete(file_id)
    except MediaHostError as e:
        raise _upstream("delete", e) from e
    current_app.logger.info("Deleted hosted file %s", file_id)
    return {"message": "File deleted successfully"}, 200


@bp.get("/carousel-images")
def carousel_images():
    host = _media_host()
    try:
        files = host.list_files(current_app.config.get("CAROUSEL_FOLDER") or "/")
    except MediaHostError as e:
        raise _upstream("listing", e) from e
    return jsonify([{"id": f.file_id, "src": f.url, "alt": f.name} for f in files])
