from __future__ import annotations

from typing import Any

from flask import request

from app.travelsite.errors import NotFoundError


def json_body() -> Any:
    """Parsed JSON body, or None when missing/malformed (schemas reject it)."""
    return request.get_json(silent=True)


def found(record: dict[str, Any] | None, message: str) -> dict[str, Any]:
    if record is None:
        raise NotFoundError(message)
    return record


def deleted(ok: bool, label: str) -> tuple[dict[str, str], int]:
    if not ok:
        raise NotFoundError(f"{label} not found")
    return {"message": f"{label} deleted successfully"}, 200
