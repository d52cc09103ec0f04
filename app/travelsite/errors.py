from __future__ import annotations

from typing import Any


# Ids and integer columns are 32-bit signed in the schema.
MAX_INT = 2**31 - 1


class ApiError(Exception):
    status_code = 500
    default_message = "An unexpected error occurred."

    def __init__(self, message: str | None = None, errors: dict[str, list[str]] | None = None):
        super().__init__(message or self.default_message)
        self.message = message or self.default_message
        self.errors = errors

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {"message": self.message}
        if self.errors:
            body["errors"] = self.errors
        return body


class ValidationError(ApiError):
    status_code = 400
    default_message = "Invalid data"


class AuthenticationError(ApiError):
    status_code = 401
    default_message = "Unauthorized: Authentication required."


class AuthorizationError(ApiError):
    status_code = 403
    default_message = "Forbidden"


class NotFoundError(ApiError):
    status_code = 404
    default_message = "Not found"


class ConflictError(ApiError):
    status_code = 409
    default_message = "Conflict"


class UpstreamError(ApiError):
    status_code = 502
    default_message = "Upstream service failed."


def parse_id(raw: str, label: str) -> int:
    """Parse a path id; malformed ids are a client error rather than a 404."""
    try:
        value = int(raw)
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid {label} ID format") from None
    if value < 1:
        raise ValidationError(f"Invalid {label} ID format")
    if value > MAX_INT:
        raise NotFoundError(f"{label[:1].upper()}{label[1:]} not found")
    return value
