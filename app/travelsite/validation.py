"""
Declared payload schemas.

A schema is a tuple of `Field`s; `validate()` walks it and returns the cleaned
payload keyed by model attribute plus a field -> messages dict. Wire keys are
camelCase, unknown keys are dropped.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any

from app.travelsite.errors import MAX_INT, ValidationError
from app.travelsite.modules.tours.models import DIFFICULTIES

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


@dataclass(frozen=True)
class Field:
    key: str
    attr: str
    kind: str = "str"  # str, email, choice, int, price, bool, itinerary
    required: bool = True
    min_length: int = 0
    choices: tuple[str, ...] = ()
    nullable: bool = False
    strip: bool = True
    label: str | None = None

    @property
    def name(self) -> str:
        if self.label:
            return self.label
        words = re.sub(r"([A-Z])", r" \1", self.key).strip().lower()
        return words[:1].upper() + words[1:]


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _check_str(f: Field, value: Any) -> tuple[Any, str | None]:
    if not isinstance(value, str):
        return None, f"{f.name} must be text."
    if f.strip:
        value = value.strip()
    if f.min_length and len(value) < f.min_length:
        return None, f"{f.name} must be at least {f.min_length} characters."
    return value, None


def _check_int(f: Field, value: Any) -> tuple[Any, str | None]:
    if isinstance(value, bool):
        return None, f"{f.name} must be a whole number."
    if isinstance(value, str):
        try:
            value = int(value.strip())
        except ValueError:
            return None, f"{f.name} must be a whole number."
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if not isinstance(value, int):
        return None, f"{f.name} must be a whole number."
    if value < 1:
        return None, f"{f.name} must be a positive number."
    if value > MAX_INT:
        return None, f"{f.name} is out of range."
    return value, None


def _check_itinerary(f: Field, value: Any) -> tuple[Any, str | None]:
    if not isinstance(value, list):
        return None, "Itinerary must be a list of days."
    days = []
    for i, day in enumerate(value, start=1):
        if not isinstance(day, dict):
            return None, f"Itinerary day {i} must be an object."
        title = day.get("title")
        description = day.get("description", "")
        if not isinstance(title, str) or not title.strip():
            return None, f"Itinerary day {i} needs a title."
        if description is None:
            description = ""
        if not isinstance(description, str):
            return None, f"Itinerary day {i} description must be text."
        days.append({"title": title.strip(), "description": description.strip()})
    return days, None


def _check(f: Field, value: Any) -> tuple[Any, str | None]:
    if f.kind == "str":
        return _check_str(f, value)
    if f.kind == "email":
        value, err = _check_str(f, value)
        if err:
            return None, err
        if not _EMAIL_RE.match(value):
            return None, "Invalid email address."
        return value.lower(), None
    if f.kind == "choice":
        if value not in f.choices:
            return None, f"{f.name} must be one of: {', '.join(f.choices)}"
        return value, None
    if f.kind in ("int", "price"):
        if f.kind == "price" and isinstance(value, str):
            try:
                value = float(value.strip())
            except ValueError:
                return None, f"{f.name} must be a number."
        return _check_int(f, value)
    if f.kind == "bool":
        if not isinstance(value, bool):
            return None, f"{f.name} must be true or false."
        return value, None
    if f.kind == "itinerary":
        return _check_itinerary(f, value)
    raise ValueError(f"Unknown field kind: {f.kind!r}")


def validate(payload: Any, schema: tuple[Field, ...], *, partial: bool = False) -> tuple[dict[str, Any], dict[str, list[str]]]:
    if not isinstance(payload, dict):
        return {}, {"_body": ["Request body must be a JSON object."]}

    clean: dict[str, Any] = {}
    errors: dict[str, list[str]] = {}
    for f in schema:
        present = f.key in payload
        value = payload.get(f.key)
        if not present and partial:
            continue
        if _is_blank(value) and f.kind in ("str", "email", "int", "price", "choice"):
            if f.required:
                errors.setdefault(f.key, []).append(f"{f.name} is required.")
            elif present:
                clean[f.attr] = None if f.nullable else ""
            continue
        if value is None:
            if f.required:
                errors.setdefault(f.key, []).append(f"{f.name} is required.")
            continue
        checked, err = _check(f, value)
        if err:
            errors.setdefault(f.key, []).append(err)
        else:
            clean[f.attr] = checked
    return clean, errors


def validated(payload: Any, schema: tuple[Field, ...], message: str | None = None, *, partial: bool = False) -> dict[str, Any]:
    """validate() that raises ValidationError; without `message` the first field error is used."""
    clean, errors = validate(payload, schema, partial=partial)
    if errors:
        first = next(iter(errors.values()))[0]
        raise ValidationError(message or first, errors)
    return clean


TOUR_SCHEMA = (
    Field("title", "title", min_length=3),
    Field("description", "description", min_length=10),
    Field("longDescription", "long_description", min_length=50),
    Field("location", "location", required=False),
    Field("duration", "duration"),
    Field("difficulty", "difficulty", kind="choice", choices=DIFFICULTIES),
    Field("accommodation", "accommodation"),
    Field("groupSize", "group_size"),
    Field("price", "price", kind="price"),
    Field("imageUrl", "image_url", required=False, nullable=True, label="Image URL"),
    Field("featured", "featured", kind="bool", required=False),
    Field("itinerary", "itinerary", kind="itinerary", required=False),
)

INQUIRY_SCHEMA = (
    Field("name", "name"),
    Field("email", "email", kind="email"),
    Field("message", "message"),
    Field("tourId", "tour_id", kind="int", label="Tour ID"),
)

CONTACT_SCHEMA = (
    Field("name", "name"),
    Field("email", "email", kind="email"),
    Field("phone", "phone", required=False, nullable=True),
    Field("subject", "subject"),
    Field("message", "message"),
)

TESTIMONIAL_SCHEMA = (
    Field("name", "name"),
    Field("location", "location", required=False, nullable=True),
    Field("content", "content"),
)

GALLERY_IMAGE_SCHEMA = (
    Field("caption", "caption"),
    Field("type", "type"),
)

NEWSLETTER_SCHEMA = (Field("email", "email", kind="email"),)

HANDLED_SCHEMA = (Field("handled", "handled", kind="bool", label="'handled'"),)

REGISTER_SCHEMA = (
    Field("username", "username", min_length=3),
    Field("password", "password", min_length=6, strip=False),
)

ACCOUNT_UPDATE_SCHEMA = (
    Field("currentPassword", "current_password", strip=False),
    Field("username", "username", required=False, min_length=3),
    Field("newPassword", "new_password", required=False, min_length=6, strip=False),
)


def content_schema(fields: dict[str, str]) -> tuple[Field, ...]:
    """Every content field is optional free text."""
    return tuple(Field(key, attr, required=False) for key, attr in fields.items())
