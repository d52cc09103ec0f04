from __future__ import annotations

import json
from typing import Any

from sqlalchemy import Boolean, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.travelsite.models import Base

DIFFICULTIES = ("Easy", "Moderate", "Challenging")


def number_itinerary(days: list[dict] | None) -> list[dict[str, Any]]:
    """Return itinerary entries renumbered 1..N in their given order."""
    out = []
    for i, d in enumerate(days or [], start=1):
        out.append(
            {
                "day": i,
                "title": str(d.get("title") or ""),
                "description": str(d.get("description") or ""),
            }
        )
    return out


def dump_itinerary(days: list[dict] | None) -> str:
    return json.dumps(number_itinerary(days))


def load_itinerary(raw: str | None) -> list[dict[str, Any]]:
    if not raw:
        return []
    try:
        value = json.loads(raw)
    except (TypeError, ValueError):
        return []
    if not isinstance(value, list):
        return []
    return [d for d in value if isinstance(d, dict)]


class Tour(Base):
    __tablename__ = "tours"
    __table_args__ = (
        Index("idx_tours_featured", "featured"),
        Index("idx_tours_location", "location"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)  # short, for cards
    long_description: Mapped[str] = mapped_column(Text, nullable=False)
    location: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    duration: Mapped[str] = mapped_column(String(128), nullable=False)  # e.g. "7 Days / 6 Nights"
    difficulty: Mapped[str] = mapped_column(String(32), nullable=False)  # Easy, Moderate, Challenging
    accommodation: Mapped[str] = mapped_column(String(255), nullable=False)
    group_size: Mapped[str] = mapped_column(String(128), nullable=False)
    price: Mapped[int] = mapped_column(Integer, nullable=False)  # USD
    image_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    featured: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    # JSON list of {"day", "title", "description"}
    itinerary: Mapped[str] = mapped_column(Text, nullable=False, default="[]")

    def to_dict(self) -> dict[str, Any]:
        out = super().to_dict()
        out["itinerary"] = load_itinerary(self.itinerary)
        return out
