"""
Editable copy blocks, one single-row table per content area.

Every text column carries a non-empty default so a freshly seeded row renders
a complete page before anyone edits it.
"""
from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.travelsite.models import Base, camelize

SINGLETON_ID = 1


def _text(default: str) -> Mapped[str]:
    return mapped_column(Text, nullable=False, default=default)


class _ContentRow:
    id: Mapped[int] = mapped_column(Integer, primary_key=True, default=SINGLETON_ID)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=False), nullable=False, default=datetime.utcnow)


class AboutPageContent(_ContentRow, Base):
    __tablename__ = "about_page_content"

    main_heading: Mapped[str] = _text("Our Sacred Journey")
    image_url: Mapped[str] = _text("https://via.placeholder.com/600x400.png?text=Sacred+Bhutan+Travels")
    image_alt: Mapped[str] = _text("Bhutanese Guide")
    history_text: Mapped[str] = _text("Our story is still being written. Please update it in the admin panel.")
    mission_text: Mapped[str] = _text("Our mission statement goes here. Please update it in the admin panel.")
    philosophy_heading: Mapped[str] = _text("Our Philosophy")
    philosophy_quote: Mapped[str] = _text("Every step on an ancient path is a conversation with those who walked before.")
    value1_title: Mapped[str] = _text("Authenticity")
    value1_text: Mapped[str] = _text("Journeys rooted in living tradition.")
    value2_title: Mapped[str] = _text("Respect")
    value2_text: Mapped[str] = _text("Care for sacred sites and the communities who keep them.")
    value3_title: Mapped[str] = _text("Knowledge")
    value3_text: Mapped[str] = _text("Guides who carry the history of every place we visit.")


class HomePageContent(_ContentRow, Base):
    __tablename__ = "home_page_content"
    __json_keys__ = {"hero_image_url": "heroImageURL", "featured_map_url": "featuredMapURL"}

    # Hero
    hero_image_url: Mapped[str] = _text("https://via.placeholder.com/1600x900.png?text=Bhutan")
    hero_image_alt: Mapped[str] = _text("Ancient Bhutanese Temple")
    hero_heading_line1: Mapped[str] = _text("Walk the Ancient Paths:")
    hero_heading_line2: Mapped[str] = _text("Bhutan Pilgrimage Through the Ages")
    hero_paragraph: Mapped[str] = _text("Discover pilgrimages steeped in history...")
    hero_button_text: Mapped[str] = _text("Explore Our Sacred Routes")

    # Introduction
    intro_heading: Mapped[str] = _text("Ancient Tradition, Timeless Journey")
    intro_paragraph1: Mapped[str] = _text("Sacred Bhutan Travels invites you...")
    intro_paragraph2: Mapped[str] = _text("Each pilgrimage follows routes...")

    # Featured pilgrimages
    featured_heading: Mapped[str] = _text("Our Sacred Journeys")
    featured_map_url: Mapped[str] = _text("https://via.placeholder.com/800x600.png?text=Map+of+Bhutan")
    featured_map_alt: Mapped[str] = _text("Vintage-style map of Bhutan")
    featured_map_caption: Mapped[str] = _text("Ancient cartography revealing...")
    featured_button_text: Mapped[str] = _text("View All Pilgrimages")

    carousel_heading: Mapped[str] = _text("Moments from Our Journeys")

    # Why choose us
    why_heading: Mapped[str] = _text("Why Journey With Us")
    why1_icon: Mapped[str] = _text("☸")
    why1_title: Mapped[str] = _text("Guardians of Tradition")
    why1_text: Mapped[str] = _text("Our guides are descendants...")
    why2_icon: Mapped[str] = _text("📜")
    why2_title: Mapped[str] = _text("Deep Historical Knowledge")
    why2_text: Mapped[str] = _text("Each journey is enriched...")
    why3_icon: Mapped[str] = _text("🤝")
    why3_title: Mapped[str] = _text("Authentic Encounters")
    why3_text: Mapped[str] = _text("We create meaningful connections...")

    testimonials_heading: Mapped[str] = _text("Pilgrim Chronicles")


class GalleryPageSettings(_ContentRow, Base):
    __tablename__ = "gallery_page_settings"

    page_heading: Mapped[str] = _text("Gallery of Sacred Moments")
    page_paragraph: Mapped[str] = _text("Glimpses of temples, valleys and pilgrims along our routes.")


class ContactPageSettings(_ContentRow, Base):
    __tablename__ = "contact_page_settings"

    page_heading: Mapped[str] = _text("Connect With Us")
    location_heading: Mapped[str] = _text("Our Office in Thimphu")
    address: Mapped[str] = _text("Norzin Lam, Thimphu, Bhutan")
    email: Mapped[str] = _text("info@sacredbhutantravels.com")
    phone: Mapped[str] = _text("+975 2 000000")
    office_hours_heading: Mapped[str] = _text("Office Hours")
    office_hours_text: Mapped[str] = _text("Mon-Fri: 9 AM - 5 PM (BST)")


class SiteSettings(_ContentRow, Base):
    __tablename__ = "site_settings"

    site_name: Mapped[str] = _text("Sacred Bhutan Travels")
    tagline: Mapped[str] = _text("Pilgrimages through the Land of the Thunder Dragon")
    contact_email: Mapped[str] = _text("info@sacredbhutantravels.com")
    footer_text: Mapped[str] = _text("Sacred Bhutan Travels. All rights reserved.")


CONTENT_AREAS: dict[str, type[Base]] = {
    "about": AboutPageContent,
    "home": HomePageContent,
    "gallery": GalleryPageSettings,
    "contact": ContactPageSettings,
    "site": SiteSettings,
}

_SYSTEM_COLUMNS = ("id", "updated_at")


def editable_fields(model: type[Base]) -> dict[str, str]:
    """Map wire key -> attribute name for the editable columns of a content area."""
    out: dict[str, str] = {}
    for col in model.__table__.columns:
        if col.key in _SYSTEM_COLUMNS:
            continue
        out[model.__json_keys__.get(col.key) or camelize(col.key)] = col.key
    return out


def default_values(model: type[Base]) -> dict[str, str]:
    """Attribute name -> default text for every editable column."""
    out: dict[str, str] = {}
    for col in model.__table__.columns:
        if col.key in _SYSTEM_COLUMNS:
            continue
        out[col.key] = col.default.arg if col.default is not None else ""
    return out
