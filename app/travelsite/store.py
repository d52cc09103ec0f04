"""
Data-access layer.

`Store` is the only code that mutates persisted state. Every public method is a
single committed store operation; reads always hit the database (no caching).
Records come back as plain dicts shaped for the API (camelCase keys, itinerary
parsed into a list, password never included). "Not found" is `None` for reads
and updates and `False` for deletes.
"""
from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import Any

from sqlalchemy import delete as sa_delete
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.travelsite.models import Base, User, UserSession
from app.travelsite.modules.content.models import CONTENT_AREAS, SINGLETON_ID, default_values
from app.travelsite.modules.gallery.models import GalleryImage
from app.travelsite.modules.inquiries.models import Inquiry
from app.travelsite.modules.messages.models import ContactMessage
from app.travelsite.modules.newsletter.models import NewsletterSubscriber
from app.travelsite.modules.testimonials.models import Testimonial
from app.travelsite.modules.tours.models import Tour, dump_itinerary
from app.travelsite.security import new_session_id

logger = logging.getLogger(__name__)


class TourNotFound(LookupError):
    def __init__(self, tour_id: int):
        super().__init__(f"Tour with ID {tour_id} not found.")
        self.tour_id = tour_id


class UsernameTaken(Exception):
    pass


class Store:
    def __init__(self, s: Session):
        self.s = s

    # ---------- generic row helpers ----------
    def _all(self, model: type[Base], *order_by: Any, where: Any = None) -> list[dict[str, Any]]:
        q = select(model)
        if where is not None:
            q = q.where(where)
        if order_by:
            q = q.order_by(*order_by)
        return [row.to_dict() for row in self.s.scalars(q).all()]

    def _get(self, model: type[Base], id: int) -> dict[str, Any] | None:
        row = self.s.get(model, id)
        return row.to_dict() if row else None

    def _create(self, model: type[Base], values: dict[str, Any]) -> dict[str, Any]:
        row = model(**values)
        self.s.add(row)
        self.s.commit()
        return row.to_dict()

    def _update(self, model: type[Base], id: int, values: dict[str, Any]) -> dict[str, Any] | None:
        row = self.s.get(model, id)
        if row is None:
            return None
        for attr, value in values.items():
            setattr(row, attr, value)
        self.s.commit()
        return row.to_dict()

    def _delete(self, model: type[Base], id: int) -> bool:
        result = self.s.execute(sa_delete(model).where(model.id == id))
        self.s.commit()
        return (result.rowcount or 0) > 0

    # ---------- users ----------
    def get_user(self, id: int) -> dict[str, Any] | None:
        return self._get(User, id)

    def get_password_hash(self, username: str) -> tuple[dict[str, Any] | None, str | None]:
        """(user, stored hash) for credential checks; the hash stays server-side."""
        user = self._user_row_by_username(username)
        if not user:
            return None, None
        return user.to_dict(), user.password

    def _user_row_by_username(self, username: str) -> User | None:
        return self.s.scalars(select(User).where(User.username == username)).one_or_none()

    def create_user(self, username: str, password_hash: str) -> dict[str, Any]:
        """Raises UsernameTaken when the unique constraint fires."""
        user = User(username=username, password=password_hash)
        self.s.add(user)
        try:
            self.s.commit()
        except IntegrityError as e:
            self.s.rollback()
            raise UsernameTaken(username) from e
        return user.to_dict()

    def update_user_username(self, user_id: int, username: str) -> bool:
        user = self.s.get(User, user_id)
        if not user:
            return False
        user.username = username
        try:
            self.s.commit()
        except IntegrityError as e:
            self.s.rollback()
            raise UsernameTaken(username) from e
        return True

    def update_user_password(self, user_id: int, password_hash: str) -> bool:
        user = self.s.get(User, user_id)
        if not user:
            return False
        user.password = password_hash
        self.s.commit()
        return True

    def get_user_password_hash(self, user_id: int) -> str | None:
        user = self.s.get(User, user_id)
        return user.password if user else None

    # ---------- sessions ----------
    def create_session(self, user_id: int, lifetime: timedelta) -> str:
        now = datetime.utcnow()
        row = UserSession(id=new_session_id(), user_id=user_id, created_at=now, expires_at=now + lifetime)
        self.s.add(row)
        self.s.commit()
        return row.id

    def get_session_user(self, session_id: str) -> dict[str, Any] | None:
        """User for a live session id; expired rows are removed on sight."""
        row = self.s.get(UserSession, session_id)
        if row is None:
            return None
        if row.expires_at <= datetime.utcnow():
            self.s.delete(row)
            self.s.commit()
            return None
        return row.user.to_dict()

    def delete_session(self, session_id: str) -> bool:
        return self._delete(UserSession, session_id)  # type: ignore[arg-type]

    def delete_user_sessions(self, user_id: int, *, keep: str | None = None) -> int:
        q = sa_delete(UserSession).where(UserSession.user_id == user_id)
        if keep:
            q = q.where(UserSession.id != keep)
        result = self.s.execute(q)
        self.s.commit()
        return result.rowcount or 0

    def purge_expired_sessions(self) -> int:
        result = self.s.execute(sa_delete(UserSession).where(UserSession.expires_at <= datetime.utcnow()))
        self.s.commit()
        return result.rowcount or 0

    # ---------- tours ----------
    def get_tours(self, location: str | None = None) -> list[dict[str, Any]]:
        where = None
        if location:
            where = func.lower(Tour.location).contains(location.strip().lower(), autoescape=True)
        return self._all(Tour, Tour.id.asc(), where=where)

    def get_tour(self, id: int) -> dict[str, Any] | None:
        return self._get(Tour, id)

    def get_featured_tours(self) -> list[dict[str, Any]]:
        return self._all(Tour, Tour.id.asc(), where=Tour.featured.is_(True))

    def create_tour(self, values: dict[str, Any]) -> dict[str, Any]:
        values = dict(values)
        values["itinerary"] = dump_itinerary(values.get("itinerary"))
        return self._create(Tour, values)

    def update_tour(self, id: int, values: dict[str, Any]) -> dict[str, Any] | None:
        values = dict(values)
        if "itinerary" in values:
            values["itinerary"] = dump_itinerary(values["itinerary"])
        return self._update(Tour, id, values)

    def delete_tour(self, id: int) -> bool:
        return self._delete(Tour, id)

    # ---------- inquiries ----------
    def get_inquiries(self) -> list[dict[str, Any]]:
        return self._all(Inquiry, Inquiry.created_at.desc(), Inquiry.id.desc())

    def get_inquiry(self, id: int) -> dict[str, Any] | None:
        return self._get(Inquiry, id)

    def create_inquiry(self, values: dict[str, Any]) -> dict[str, Any]:
        """Denormalizes the tour title; raises TourNotFound for an unknown tour id."""
        tour = self.s.get(Tour, values["tour_id"])
        if tour is None:
            raise TourNotFound(values["tour_id"])
        return self._create(
            Inquiry,
            {
                "name": values["name"],
                "email": values["email"],
                "message": values["message"],
                "tour_id": tour.id,
                "tour_name": tour.title,
                "handled": False,
                "created_at": datetime.utcnow(),
            },
        )

    def update_inquiry(self, id: int, values: dict[str, Any]) -> dict[str, Any] | None:
        # tour linkage and timestamps are fixed at creation
        return self._update(Inquiry, id, {k: v for k, v in values.items() if k == "handled"})

    def delete_inquiry(self, id: int) -> bool:
        return self._delete(Inquiry, id)

    # ---------- contact messages ----------
    def get_contact_messages(self) -> list[dict[str, Any]]:
        return self._all(ContactMessage, ContactMessage.created_at.desc(), ContactMessage.id.desc())

    def get_contact_message(self, id: int) -> dict[str, Any] | None:
        return self._get(ContactMessage, id)

    def create_contact_message(self, values: dict[str, Any]) -> dict[str, Any]:
        return self._create(ContactMessage, {**values, "handled": False, "created_at": datetime.utcnow()})

    def update_contact_message(self, id: int, values: dict[str, Any]) -> dict[str, Any] | None:
        return self._update(ContactMessage, id, {k: v for k, v in values.items() if k == "handled"})

    def delete_contact_message(self, id: int) -> bool:
        return self._delete(ContactMessage, id)

    # ---------- testimonials ----------
    def get_testimonials(self) -> list[dict[str, Any]]:
        return self._all(Testimonial, Testimonial.id.asc())

    def get_testimonial(self, id: int) -> dict[str, Any] | None:
        return self._get(Testimonial, id)

    def create_testimonial(self, values: dict[str, Any]) -> dict[str, Any]:
        return self._create(Testimonial, values)

    def update_testimonial(self, id: int, values: dict[str, Any]) -> dict[str, Any] | None:
        return self._update(Testimonial, id, values)

    def delete_testimonial(self, id: int) -> bool:
        return self._delete(Testimonial, id)

    # ---------- gallery ----------
    def get_gallery_images(self) -> list[dict[str, Any]]:
        return self._all(GalleryImage, GalleryImage.id.asc())

    def get_gallery_image(self, id: int) -> dict[str, Any] | None:
        return self._get(GalleryImage, id)

    def create_gallery_image(self, values: dict[str, Any]) -> dict[str, Any]:
        return self._create(GalleryImage, values)

    def update_gallery_image(self, id: int, values: dict[str, Any]) -> dict[str, Any] | None:
        return self._update(GalleryImage, id, values)

    def delete_gallery_image(self, id: int) -> bool:
        return self._delete(GalleryImage, id)

    # ---------- newsletter ----------
    def add_newsletter_subscriber(self, email: str) -> tuple[dict[str, Any], bool]:
        """(subscriber, created). An already-subscribed email returns the existing row."""
        existing = self.s.scalars(select(NewsletterSubscriber).where(NewsletterSubscriber.email == email)).one_or_none()
        if existing:
            return existing.to_dict(), False
        row = NewsletterSubscriber(email=email, created_at=datetime.utcnow())
        self.s.add(row)
        try:
            self.s.commit()
        except IntegrityError:
            # Lost a race with a concurrent subscribe of the same address.
            self.s.rollback()
            existing = self.s.scalars(select(NewsletterSubscriber).where(NewsletterSubscriber.email == email)).one()
            return existing.to_dict(), False
        return row.to_dict(), True

    def get_newsletter_subscribers(self) -> list[dict[str, Any]]:
        return self._all(NewsletterSubscriber, NewsletterSubscriber.created_at.desc(), NewsletterSubscriber.id.desc())

    # ---------- dashboard ----------
    def get_stats(self) -> dict[str, int]:
        def count(model: type[Base], where: Any = None) -> int:
            q = select(func.count()).select_from(model)
            if where is not None:
                q = q.where(where)
            return int(self.s.scalar(q) or 0)

        return {
            "tours": count(Tour),
            "inquiries": count(Inquiry, Inquiry.handled.is_(False)),
            "messages": count(ContactMessage, ContactMessage.handled.is_(False)),
        }

    # ---------- content singletons ----------
    def _seed_content(self, area: str, values: dict[str, Any]) -> Base | None:
        """Insert the area's row from defaults overlaid with `values`; None if another request won the insert."""
        model = CONTENT_AREAS[area]
        row = model(id=SINGLETON_ID, updated_at=datetime.utcnow(), **{**default_values(model), **values})
        self.s.add(row)
        try:
            self.s.commit()
        except IntegrityError:
            self.s.rollback()
            return None
        logger.info("Seeded %s content row", area)
        return row

    def get_content(self, area: str) -> dict[str, Any]:
        """The area's single row, seeded from defaults when absent. Raises KeyError for unknown areas."""
        model = CONTENT_AREAS[area]
        row = self.s.get(model, SINGLETON_ID) or self._seed_content(area, {}) or self.s.get(model, SINGLETON_ID)
        return row.to_dict()

    def upsert_content(self, area: str, values: dict[str, Any]) -> dict[str, Any]:
        model = CONTENT_AREAS[area]
        row = self.s.get(model, SINGLETON_ID)
        if row is None:
            seeded = self._seed_content(area, values)
            if seeded is not None:
                return seeded.to_dict()
            row = self.s.get(model, SINGLETON_ID)
        for attr, value in values.items():
            setattr(row, attr, value)
        row.updated_at = datetime.utcnow()
        self.s.commit()
        return row.to_dict()


def get_store() -> Store:
    from app.travelsite.db import db_session

    return Store(db_session())
