from __future__ import annotations

from datetime import datetime
from typing import Any

from sqlalchemy import DateTime, ForeignKey, Index, Integer, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


def camelize(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part[:1].upper() + part[1:] for part in rest)


class Base(DeclarativeBase):
    # Attribute names whose wire key is not the plain camelCase form.
    __json_keys__ = {}  # type: ignore[var-annotated]
    # Attributes that never leave the server.
    __private__ = ()  # type: ignore[var-annotated]

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        for col in self.__table__.columns:
            attr = col.key
            if attr in self.__private__:
                continue
            value = getattr(self, attr)
            if isinstance(value, datetime):
                value = value.isoformat()
            out[self.__json_keys__.get(attr) or camelize(attr)] = value
        return out


class User(Base):
    __tablename__ = "users"
    __private__ = ("password",)

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    username: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    # "<scrypt-hex>.<salt-hex>", see app.travelsite.security
    password: Mapped[str] = mapped_column(String(255), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=False), nullable=False, default=datetime.utcnow)

    sessions: Mapped[list["UserSession"]] = relationship(
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class UserSession(Base):
    """
    Server-side session row. The signed cookie only carries `id`.
    """

    __tablename__ = "user_sessions"
    __table_args__ = (
        Index("idx_user_sessions_user", "user_id"),
        Index("idx_user_sessions_expires", "expires_at"),
    )

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=False), nullable=False, default=datetime.utcnow)
    expires_at: Mapped[datetime] = mapped_column(DateTime(timezone=False), nullable=False)

    user: Mapped[User] = relationship(back_populates="sessions", lazy="joined")


# Ensure module models are imported so Base.metadata includes their tables.
# (Kept at bottom to avoid circular imports.)
from app.travelsite.modules.tours.models import Tour  # noqa: E402,F401
from app.travelsite.modules.inquiries.models import Inquiry  # noqa: E402,F401
from app.travelsite.modules.messages.models import ContactMessage  # noqa: E402,F401
from app.travelsite.modules.testimonials.models import Testimonial  # noqa: E402,F401
from app.travelsite.modules.gallery.models import GalleryImage  # noqa: E402,F401
from app.travelsite.modules.newsletter.models import NewsletterSubscriber  # noqa: E402,F401
from app.travelsite.modules.content.models import (  # noqa: E402,F401
    AboutPageContent,
    ContactPageSettings,
    GalleryPageSettings,
    HomePageContent,
    SiteSettings,
)
