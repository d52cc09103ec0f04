from __future__ import annotations

from datetime import datetime

from sqlalchemy import Boolean, DateTime, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.travelsite.models import Base


class Inquiry(Base):
    __tablename__ = "inquiries"
    __table_args__ = (
        Index("idx_inquiries_handled", "handled"),
        Index("idx_inquiries_created_at", "created_at"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(320), nullable=False)
    message: Mapped[str] = mapped_column(Text, nullable=False)

    # No FK: the inquiry outlives the tour, tour_name keeps it readable.
    tour_id: Mapped[int] = mapped_column(Integer, nullable=False)
    tour_name: Mapped[str] = mapped_column(String(255), nullable=False)

    handled: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=False), nullable=False, default=datetime.utcnow)
