from __future__ import annotations

from sqlalchemy import Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.travelsite.models import Base


class GalleryImage(Base):
    __tablename__ = "gallery_images"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    caption: Mapped[str] = mapped_column(Text, nullable=False)
    # Either an image-type key the frontend maps to a bundled asset, or a hosted URL.
    type: Mapped[str] = mapped_column(String(512), nullable=False)
