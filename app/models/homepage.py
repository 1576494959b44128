"""
homepage.py

Homepage and presentation-page content.

- Hero                 : single banner record (title, description, button, image)
- CarouselItem         : ordered slides, order is unique
- PresentationContent  : single "main_presentation" record made of free-form
                         content blocks, director info and three counters

"""

import uuid
from datetime import datetime

from sqlalchemy import DateTime, Integer, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base
from app.db.types import JSONEncodedList, utcnow


MAIN_PRESENTATION_SECTION = "main_presentation"


class Hero(Base):
    __tablename__ = "heroes"

    id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)

    title: Mapped[str | None] = mapped_column(String(255), nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    button_content: Mapped[str | None] = mapped_column(String(255), nullable=True)
    image_url: Mapped[str | None] = mapped_column(String(500), nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)


class CarouselItem(Base):
    __tablename__ = "carousel_items"

    id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)

    image_url: Mapped[str] = mapped_column(String(500), nullable=False)
    title: Mapped[str | None] = mapped_column(String(255), nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    order: Mapped[int] = mapped_column(Integer, unique=True, nullable=False)
    link: Mapped[str | None] = mapped_column(String(500), nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)


class PresentationContent(Base):
    __tablename__ = "presentation_content"

    id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)

    section_name: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    content_blocks: Mapped[list] = mapped_column(JSONEncodedList, nullable=False, default=list)

    director_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    director_position: Mapped[str | None] = mapped_column(String(255), nullable=True)
    director_image: Mapped[str | None] = mapped_column(String(500), nullable=True)

    counter1_value: Mapped[int | None] = mapped_column(Integer, nullable=True, default=0)
    counter1_label: Mapped[str | None] = mapped_column(String(100), nullable=True, default="Permanents")
    counter2_value: Mapped[int | None] = mapped_column(Integer, nullable=True, default=0)
    counter2_label: Mapped[str | None] = mapped_column(String(100), nullable=True, default="Articles impactés")
    counter3_value: Mapped[int | None] = mapped_column(Integer, nullable=True, default=0)
    counter3_label: Mapped[str | None] = mapped_column(String(100), nullable=True, default="Articles publiés")

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)
