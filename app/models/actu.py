import uuid
import datetime
from enum import Enum

from sqlalchemy import Date, DateTime, ForeignKey, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base
from app.db.types import utcnow


class ActuCategory(str, Enum):
    FORMATION = "Formation"
    CONFERENCE = "Conférence"
    LABORATOIRE = "Laboratoire"


class Actu(Base):
    """News item shown on the "Actualités" pages.

    image: stored path ("/uploads/actu_images/<file>") or None.
    full_content: rich HTML.
    """

    __tablename__ = "actus"

    id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)

    title: Mapped[str] = mapped_column(String(500), nullable=False)
    category: Mapped[str] = mapped_column(String(30), nullable=False)
    date: Mapped[datetime.date] = mapped_column(Date, nullable=False)
    image: Mapped[str | None] = mapped_column(String(500), nullable=True)
    short_description: Mapped[str] = mapped_column(String(500), nullable=False, default="")
    full_content: Mapped[str | None] = mapped_column(Text, nullable=True, default="")

    user_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid(as_uuid=True), ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True
    )

    created_at: Mapped[datetime.datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at: Mapped[datetime.datetime] = mapped_column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)
