import uuid
from datetime import datetime
from enum import Enum

from sqlalchemy import DateTime, ForeignKey, Integer, String, Index, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base
from app.db.types import JSONEncodedList, utcnow


class PublicationType(str, Enum):
    JOURNAL = "journal"
    CONFERENCE = "conference"
    BOOK_CHAPTER = "book_chapter"
    CHAPTER = "chapter"
    THESIS = "thesis"
    REPORT = "report"
    PATENT = "patent"
    OTHER = "other"


class Publication(Base):
    """Scholarly record (article, conference paper, chapter ...).

    authors: ordered list of names, stored as JSON text, never empty.
    doi: optional, unique when present.
    """

    __tablename__ = "publications"
    __table_args__ = (
        Index("ix_publications_user_id", "user_id"),
        Index("ix_publications_year", "year"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)

    title: Mapped[str] = mapped_column(String(500), nullable=False)
    authors: Mapped[list] = mapped_column(JSONEncodedList, nullable=False, default=list)
    year: Mapped[int] = mapped_column(Integer, nullable=False)

    journal: Mapped[str | None] = mapped_column(String(255), nullable=True)
    volume: Mapped[str | None] = mapped_column(String(50), nullable=True)
    pages: Mapped[str | None] = mapped_column(String(50), nullable=True)
    doi: Mapped[str | None] = mapped_column(String(255), unique=True, nullable=True)
    type: Mapped[str] = mapped_column(String(30), nullable=False, default=PublicationType.JOURNAL.value)

    user_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid(as_uuid=True), ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)
