import uuid
from datetime import datetime
from enum import Enum

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, declared_attr

from app.db.base import Base
from app.db.types import JSONEncodedList, utcnow


class ThesisType(str, Enum):
    HDR = "HDR"
    THESE = "These"


class MasterSIType(str, Enum):
    MASTER = "Master"
    PFE = "PFE"


class SupervisedWorkMixin:
    """Columns shared by theses and Master/PFE projects.

    membres: jury members, ordered list stored as JSON text.
    """

    id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)

    title: Mapped[str] = mapped_column(String(500), nullable=False)
    author: Mapped[str] = mapped_column(String(255), nullable=False)
    year: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    summary: Mapped[str] = mapped_column(Text, nullable=False)
    type: Mapped[str] = mapped_column(String(20), nullable=False)
    etablissement: Mapped[str] = mapped_column(String(255), nullable=False)
    specialite: Mapped[str] = mapped_column(String(255), nullable=False)
    encadrant: Mapped[str] = mapped_column(String(255), nullable=False)
    membres: Mapped[list] = mapped_column(JSONEncodedList, nullable=True, default=list)

    @declared_attr
    def user_id(cls) -> Mapped[uuid.UUID | None]:
        return mapped_column(
            Uuid(as_uuid=True), ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True
        )

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)


class Thesis(SupervisedWorkMixin, Base):
    """HDR or doctoral thesis."""

    __tablename__ = "theses"


class MasterSI(SupervisedWorkMixin, Base):
    """Master or PFE (end-of-studies) project."""

    __tablename__ = "master_sis"
