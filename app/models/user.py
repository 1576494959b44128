"""
user.py

User and Role models.

Holds the identity and public profile of every lab member. Every content
record (publication, thesis, Master/PFE, news item) points back to the user
that created it.

"""

import uuid
import datetime
from enum import Enum

from sqlalchemy import String, Text, Boolean, Date, DateTime, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base
from app.db.types import JSONEncodedList, utcnow



"""
User roles

- ADMIN   : full access to every resource and to user management
- MEMBER  : can manage the content they created and their own profile

"""

class Role(str, Enum):
    ADMIN = "admin"
    MEMBER = "member"



"""
User model

- email / orcid are unique
- expertises / research_interests / university_education are JSON text lists
- must_change_password is set for admin-provisioned accounts
- expiration_date / is_archived drive account expiry

"""

class User(Base):
    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4
    )

    email: Mapped[str] = mapped_column(String(255), unique=True, index=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)

    role: Mapped[Role] = mapped_column(default=Role.MEMBER)

    name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    position: Mapped[str | None] = mapped_column(String(255), nullable=True)
    phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    image: Mapped[str | None] = mapped_column(String(500), nullable=True)
    orcid: Mapped[str | None] = mapped_column(String(50), unique=True, nullable=True)
    biography: Mapped[str | None] = mapped_column(Text, nullable=True)

    expertises: Mapped[list] = mapped_column(JSONEncodedList, nullable=True, default=list)
    research_interests: Mapped[list] = mapped_column(JSONEncodedList, nullable=True, default=list)
    university_education: Mapped[list] = mapped_column(JSONEncodedList, nullable=True, default=list)

    must_change_password: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    expiration_date: Mapped[datetime.date | None] = mapped_column(Date, nullable=True)
    is_archived: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, index=True)

    created_at: Mapped[datetime.datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at: Mapped[datetime.datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False
    )
