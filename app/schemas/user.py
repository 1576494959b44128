import uuid
from datetime import date, datetime

from pydantic import ConfigDict, field_validator

from app.db.types import decode_list
from app.models.user import Role
from app.schemas.base import CamelModel
from app.services.uploads import public_url


# User as returned by the API (password hash is never part of it)
class UserOut(CamelModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    email: str
    role: Role
    name: str | None = None
    position: str | None = None
    phone: str | None = None
    image: str | None = None
    orcid: str | None = None
    biography: str | None = None
    expertises: list = []
    research_interests: list = []
    university_education: list = []
    must_change_password: bool = False
    expiration_date: date | None = None
    is_archived: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @field_validator("image", mode="before")
    @classmethod
    def absolute_image(cls, v):
        return public_url(v)

    @field_validator("expertises", "research_interests", "university_education", mode="before")
    @classmethod
    def as_list(cls, v):
        return decode_list(v)


def user_to_dict(user) -> dict:
    return UserOut.model_validate(user).model_dump(mode="json", by_alias=True)
