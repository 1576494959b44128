from pydantic import Field, field_validator

from app.models.publication import PublicationType
from app.schemas.base import CamelModel


def _blank_to_none(value):
    if isinstance(value, str) and not value.strip():
        return None
    return value


class PublicationCreate(CamelModel):
    title: str = Field(min_length=1, max_length=500)
    # list or its JSON text
    authors: list[str] | str | None = None
    year: int
    journal: str | None = Field(default=None, max_length=255)
    volume: str | None = Field(default=None, max_length=50)
    pages: str | None = Field(default=None, max_length=50)
    doi: str | None = Field(default=None, max_length=255)
    type: PublicationType | None = None

    @field_validator("journal", "volume", "pages", "doi", "type", mode="before")
    @classmethod
    def blank_is_none(cls, v):
        return _blank_to_none(v)


class PublicationUpdate(CamelModel):
    title: str | None = Field(default=None, min_length=1, max_length=500)
    authors: list[str] | str | None = None
    year: int | None = None
    journal: str | None = Field(default=None, max_length=255)
    volume: str | None = Field(default=None, max_length=50)
    pages: str | None = Field(default=None, max_length=50)
    doi: str | None = Field(default=None, max_length=255)
    type: PublicationType | None = None

    @field_validator("journal", "volume", "pages", "doi", "type", mode="before")
    @classmethod
    def blank_is_none(cls, v):
        return _blank_to_none(v)
