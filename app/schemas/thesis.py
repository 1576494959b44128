from pydantic import Field

from app.models.thesis import ThesisType, MasterSIType
from app.schemas.base import CamelModel


class _SupervisedWorkCreate(CamelModel):
    title: str = Field(min_length=1, max_length=500)
    # filled from the requester's name when blank
    author: str | None = Field(default=None, max_length=255)
    year: int
    summary: str = Field(min_length=1)
    etablissement: str = Field(min_length=1, max_length=255)
    specialite: str = Field(min_length=1, max_length=255)
    encadrant: str = Field(min_length=1, max_length=255)
    membres: list[str] | str | None = None


class _SupervisedWorkUpdate(CamelModel):
    title: str | None = Field(default=None, min_length=1, max_length=500)
    author: str | None = Field(default=None, min_length=1, max_length=255)
    year: int | None = None
    summary: str | None = Field(default=None, min_length=1)
    etablissement: str | None = Field(default=None, min_length=1, max_length=255)
    specialite: str | None = Field(default=None, min_length=1, max_length=255)
    encadrant: str | None = Field(default=None, min_length=1, max_length=255)
    membres: list[str] | str | None = None


class ThesisCreate(_SupervisedWorkCreate):
    type: ThesisType


class ThesisUpdate(_SupervisedWorkUpdate):
    type: ThesisType | None = None


class MasterSICreate(_SupervisedWorkCreate):
    type: MasterSIType


class MasterSIUpdate(_SupervisedWorkUpdate):
    type: MasterSIType | None = None
