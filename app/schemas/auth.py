from pydantic import EmailStr, Field

from app.models.user import Role
from app.schemas.base import CamelModel


class RegisterRequest(CamelModel):
    email: EmailStr
    password: str = Field(min_length=6, max_length=128)
    # honoured only when the caller is an admin
    role: Role | None = None
    name: str | None = Field(default=None, max_length=255)
    position: str | None = Field(default=None, max_length=255)
    phone: str | None = Field(default=None, max_length=50)
    orcid: str | None = Field(default=None, max_length=50)
    biography: str | None = None
    expertises: list[str] | str | None = None
    research_interests: list[str] | str | None = None
    university_education: list[dict] | str | None = None


class LoginRequest(CamelModel):
    email: EmailStr
    password: str = Field(min_length=1)


class InitialSignupRequest(CamelModel):
    name: str = Field(min_length=1, max_length=255)
    email: EmailStr
    password: str = Field(min_length=6, max_length=128)


class ChangePasswordRequest(CamelModel):
    old_password: str = Field(min_length=1)
    new_password: str = Field(min_length=6, max_length=128)


class InitialPasswordSetupRequest(CamelModel):
    # "change" | "keep"
    action: str
    new_password: str | None = Field(default=None, max_length=128)
