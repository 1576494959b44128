"""
services/users.py

Member accounts and profiles.

Main functions:
- account state  : is_expired, ensure_can_login, issue_token
- directory      : list_users (active only unless an admin asks for all),
                   get_profile (archived profiles hidden from the public)
- management     : create_user (admin), update_user (admin or self),
                   delete_user (admin, never self)
- stats          : count_members

Profile images are stored through app.services.uploads; replaced or
removed files are handed back to the router, which deletes them after the
commit.

Related files:
- app.routers.auth      : login / register / password flows
- app.routers.users     : /api/users
- app.schemas.user      : UserOut serialization

"""

import logging
import uuid
from dataclasses import dataclass
from datetime import date

from sqlalchemy import func, or_, select
from sqlalchemy.orm import Session

from app.core.deps import Requester
from app.core.errors import (
    ForbiddenError,
    NotFoundError,
    UnauthorizedError,
    ValidationFailedError,
)
from app.core.security import (
    create_access_token,
    generate_temporary_password,
    get_password_hash,
    verify_password,
)
from app.models.user import User, Role
from app.services.content import parse_json_list

logger = logging.getLogger(__name__)

DELETE_IMAGE_SIGNAL = "DELETE_IMAGE_SIGNAL"

EMAIL_TAKEN_MESSAGE = "User with this email already exists."
ORCID_TAKEN_MESSAGE = "Cet ORCID est déjà utilisé par un autre utilisateur."


def issue_token(user: User) -> str:
    return create_access_token(str(user.id), role=user.role.value, name=user.name)


def is_expired(user: User, today: date | None = None) -> bool:
    if user.expiration_date is None:
        return False
    return (today or date.today()) > user.expiration_date


"""
Login checks

- unknown email / wrong password -> 401 "Invalid credentials"
- archived account -> 403
- expired account -> archived on the spot, then 403

"""

def authenticate(db: Session, email: str, password: str) -> User:
    user = db.scalar(select(User).where(User.email == email.lower()))
    if not user:
        raise UnauthorizedError("Invalid credentials")

    if user.is_archived:
        raise ForbiddenError(
            "Your account has been archived and is no longer active. Please contact support."
        )

    if not verify_password(password, user.password_hash):
        raise UnauthorizedError("Invalid credentials")

    if is_expired(user):
        user.is_archived = True
        db.commit()
        logger.info("Archived expired account %s", user.id)
        raise ForbiddenError("Your account has expired. Please contact an administrator.")

    return user


def ensure_email_free(db: Session, email: str) -> None:
    if db.scalar(select(User.id).where(User.email == email)) is not None:
        raise ValidationFailedError(EMAIL_TAKEN_MESSAGE)


def ensure_orcid_free(db: Session, orcid: str | None, exclude_id: uuid.UUID | None = None) -> None:
    if not orcid:
        return
    stmt = select(User.id).where(User.orcid == orcid)
    if exclude_id is not None:
        stmt = stmt.where(User.id != exclude_id)
    if db.scalar(stmt) is not None:
        raise ValidationFailedError(ORCID_TAKEN_MESSAGE)


def _blank_to_none(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None


def count_users(db: Session) -> int:
    return db.scalar(select(func.count()).select_from(User)) or 0


# archived accounts are not counted as lab members
def count_members(db: Session) -> int:
    return db.scalar(select(func.count()).select_from(User).where(User.is_archived.is_(False))) or 0


"""
Self-registration and first-admin signup

- data: RegisterRequest or InitialSignupRequest (profile fields optional)
- the account does not have to change its password

"""

def register_user(db: Session, data, *, role: Role = Role.MEMBER) -> User:
    email = data.email.lower()
    ensure_email_free(db, email)
    orcid = _blank_to_none(getattr(data, "orcid", None))
    ensure_orcid_free(db, orcid)

    user = User(
        email=email,
        password_hash=get_password_hash(data.password),
        role=role,
        name=_blank_to_none(data.name),
        position=_blank_to_none(getattr(data, "position", None)),
        phone=_blank_to_none(getattr(data, "phone", None)),
        orcid=orcid,
        biography=_blank_to_none(getattr(data, "biography", None)),
        expertises=parse_json_list(getattr(data, "expertises", None), "expertises"),
        research_interests=parse_json_list(
            getattr(data, "research_interests", None), "researchInterests"
        ),
        university_education=parse_json_list(
            getattr(data, "university_education", None), "universityEducation"
        ),
        must_change_password=False,
    )
    db.add(user)
    db.flush()
    return user


"""
Member directory

- public callers (and admins without include_archived) only see active
  accounts: not archived and not past their expiration date
- ordered by name

"""

def list_users(db: Session, *, include_archived: bool = False) -> list[User]:
    stmt = select(User)
    if not include_archived:
        stmt = stmt.where(
            User.is_archived.is_(False),
            or_(User.expiration_date.is_(None), User.expiration_date > date.today()),
        )
    return list(db.scalars(stmt.order_by(User.name.asc())).all())


def get_profile(db: Session, user_id: uuid.UUID, viewer: User | None) -> User:
    user = db.get(User, user_id)
    if not user:
        raise NotFoundError("Utilisateur non trouvé.")
    if user.is_archived:
        privileged = viewer is not None and (viewer.role == Role.ADMIN or viewer.id == user.id)
        if not privileged:
            raise NotFoundError("Utilisateur non trouvé ou archivé.")
    return user


@dataclass
class UserFields:
    """Multipart profile fields as received; None means "not sent"."""

    email: str | None = None
    password: str | None = None
    name: str | None = None
    role: str | None = None
    position: str | None = None
    phone: str | None = None
    orcid: str | None = None
    biography: str | None = None
    expertises: str | None = None
    research_interests: str | None = None
    university_education: str | None = None
    expiration_date: str | None = None
    must_change_password: str | None = None


def _role(value: str) -> Role:
    try:
        return Role(value.strip().lower())
    except ValueError:
        raise ValidationFailedError("role must be 'admin' or 'member'")


def _expiration(value: str | None) -> date | None:
    text = _blank_to_none(value)
    if text is None:
        return None
    try:
        return date.fromisoformat(text[:10])
    except ValueError:
        raise ValidationFailedError("expirationDate must be in 'YYYY-MM-DD' format")


"""
Admin-created account

- a temporary password is generated when none is given
- must_change_password is set so the member picks a password at first login
- returns (user, plain temporary password)

"""

def create_user(db: Session, fields: UserFields, image: str | None) -> tuple[User, str]:
    email = _blank_to_none(fields.email)
    if not email:
        raise ValidationFailedError("email is required")
    email = email.lower()
    ensure_email_free(db, email)

    orcid = _blank_to_none(fields.orcid)
    ensure_orcid_free(db, orcid)

    temporary_password = _blank_to_none(fields.password) or generate_temporary_password()

    user = User(
        email=email,
        password_hash=get_password_hash(temporary_password),
        role=_role(fields.role) if _blank_to_none(fields.role) else Role.MEMBER,
        name=_blank_to_none(fields.name),
        position=_blank_to_none(fields.position),
        phone=_blank_to_none(fields.phone),
        image=image,
        orcid=orcid,
        biography=_blank_to_none(fields.biography),
        expertises=parse_json_list(fields.expertises, "expertises"),
        research_interests=parse_json_list(fields.research_interests, "researchInterests"),
        university_education=parse_json_list(fields.university_education, "universityEducation"),
        expiration_date=_expiration(fields.expiration_date),
        must_change_password=True,
    )
    db.add(user)
    db.flush()
    return user, temporary_password


"""
Profile update (admin or self)

- only admins change the role
- empty strings clear optional text fields
- a password sets must_change_password to False
- ORCID must stay unique
- image: newly stored path; delete_image: clear without replacement
- returns (user, path of the file that is no longer referenced or None)

"""

def update_user(
    db: Session,
    requester: Requester,
    user_id: uuid.UUID,
    fields: UserFields,
    *,
    image: str | None = None,
    delete_image: bool = False,
) -> tuple[User, str | None]:
    user = db.get(User, user_id)
    if not user:
        raise NotFoundError("User not found")
    if not requester.is_admin and requester.id != user.id:
        raise ForbiddenError("Forbidden: You are not authorized to update this profile.")

    changes = {}
    for field in ("name", "position", "phone", "biography"):
        value = getattr(fields, field)
        if value is not None:
            changes[field] = _blank_to_none(value)

    if fields.role is not None and requester.is_admin:
        changes["role"] = _role(fields.role)

    if fields.expertises is not None:
        changes["expertises"] = parse_json_list(fields.expertises, "expertises")
    if fields.research_interests is not None:
        changes["research_interests"] = parse_json_list(fields.research_interests, "researchInterests")
    if fields.university_education is not None:
        changes["university_education"] = parse_json_list(fields.university_education, "universityEducation")

    if fields.expiration_date is not None and requester.is_admin:
        changes["expiration_date"] = _expiration(fields.expiration_date)

    if _blank_to_none(fields.password):
        changes["password_hash"] = get_password_hash(fields.password.strip())
        changes["must_change_password"] = False
    elif fields.must_change_password is not None and requester.is_admin:
        changes["must_change_password"] = fields.must_change_password.strip().lower() == "true"

    if fields.orcid is not None:
        orcid = _blank_to_none(fields.orcid)
        ensure_orcid_free(db, orcid, exclude_id=user.id)
        changes["orcid"] = orcid

    stale = None
    if image is not None:
        stale = user.image
        changes["image"] = image
    elif delete_image:
        stale = user.image
        changes["image"] = None

    for field, value in changes.items():
        setattr(user, field, value)
    db.flush()
    return user, stale


def delete_user(db: Session, requester: Requester, user_id: uuid.UUID) -> str | None:
    user = db.get(User, user_id)
    if not user:
        raise NotFoundError("User not found")
    if user.id == requester.id:
        raise ForbiddenError("Vous ne pouvez pas supprimer votre propre compte.")
    image = user.image
    db.delete(user)
    db.flush()
    return image


def change_password(db: Session, user: User, old_password: str, new_password: str) -> User:
    if not verify_password(old_password, user.password_hash):
        raise ValidationFailedError("Ancien mot de passe incorrect.")
    user.password_hash = get_password_hash(new_password)
    user.must_change_password = False
    db.flush()
    return user


"""
First-login password step

- only allowed while must_change_password is set
- action "change": store new_password
- action "keep"  : keep the temporary password

"""

def initial_password_setup(db: Session, user: User, action: str, new_password: str | None) -> str:
    if not user.must_change_password:
        raise ForbiddenError("Password change not required for this account.")

    if action == "change":
        if not new_password:
            raise ValidationFailedError("New password is required.")
        if len(new_password) < 6:
            raise ValidationFailedError("New password must be at least 6 characters.")
        user.password_hash = get_password_hash(new_password)
        user.must_change_password = False
        db.flush()
        return "Mot de passe initial mis à jour avec succès."

    if action == "keep":
        user.must_change_password = False
        db.flush()
        return "Mot de passe temporaire confirmé."

    raise ValidationFailedError("Invalid action specified.")
