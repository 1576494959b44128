"""
services/content.py

Shared machinery for the owned content resources
(publications, theses, Master/PFE projects, news items).

Every one of those resources follows the same contract:

- list    : optional exact filters (creator, year, type, category) combined
            with AND, plus one case-insensitive substring search OR-ed over
            a fixed set of columns, ordered newest first
- read    : one row by id, 404 when missing
- enrich  : each row is joined with its owner to expose creatorName /
            creatorEmail, and always carries creatorId and userId
- mutate  : only an admin or the owner may update or delete

Per-resource rules (author autofill, DOI uniqueness, image handling) live in
the per-resource modules.

Related files:
- app.services.publications / theses / actus
- app.core.deps          : Requester
- app.core.errors        : NotFound / Forbidden / Unexpected

"""

import json
import logging
import uuid
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator, Sequence

from sqlalchemy import Text, or_, select, type_coerce
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.deps import Requester
from app.core.errors import (
    AppError,
    ForbiddenError,
    NotFoundError,
    UnexpectedError,
    ValidationFailedError,
)
from app.db.types import decode_list
from app.models.user import User

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PublicationFilter:
    creator_id: uuid.UUID | None = None
    year: int | None = None
    search_term: str | None = None


@dataclass(frozen=True)
class ThesisFilter:
    creator_id: uuid.UUID | None = None
    year: int | None = None
    type: str | None = None
    search_term: str | None = None


@dataclass(frozen=True)
class ActuFilter:
    creator_id: uuid.UUID | None = None
    category: str | None = None
    search_term: str | None = None


def clean_text(value: str | None) -> str | None:
    """Empty or whitespace-only query values count as absent."""
    if value is None:
        return None
    value = value.strip()
    return value or None


def parse_year(raw) -> int | None:
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    text = clean_text(str(raw))
    if text is None:
        return None
    try:
        return int(text)
    except ValueError:
        logger.debug("Ignoring malformed year filter %r", raw)
        return None


def parse_uuid(raw) -> uuid.UUID | None:
    if raw is None or isinstance(raw, uuid.UUID):
        return raw
    text = clean_text(str(raw))
    if text is None:
        return None
    try:
        return uuid.UUID(text)
    except ValueError:
        logger.debug("Ignoring malformed creator filter %r", raw)
        return None


def resolve_id(raw: str, label: str) -> uuid.UUID:
    """Path ids that are not UUIDs cannot resolve to any row."""
    try:
        return uuid.UUID(str(raw))
    except ValueError:
        raise NotFoundError(f"{label} not found")


def normalize_list(value) -> list:
    """Accept a native list or its JSON text; anything else becomes []."""
    if isinstance(value, str) and not value.strip().startswith("["):
        return []
    return decode_list(value)


def parse_json_list(value, field: str) -> list:
    """Strict variant: text that is not a JSON array is a 400."""
    if value is None or isinstance(value, list):
        return value or []
    text = str(value).strip()
    if not text:
        return []
    try:
        parsed = json.loads(text)
    except ValueError:
        raise ValidationFailedError(f"{field} must be a JSON array")
    if not isinstance(parsed, list):
        raise ValidationFailedError(f"{field} must be a JSON array")
    return parsed


def search_clause(columns: Sequence, term: str):
    pattern = f"%{term.lower()}%"
    # list columns are matched on their serialized JSON text
    return or_(*(type_coerce(col, Text).ilike(pattern) for col in columns))


"""
Run a filtered list query

- exact: {column: value}, None values are skipped
- search: OR over search_columns when search_term is set
- each row comes back with the owner's name and email (None when the
  owner no longer exists)

"""

def list_with_creator(
    db: Session,
    model,
    *,
    exact: dict,
    search_columns: Sequence,
    search_term: str | None,
    order_by: Sequence,
) -> list[tuple]:
    stmt = select(model, User.name, User.email).outerjoin(User, User.id == model.user_id)

    for column, value in exact.items():
        if value is not None:
            stmt = stmt.where(column == value)

    term = clean_text(search_term)
    if term:
        stmt = stmt.where(search_clause(search_columns, term))

    stmt = stmt.order_by(*order_by)
    try:
        return [tuple(row) for row in db.execute(stmt).all()]
    except SQLAlchemyError as e:
        logger.exception("Listing %s failed", model.__tablename__)
        raise UnexpectedError(f"Failed to retrieve {model.__tablename__}", error=str(e))


def get_with_creator(db: Session, model, item_id: uuid.UUID, label: str) -> tuple:
    stmt = (
        select(model, User.name, User.email)
        .outerjoin(User, User.id == model.user_id)
        .where(model.id == item_id)
    )
    row = db.execute(stmt).first()
    if row is None:
        raise NotFoundError(f"{label} not found")
    return tuple(row)


def get_or_404(db: Session, model, item_id: uuid.UUID, label: str):
    obj = db.get(model, item_id)
    if obj is None:
        raise NotFoundError(f"{label} not found")
    return obj


def creator_fields(owner_id: uuid.UUID | None, name: str | None, email: str | None) -> dict:
    owner = str(owner_id) if owner_id else None
    return {
        "userId": owner,
        "creatorId": owner,
        "creatorName": name,
        "creatorEmail": email,
    }


"""
Owner-or-admin check

- action: "update" / "delete"
- label: resource name used in the 403 message

"""

def ensure_can_modify(requester: Requester, obj, action: str, label: str) -> None:
    if not requester.can_modify(obj.user_id):
        raise ForbiddenError(f"Not authorized to {action} this {label}")


def apply_changes(obj, changes: dict) -> None:
    for field, value in changes.items():
        setattr(obj, field, value)


"""
Commit a write and translate failures

- domain errors are re-raised untouched after rollback
- IntegrityError -> ValidationFailedError(integrity_message) when given
- anything else -> UnexpectedError carrying the driver message

"""

@contextmanager
def write_transaction(db: Session, *, integrity_message: str | None = None) -> Iterator[None]:
    try:
        yield
        db.commit()
    except AppError:
        db.rollback()
        raise
    except IntegrityError as e:
        db.rollback()
        if integrity_message:
            raise ValidationFailedError(integrity_message, error=str(e.orig))
        raise UnexpectedError("Database error", error=f"{type(e).__name__}: {e.orig}")
    except Exception as e:
        db.rollback()
        logger.exception("Write failed")
        raise UnexpectedError("Server error", error=f"{type(e).__name__}: {e}")
