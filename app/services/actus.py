"""
services/actus.py

News item ("actualité") business rules.

- list: exact creator / category filter, search over title and short
  description, newest first (created_at only, news items have no year)
- create: multipart form, optional image, date defaults to today and
  category to "Conférence"; title and short description hold 500 characters
- update: partial; a new image replaces the old one, removeImage clears it
- delete: owner-or-admin; the image is removed after the row is gone

Old image files are returned to the caller instead of being deleted here,
so the router can remove them only once the transaction has committed.

Related files:
- app.services.content   : filter / enrich / ownership helpers
- app.services.uploads   : image storage
- app.routers.actus      : HTTP layer

"""

import uuid
from dataclasses import dataclass
from datetime import date

from sqlalchemy.orm import Session

from app.core.deps import Requester
from app.core.errors import ValidationFailedError
from app.models.actu import Actu, ActuCategory
from app.services.content import (
    ActuFilter,
    apply_changes,
    clean_text,
    creator_fields,
    ensure_can_modify,
    get_or_404,
    get_with_creator,
    list_with_creator,
)
from app.services.uploads import public_url

LABEL = "actu"
NOT_FOUND_LABEL = "Actu"
DELETED_MESSAGE = "Actualité supprimée avec succès"

CATEGORIES = [c.value for c in ActuCategory]
DEFAULT_CATEGORY = ActuCategory.CONFERENCE.value
MAX_TEXT_LENGTH = 500


@dataclass
class ActuFields:
    """Form values as received; None means "not sent"."""

    title: str | None = None
    category: str | None = None
    date: str | None = None
    short_description: str | None = None
    full_content: str | None = None


def to_dict(actu: Actu, creator_name: str | None, creator_email: str | None) -> dict:
    return {
        "id": str(actu.id),
        "title": actu.title,
        "category": actu.category,
        "date": actu.date.isoformat() if actu.date else None,
        "image": public_url(actu.image),
        "shortDescription": actu.short_description,
        "fullContent": actu.full_content,
        "createdAt": actu.created_at.isoformat() if actu.created_at else None,
        "updatedAt": actu.updated_at.isoformat() if actu.updated_at else None,
        **creator_fields(actu.user_id, creator_name, creator_email),
    }


def _category(value: str) -> str:
    if value not in CATEGORIES:
        raise ValidationFailedError(f"category must be one of: {', '.join(CATEGORIES)}")
    return value


def _limit(value: str, field: str) -> str:
    if len(value) > MAX_TEXT_LENGTH:
        raise ValidationFailedError(f"{field} must be at most {MAX_TEXT_LENGTH} characters")
    return value


def _date(value: str) -> date:
    try:
        return date.fromisoformat(value[:10])
    except ValueError:
        raise ValidationFailedError("date must be in 'YYYY-MM-DD' format")


def list_actus(db: Session, flt: ActuFilter) -> list[dict]:
    rows = list_with_creator(
        db,
        Actu,
        exact={Actu.user_id: flt.creator_id, Actu.category: clean_text(flt.category)},
        search_columns=[Actu.title, Actu.short_description],
        search_term=flt.search_term,
        order_by=[Actu.created_at.desc()],
    )
    return [to_dict(*row) for row in rows]


def get_actu(db: Session, actu_id: uuid.UUID) -> dict:
    return to_dict(*get_with_creator(db, Actu, actu_id, NOT_FOUND_LABEL))


def create_actu(db: Session, requester: Requester, fields: ActuFields, image: str | None) -> Actu:
    title = clean_text(fields.title)
    if not title:
        raise ValidationFailedError("title is required")
    category = clean_text(fields.category) or DEFAULT_CATEGORY

    day = clean_text(fields.date)
    actu = Actu(
        title=_limit(title, "title"),
        category=_category(category),
        date=_date(day) if day else date.today(),
        image=image,
        short_description=_limit(fields.short_description or "", "shortDescription"),
        full_content=fields.full_content or "",
        user_id=requester.id,
    )
    db.add(actu)
    db.flush()
    return actu


"""
Update a news item

- image: path of a newly stored file, replaces the current one
- remove_image: clear the current image without a replacement
- returns (actu, path of the file that is no longer referenced or None)

"""

def update_actu(
    db: Session,
    requester: Requester,
    actu_id: uuid.UUID,
    fields: ActuFields,
    *,
    image: str | None = None,
    remove_image: bool = False,
) -> tuple[Actu, str | None]:
    actu = get_or_404(db, Actu, actu_id, NOT_FOUND_LABEL)
    ensure_can_modify(requester, actu, "update", LABEL)

    changes = {}
    if fields.title is not None:
        if not clean_text(fields.title):
            raise ValidationFailedError("title cannot be empty")
        changes["title"] = _limit(fields.title.strip(), "title")
    if fields.category is not None:
        changes["category"] = _category(fields.category.strip())
    if clean_text(fields.date):
        changes["date"] = _date(fields.date.strip())
    if fields.short_description is not None:
        changes["short_description"] = _limit(fields.short_description, "shortDescription")
    if fields.full_content is not None:
        changes["full_content"] = fields.full_content

    stale = None
    if image is not None:
        stale = actu.image
        changes["image"] = image
    elif remove_image:
        stale = actu.image
        changes["image"] = None

    apply_changes(actu, changes)
    db.flush()
    return actu, stale


def delete_actu(db: Session, requester: Requester, actu_id: uuid.UUID) -> str | None:
    actu = get_or_404(db, Actu, actu_id, NOT_FOUND_LABEL)
    ensure_can_modify(requester, actu, "delete", LABEL)
    image = actu.image
    db.delete(actu)
    db.flush()
    return image
