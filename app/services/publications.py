"""
services/publications.py

Publication business rules.

- list / read with the shared filter contract (creator, year, search over
  title + authors text), newest year first
- create: owner is always the requester, the requester's name is put first
  in the author list when missing, the requester's account validity is
  extended; the resulting author list must not be empty
- update: partial, owner-or-admin, owner never reassigned
- delete: owner-or-admin
- DOI must be unique when present

Related files:
- app.services.content     : filter / enrich / ownership helpers
- app.routers.publications : HTTP layer

"""

import uuid
from datetime import date

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.deps import Requester
from app.core.errors import ValidationFailedError
from app.models.publication import Publication
from app.models.user import User
from app.schemas.publication import PublicationCreate, PublicationUpdate
from app.services.content import (
    PublicationFilter,
    apply_changes,
    creator_fields,
    ensure_can_modify,
    get_or_404,
    get_with_creator,
    list_with_creator,
    normalize_list,
    parse_json_list,
)

LABEL = "publication"
NOT_FOUND_LABEL = "Publication"
DUPLICATE_DOI_MESSAGE = "DOI must be unique."
AUTHORS_REQUIRED_MESSAGE = "authors cannot be empty"


def to_dict(pub: Publication, creator_name: str | None, creator_email: str | None) -> dict:
    return {
        "id": str(pub.id),
        "title": pub.title,
        "authors": normalize_list(pub.authors),
        "year": pub.year,
        "journal": pub.journal,
        "volume": pub.volume,
        "pages": pub.pages,
        "doi": pub.doi,
        "type": pub.type,
        "createdAt": pub.created_at.isoformat() if pub.created_at else None,
        "updatedAt": pub.updated_at.isoformat() if pub.updated_at else None,
        **creator_fields(pub.user_id, creator_name, creator_email),
    }


def list_publications(db: Session, flt: PublicationFilter) -> list[dict]:
    rows = list_with_creator(
        db,
        Publication,
        exact={Publication.user_id: flt.creator_id, Publication.year: flt.year},
        search_columns=[Publication.title, Publication.authors],
        search_term=flt.search_term,
        order_by=[Publication.year.desc(), Publication.created_at.desc()],
    )
    return [to_dict(*row) for row in rows]


def get_publication(db: Session, publication_id: uuid.UUID) -> dict:
    return to_dict(*get_with_creator(db, Publication, publication_id, NOT_FOUND_LABEL))


def _ensure_doi_free(db: Session, doi: str | None, exclude_id: uuid.UUID | None = None) -> None:
    if not doi:
        return
    stmt = select(Publication.id).where(Publication.doi == doi)
    if exclude_id is not None:
        stmt = stmt.where(Publication.id != exclude_id)
    if db.scalar(stmt) is not None:
        raise ValidationFailedError(DUPLICATE_DOI_MESSAGE)


def with_requester_first(authors: list, name: str | None) -> list:
    if name and name not in authors:
        return [name, *authors]
    return authors


def add_years(day: date, years: int) -> date:
    try:
        return day.replace(year=day.year + years)
    except ValueError:
        # 29 February
        return day.replace(year=day.year + years, day=28)


"""
Extend the requester's account validity

- accounts with an expiration date get today + ACCOUNT_VALIDITY_YEARS
- accounts without one never expire and stay that way

"""

def extend_account_validity(db: Session, user_id: uuid.UUID) -> None:
    user = db.get(User, user_id)
    if user is None or user.expiration_date is None:
        return
    extended = add_years(date.today(), settings.ACCOUNT_VALIDITY_YEARS)
    if extended > user.expiration_date:
        user.expiration_date = extended


def create_publication(db: Session, requester: Requester, data: PublicationCreate) -> Publication:
    _ensure_doi_free(db, data.doi)

    authors = with_requester_first(normalize_list(data.authors), requester.name)
    if not authors:
        raise ValidationFailedError(AUTHORS_REQUIRED_MESSAGE)

    pub = Publication(
        title=data.title,
        authors=authors,
        year=data.year,
        journal=data.journal,
        volume=data.volume,
        pages=data.pages,
        doi=data.doi,
        user_id=requester.id,
    )
    if data.type is not None:
        pub.type = data.type.value

    db.add(pub)
    extend_account_validity(db, requester.id)
    db.flush()
    return pub


def update_publication(
    db: Session, requester: Requester, publication_id: uuid.UUID, data: PublicationUpdate
) -> Publication:
    pub = get_or_404(db, Publication, publication_id, NOT_FOUND_LABEL)
    ensure_can_modify(requester, pub, "update", LABEL)

    changes = data.model_dump(exclude_unset=True)
    for required in ("title", "year"):
        if required in changes and changes[required] is None:
            raise ValidationFailedError(f"{required} cannot be empty")

    if "authors" in changes:
        changes["authors"] = parse_json_list(changes["authors"], "authors")
        if not changes["authors"]:
            raise ValidationFailedError(AUTHORS_REQUIRED_MESSAGE)
    if changes.get("type") is not None:
        changes["type"] = changes["type"].value
    elif "type" in changes:
        del changes["type"]
    if "doi" in changes:
        _ensure_doi_free(db, changes["doi"], exclude_id=pub.id)

    apply_changes(pub, changes)
    db.flush()
    return pub


def delete_publication(db: Session, requester: Requester, publication_id: uuid.UUID) -> None:
    pub = get_or_404(db, Publication, publication_id, NOT_FOUND_LABEL)
    ensure_can_modify(requester, pub, "delete", LABEL)
    db.delete(pub)
    db.flush()
