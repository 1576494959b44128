"""
publications.py

Publication API (/api/publications).

Main features:
- public list with creatorId / year / searchTerm filters
- public detail
- create / update / delete for authenticated members
  (update and delete: owner or admin only)

Every publication in a response carries creatorId, creatorName and
creatorEmail resolved from its owner.

Related files:
- app.services.publications : business rules
- app.services.content      : filter contract / commit handling
- app.schemas.publication   : request bodies

"""


from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from starlette import status

from app.core.deps import Requester, get_db, get_requester
from app.schemas.publication import PublicationCreate, PublicationUpdate
from app.services import publications as service
from app.services.content import (
    PublicationFilter,
    parse_uuid,
    parse_year,
    resolve_id,
    write_transaction,
)

router = APIRouter(prefix="/api/publications", tags=["publications"])


"""
Publication list

- creatorId : owner id (exact)
- year      : exact year, ignored when not a number
- searchTerm: case-insensitive match on title or authors
- order: year desc, then newest first

"""

@router.get("")
def list_publications(
    creator_id: str | None = Query(None, alias="creatorId"),
    year: str | None = Query(None),
    search_term: str | None = Query(None, alias="searchTerm"),
    db: Session = Depends(get_db),
):
    flt = PublicationFilter(
        creator_id=parse_uuid(creator_id),
        year=parse_year(year),
        search_term=search_term,
    )
    items = service.list_publications(db, flt)
    return {"success": True, "count": len(items), "data": items}


@router.get("/{publication_id}")
def get_publication(publication_id: str, db: Session = Depends(get_db)):
    pub_id = resolve_id(publication_id, service.NOT_FOUND_LABEL)
    return {"success": True, "data": service.get_publication(db, pub_id)}


"""
Create a publication

- owner = authenticated user (any userId in the body is ignored)
- the user's name is added first to the authors when missing
- duplicate DOI -> 400

"""

@router.post("", status_code=status.HTTP_201_CREATED)
def create_publication(
    data: PublicationCreate,
    requester: Requester = Depends(get_requester),
    db: Session = Depends(get_db),
):
    with write_transaction(db, integrity_message=service.DUPLICATE_DOI_MESSAGE):
        pub = service.create_publication(db, requester, data)
    return {"success": True, "data": service.get_publication(db, pub.id)}


@router.put("/{publication_id}")
def update_publication(
    publication_id: str,
    data: PublicationUpdate,
    requester: Requester = Depends(get_requester),
    db: Session = Depends(get_db),
):
    pub_id = resolve_id(publication_id, service.NOT_FOUND_LABEL)
    with write_transaction(db, integrity_message=service.DUPLICATE_DOI_MESSAGE):
        service.update_publication(db, requester, pub_id, data)
    return {"success": True, "data": service.get_publication(db, pub_id)}


@router.delete("/{publication_id}")
def delete_publication(
    publication_id: str,
    requester: Requester = Depends(get_requester),
    db: Session = Depends(get_db),
):
    pub_id = resolve_id(publication_id, service.NOT_FOUND_LABEL)
    with write_transaction(db):
        service.delete_publication(db, requester, pub_id)
    return {"success": True, "message": "Publication deleted successfully"}
