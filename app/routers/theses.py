"""
theses.py

Thesis (/api/theses) and Master/PFE (/api/mastersis) APIs.

Both resources share the same shape and rules, so one router is built per
resource by make_router().

Main features:
- public list with creatorId / year / type / searchTerm filters
- public detail
- create (author defaults to the authenticated user's name)
- update / delete: owner or admin only

Related files:
- app.services.theses      : SupervisedWorkService (THESES / MASTER_SIS)
- app.schemas.thesis       : request bodies

"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from starlette import status

from app.core.deps import Requester, get_db, get_requester
from app.schemas.thesis import ThesisCreate, ThesisUpdate, MasterSICreate, MasterSIUpdate
from app.services.content import ThesisFilter, parse_uuid, parse_year, resolve_id, write_transaction
from app.services.theses import THESES, MASTER_SIS, SupervisedWorkService


def make_router(
    prefix: str,
    service: SupervisedWorkService,
    create_schema,
    update_schema,
    deleted_message: str,
    tag: str,
) -> APIRouter:
    router = APIRouter(prefix=prefix, tags=[tag])

    @router.get("")
    def list_items(
        creator_id: str | None = Query(None, alias="creatorId"),
        year: str | None = Query(None),
        type: str | None = Query(None),
        search_term: str | None = Query(None, alias="searchTerm"),
        db: Session = Depends(get_db),
    ):
        flt = ThesisFilter(
            creator_id=parse_uuid(creator_id),
            year=parse_year(year),
            type=type,
            search_term=search_term,
        )
        items = service.list(db, flt)
        return {"success": True, "count": len(items), "data": items}

    @router.get("/{item_id}")
    def get_item(item_id: str, db: Session = Depends(get_db)):
        obj_id = resolve_id(item_id, service.not_found_label)
        return {"success": True, "data": service.get(db, obj_id)}

    @router.post("", status_code=status.HTTP_201_CREATED)
    def create_item(
        data: create_schema,
        requester: Requester = Depends(get_requester),
        db: Session = Depends(get_db),
    ):
        with write_transaction(db):
            obj = service.create(db, requester, data)
        return {"success": True, "data": service.get(db, obj.id)}

    @router.put("/{item_id}")
    def update_item(
        item_id: str,
        data: update_schema,
        requester: Requester = Depends(get_requester),
        db: Session = Depends(get_db),
    ):
        obj_id = resolve_id(item_id, service.not_found_label)
        with write_transaction(db):
            service.update(db, requester, obj_id, data)
        return {"success": True, "data": service.get(db, obj_id)}

    @router.delete("/{item_id}")
    def delete_item(
        item_id: str,
        requester: Requester = Depends(get_requester),
        db: Session = Depends(get_db),
    ):
        obj_id = resolve_id(item_id, service.not_found_label)
        with write_transaction(db):
            service.delete(db, requester, obj_id)
        return {"success": True, "message": deleted_message}

    return router


theses_router = make_router(
    "/api/theses", THESES, ThesisCreate, ThesisUpdate,
    "Thesis deleted successfully", "theses",
)
mastersis_router = make_router(
    "/api/mastersis", MASTER_SIS, MasterSICreate, MasterSIUpdate,
    "Master/PFE deleted successfully", "mastersis",
)
