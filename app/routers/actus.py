"""
actus.py

News API (/api/actus).

Main features:
- public list with creatorId / category / searchTerm filters, newest first
- public detail
- create / update with multipart form data and an optional "image" file
- update can drop the image with removeImage=true; an empty "image" form
  field is indistinguishable from an absent one and keeps the current image
- delete removes the stored image once the row is gone

Files are written before the database transaction; a failed transaction
removes the new file, a successful one removes the replaced file.

Related files:
- app.services.actus     : business rules
- app.services.uploads   : image storage

"""

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile
from sqlalchemy.orm import Session
from starlette import status

from app.core.deps import Requester, get_db, get_requester
from app.services import actus as service
from app.services.actus import ActuFields
from app.services.content import ActuFilter, parse_uuid, resolve_id, write_transaction
from app.services.uploads import ACTU_IMAGES, has_file, remove_file, save_image

router = APIRouter(prefix="/api/actus", tags=["actus"])


@router.get("")
def list_actus(
    creator_id: str | None = Query(None, alias="creatorId"),
    category: str | None = Query(None),
    search_term: str | None = Query(None, alias="searchTerm"),
    db: Session = Depends(get_db),
):
    flt = ActuFilter(creator_id=parse_uuid(creator_id), category=category, search_term=search_term)
    items = service.list_actus(db, flt)
    return {"success": True, "count": len(items), "data": items}


@router.get("/{actu_id}")
def get_actu(actu_id: str, db: Session = Depends(get_db)):
    obj_id = resolve_id(actu_id, service.NOT_FOUND_LABEL)
    return {"success": True, "data": service.get_actu(db, obj_id)}


"""
Create a news item (multipart)

- title required; category defaults to "Conférence", date to today
- image: optional image file

"""

@router.post("", status_code=status.HTTP_201_CREATED)
def create_actu(
    title: str | None = Form(None),
    category: str | None = Form(None),
    date: str | None = Form(None),
    short_description: str | None = Form(None, alias="shortDescription"),
    full_content: str | None = Form(None, alias="fullContent"),
    image: UploadFile | None = File(None),
    requester: Requester = Depends(get_requester),
    db: Session = Depends(get_db),
):
    fields = ActuFields(
        title=title,
        category=category,
        date=date,
        short_description=short_description,
        full_content=full_content,
    )
    stored = save_image(image, ACTU_IMAGES) if has_file(image) else None
    try:
        with write_transaction(db):
            actu = service.create_actu(db, requester, fields, stored)
    except Exception:
        remove_file(stored)
        raise
    return {"success": True, "data": service.get_actu(db, actu.id)}


@router.put("/{actu_id}")
def update_actu(
    actu_id: str,
    title: str | None = Form(None),
    category: str | None = Form(None),
    date: str | None = Form(None),
    short_description: str | None = Form(None, alias="shortDescription"),
    full_content: str | None = Form(None, alias="fullContent"),
    remove_image: bool = Form(False, alias="removeImage"),
    image: UploadFile | None = File(None),
    requester: Requester = Depends(get_requester),
    db: Session = Depends(get_db),
):
    obj_id = resolve_id(actu_id, service.NOT_FOUND_LABEL)
    fields = ActuFields(
        title=title,
        category=category,
        date=date,
        short_description=short_description,
        full_content=full_content,
    )
    stored = save_image(image, ACTU_IMAGES) if has_file(image) else None
    try:
        with write_transaction(db):
            _, stale = service.update_actu(
                db, requester, obj_id, fields, image=stored, remove_image=remove_image
            )
    except Exception:
        remove_file(stored)
        raise
    remove_file(stale)
    return {"success": True, "data": service.get_actu(db, obj_id)}


@router.delete("/{actu_id}")
def delete_actu(
    actu_id: str,
    requester: Requester = Depends(get_requester),
    db: Session = Depends(get_db),
):
    obj_id = resolve_id(actu_id, service.NOT_FOUND_LABEL)
    with write_transaction(db):
        image = service.delete_actu(db, requester, obj_id)
    remove_file(image)
    return {"success": True, "message": service.DELETED_MESSAGE}
