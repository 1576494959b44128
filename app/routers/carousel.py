"""
carousel.py

Homepage carousel API (/api/carousel).

Main features:
- public list ordered by "order", public detail
- admin: create (image and a unique numeric order are required)
- admin: update (optional new image), delete (image removed afterwards)
- admin: reorder every slide in one transaction

/reorder is declared before /{item_id} so that it is not read as an id.

Related files:
- app.services.homepage  : carousel rules
- app.services.uploads   : image storage

"""

from fastapi import APIRouter, Depends, File, Form, UploadFile
from pydantic import BaseModel
from sqlalchemy.orm import Session
from starlette import status

from app.core.deps import get_db, get_current_admin
from app.models.user import User
from app.schemas.base import CamelModel
from app.services import homepage as service
from app.services.content import resolve_id, write_transaction
from app.services.homepage import CarouselFields
from app.services.uploads import CAROUSEL_IMAGES, has_file, remove_file, save_image

router = APIRouter(prefix="/api/carousel", tags=["carousel"])

NOT_FOUND_LABEL = "Carousel item"


class ReorderItem(CamelModel):
    id: str
    order: int


class ReorderRequest(BaseModel):
    items: list[ReorderItem]


@router.get("")
def list_items(db: Session = Depends(get_db)):
    items = [service.carousel_to_dict(i) for i in service.list_carousel(db)]
    return {"success": True, "count": len(items), "data": items}


"""
Reorder slides

- body: {"items": [{"id": ..., "order": ...}, ...]}
- orders must be distinct; unknown ids -> 404

"""

@router.put("/reorder")
def reorder_items(
    data: ReorderRequest,
    admin: User = Depends(get_current_admin),
    db: Session = Depends(get_db),
):
    moves = [(resolve_id(item.id, NOT_FOUND_LABEL), item.order) for item in data.items]
    with write_transaction(
        db,
        integrity_message="Erreur de contrainte unique lors de la réorganisation. "
        "Assurez-vous que tous les ordres sont uniques.",
    ):
        service.reorder_carousel(db, moves)
    return {"success": True, "message": "Carousel order updated successfully."}


@router.get("/{item_id}")
def get_item(item_id: str, db: Session = Depends(get_db)):
    item = service.get_carousel_item(db, resolve_id(item_id, NOT_FOUND_LABEL))
    return {"success": True, "data": service.carousel_to_dict(item)}


@router.post("", status_code=status.HTTP_201_CREATED)
def create_item(
    title: str | None = Form(None),
    description: str | None = Form(None),
    order: str | None = Form(None),
    link: str | None = Form(None),
    image: UploadFile | None = File(None),
    admin: User = Depends(get_current_admin),
    db: Session = Depends(get_db),
):
    fields = CarouselFields(title=title, description=description, order=order, link=link)
    stored = save_image(image, CAROUSEL_IMAGES) if has_file(image) else None
    try:
        with write_transaction(db):
            item = service.create_carousel_item(db, fields, stored)
    except Exception:
        remove_file(stored)
        raise
    return {"success": True, "data": service.carousel_to_dict(item)}


@router.put("/{item_id}")
def update_item(
    item_id: str,
    title: str | None = Form(None),
    description: str | None = Form(None),
    order: str | None = Form(None),
    link: str | None = Form(None),
    image: UploadFile | None = File(None),
    admin: User = Depends(get_current_admin),
    db: Session = Depends(get_db),
):
    obj_id = resolve_id(item_id, NOT_FOUND_LABEL)
    fields = CarouselFields(title=title, description=description, order=order, link=link)
    stored = save_image(image, CAROUSEL_IMAGES) if has_file(image) else None
    try:
        with write_transaction(db):
            item, stale = service.update_carousel_item(db, obj_id, fields, image=stored)
    except Exception:
        remove_file(stored)
        raise
    remove_file(stale)
    return {"success": True, "data": service.carousel_to_dict(item)}


@router.delete("/{item_id}")
def delete_item(
    item_id: str,
    admin: User = Depends(get_current_admin),
    db: Session = Depends(get_db),
):
    with write_transaction(db):
        image = service.delete_carousel_item(db, resolve_id(item_id, NOT_FOUND_LABEL))
    remove_file(image)
    return {"success": True, "message": "Carousel item deleted successfully"}
