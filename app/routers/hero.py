"""
hero.py

Homepage hero banner API (/api/hero).

- GET : public; a default banner is created on first access
- PUT : admin; multipart (title, description, buttonContent, image file);
        imageUrl=null removes the current picture; the very first banner
        needs an image

Related files:
- app.services.homepage  : hero rules
- app.services.uploads   : image storage

"""

from fastapi import APIRouter, Depends, File, Form, UploadFile
from sqlalchemy.orm import Session

from app.core.deps import get_db, get_current_admin
from app.models.user import User
from app.services import homepage as service
from app.services.content import write_transaction
from app.services.uploads import HERO_IMAGES, has_file, remove_file, save_image

router = APIRouter(prefix="/api/hero", tags=["hero"])


@router.get("")
def get_hero(db: Session = Depends(get_db)):
    with write_transaction(db):
        hero = service.get_or_create_hero(db)
    return {"success": True, "data": service.hero_to_dict(hero)}


@router.put("")
def update_hero(
    title: str | None = Form(None),
    description: str | None = Form(None),
    button_content: str | None = Form(None, alias="buttonContent"),
    image_url: str | None = Form(None, alias="imageUrl"),
    image: UploadFile | None = File(None),
    admin: User = Depends(get_current_admin),
    db: Session = Depends(get_db),
):
    stored = save_image(image, HERO_IMAGES) if has_file(image) else None
    try:
        with write_transaction(db):
            hero, stale = service.update_hero(
                db,
                title=title,
                description=description,
                button_content=button_content,
                image=stored,
                clear_image=image_url == service.NULL_SIGNAL,
            )
    except Exception:
        remove_file(stored)
        raise
    remove_file(stale)
    return {"success": True, "data": service.hero_to_dict(hero)}
