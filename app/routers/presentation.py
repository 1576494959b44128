"""
presentation.py

Presentation page API (/api/presentation/main).

- GET : public; the "main_presentation" record is created on first access
- PUT : admin; multipart form with
          contentBlocks      JSON array of {id, type: "text"|"image", ...}
          image_<index>      image file for the image block at that index
          directorName / directorPosition
          directorImage      image file, or "null" / "" to remove it
          counterNValue / counterNLabel (N = 1..3)

The form is read directly because block images arrive under dynamic
field names.

Related files:
- app.services.homepage  : presentation rules
- app.services.uploads   : image storage

"""

import json

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session
from starlette.datastructures import UploadFile as StarletteUploadFile

from app.core.deps import get_db, get_current_admin
from app.core.errors import ValidationFailedError
from app.models.user import User
from app.services import homepage as service
from app.services.content import write_transaction
from app.services.uploads import PRESENTATION_IMAGES, has_file, remove_file, save_image

router = APIRouter(prefix="/api/presentation", tags=["presentation"])

BLOCK_IMAGE_PREFIX = "image_"
TEXT_FIELDS = (
    "directorName",
    "directorPosition",
    "counter1Value", "counter1Label",
    "counter2Value", "counter2Label",
    "counter3Value", "counter3Label",
)


def _parse_blocks(raw) -> list:
    if raw is None or raw == "":
        return []
    try:
        blocks = json.loads(raw)
    except ValueError:
        raise ValidationFailedError("contentBlocks must be a JSON array")
    if not isinstance(blocks, list):
        raise ValidationFailedError("contentBlocks must be a JSON array")
    return blocks


def _block_index(key: str) -> int | None:
    suffix = key[len(BLOCK_IMAGE_PREFIX):]
    return int(suffix) if suffix.isdigit() else None


@router.get("/main")
def get_main_presentation(db: Session = Depends(get_db)):
    with write_transaction(db):
        presentation = service.get_or_create_presentation(db)
    return {"success": True, "data": service.presentation_to_dict(presentation)}


@router.put("/main")
async def update_main_presentation(
    request: Request,
    admin: User = Depends(get_current_admin),
    db: Session = Depends(get_db),
):
    form = await request.form()
    blocks = _parse_blocks(form.get("contentBlocks"))
    fields = {key: form.get(key) for key in TEXT_FIELDS if isinstance(form.get(key), str)}

    stored: list[str] = []
    try:
        uploaded = {}
        for key, value in form.multi_items():
            if not key.startswith(BLOCK_IMAGE_PREFIX) or not isinstance(value, StarletteUploadFile):
                continue
            index = _block_index(key)
            if index is None or index >= len(blocks) or not has_file(value):
                continue
            uploaded[index] = save_image(value, PRESENTATION_IMAGES)
            stored.append(uploaded[index])

        director = form.get("directorImage")
        director_image = None
        if isinstance(director, StarletteUploadFile) and has_file(director):
            director_image = save_image(director, PRESENTATION_IMAGES)
            stored.append(director_image)
        clear_director = isinstance(director, str) and director in ("", service.NULL_SIGNAL)

        with write_transaction(db):
            presentation, stale = service.update_presentation(
                db,
                blocks=blocks,
                uploaded=uploaded,
                fields=fields,
                director_image=director_image,
                clear_director_image=clear_director,
            )
    except Exception:
        for path in stored:
            remove_file(path)
        raise
    finally:
        await form.close()

    for path in stale:
        remove_file(path)
    return {"success": True, "data": service.presentation_to_dict(presentation)}
