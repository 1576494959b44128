"""
services/homepage.py

Homepage and presentation-page content (admin-managed).

- Hero          : single banner record, created with defaults on first read
- Carousel      : slides ordered by a unique integer "order"
- Presentation  : single "main_presentation" record with free-form content
                  blocks (text / image), director card and three counters

Like the other services, functions that replace or drop an image return the
paths that are no longer referenced; the router removes those files after
the commit.

Related files:
- app.models.homepage     : Hero / CarouselItem / PresentationContent
- app.routers.hero / carousel / presentation
- app.services.uploads    : image storage

"""

import logging
import uuid
from dataclasses import dataclass

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.errors import NotFoundError, ValidationFailedError
from app.models.homepage import (
    CarouselItem,
    Hero,
    PresentationContent,
    MAIN_PRESENTATION_SECTION,
)
from app.services.uploads import URL_PREFIX, public_url

logger = logging.getLogger(__name__)

DEFAULT_HERO = {
    "title": "Welcome to LABTIM",
    "description": "Discover our research, publications, and team members.",
    "button_content": "Learn More",
}

ORDER_REQUIRED_MESSAGE = "L'ordre est un champ obligatoire et doit être un nombre valide."

# Placeholder sent by the dashboard to clear an image
NULL_SIGNAL = "null"

# keeps temporary orders clear of real ones while reordering
REORDER_OFFSET = 1_000_000


def _blank_to_none(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None


def _timestamps(obj) -> dict:
    return {
        "createdAt": obj.created_at.isoformat() if obj.created_at else None,
        "updatedAt": obj.updated_at.isoformat() if obj.updated_at else None,
    }


"""
Hero

"""

def hero_to_dict(hero: Hero) -> dict:
    return {
        "id": str(hero.id),
        "title": hero.title,
        "description": hero.description,
        "buttonContent": hero.button_content,
        "imageUrl": public_url(hero.image_url),
        **_timestamps(hero),
    }


def get_hero(db: Session) -> Hero | None:
    return db.scalars(select(Hero).order_by(Hero.created_at.asc()).limit(1)).first()


def get_or_create_hero(db: Session) -> Hero:
    hero = get_hero(db)
    if hero is None:
        hero = Hero(**DEFAULT_HERO)
        db.add(hero)
        db.flush()
        logger.info("Created default hero section")
    return hero


def update_hero(
    db: Session,
    *,
    title: str | None = None,
    description: str | None = None,
    button_content: str | None = None,
    image: str | None = None,
    clear_image: bool = False,
) -> tuple[Hero, str | None]:
    hero = get_hero(db)
    if hero is None:
        if image is None:
            raise ValidationFailedError("An image is required to create the initial Hero section.")
        hero = Hero()
        db.add(hero)

    if title is not None:
        hero.title = _blank_to_none(title)
    if description is not None:
        hero.description = _blank_to_none(description)
    if button_content is not None:
        hero.button_content = _blank_to_none(button_content)

    stale = None
    if image is not None:
        stale = hero.image_url
        hero.image_url = image
    elif clear_image:
        stale = hero.image_url
        hero.image_url = None

    db.flush()
    return hero, stale


"""
Carousel

"""

@dataclass
class CarouselFields:
    title: str | None = None
    description: str | None = None
    order: str | None = None
    link: str | None = None


def carousel_to_dict(item: CarouselItem) -> dict:
    return {
        "id": str(item.id),
        "imageUrl": public_url(item.image_url),
        "title": item.title,
        "description": item.description,
        "order": item.order,
        "link": item.link,
        **_timestamps(item),
    }


def parse_order(raw) -> int:
    text = _blank_to_none(str(raw)) if raw is not None else None
    if text is None:
        raise ValidationFailedError(ORDER_REQUIRED_MESSAGE)
    try:
        return int(float(text))
    except (ValueError, OverflowError):
        raise ValidationFailedError(ORDER_REQUIRED_MESSAGE)


def _ensure_order_free(db: Session, order: int, exclude_id: uuid.UUID | None = None) -> None:
    stmt = select(CarouselItem.id).where(CarouselItem.order == order)
    if exclude_id is not None:
        stmt = stmt.where(CarouselItem.id != exclude_id)
    if db.scalar(stmt) is not None:
        raise ValidationFailedError(
            f"Un élément avec l'ordre '{order}' existe déjà. Veuillez choisir un numéro d'ordre unique."
        )


def list_carousel(db: Session) -> list[CarouselItem]:
    return list(db.scalars(select(CarouselItem).order_by(CarouselItem.order.asc())).all())


def get_carousel_item(db: Session, item_id: uuid.UUID) -> CarouselItem:
    item = db.get(CarouselItem, item_id)
    if item is None:
        raise NotFoundError("Carousel item not found")
    return item


def create_carousel_item(db: Session, fields: CarouselFields, image: str | None) -> CarouselItem:
    if image is None:
        raise ValidationFailedError("Une image est requise pour créer un élément de carrousel.")
    order = parse_order(fields.order)
    _ensure_order_free(db, order)

    item = CarouselItem(
        image_url=image,
        title=_blank_to_none(fields.title),
        description=_blank_to_none(fields.description),
        order=order,
        link=_blank_to_none(fields.link),
    )
    db.add(item)
    db.flush()
    return item


def update_carousel_item(
    db: Session,
    item_id: uuid.UUID,
    fields: CarouselFields,
    *,
    image: str | None = None,
) -> tuple[CarouselItem, str | None]:
    item = get_carousel_item(db, item_id)

    if fields.order is not None:
        order = parse_order(fields.order)
        if order != item.order:
            _ensure_order_free(db, order, exclude_id=item.id)
        item.order = order
    if fields.title is not None:
        item.title = _blank_to_none(fields.title)
    if fields.description is not None:
        item.description = _blank_to_none(fields.description)
    if fields.link is not None:
        item.link = _blank_to_none(fields.link)

    # a slide always keeps an image; it can only be replaced
    stale = None
    if image is not None:
        stale = item.image_url
        item.image_url = image

    db.flush()
    return item, stale


def delete_carousel_item(db: Session, item_id: uuid.UUID) -> str | None:
    item = get_carousel_item(db, item_id)
    image = item.image_url
    db.delete(item)
    db.flush()
    return image


"""
Reorder slides in one transaction

- moves: (item id, new order) pairs
- every id must exist (404 otherwise)
- target orders must be distinct
- current orders are first moved out of the way so that swapping two
  slides never trips the unique constraint

"""

def reorder_carousel(db: Session, moves: list[tuple[uuid.UUID, int]]) -> None:
    if not moves:
        raise ValidationFailedError("Invalid request body. Expected an array of items with id and order.")

    targets = dict(moves)
    if len(targets) != len(moves) or len(set(targets.values())) != len(targets):
        raise ValidationFailedError("Each carousel item and each order must appear only once.")

    items = list(db.scalars(select(CarouselItem).where(CarouselItem.id.in_(list(targets)))).all())
    if len(items) != len(targets):
        raise NotFoundError("One or more carousel items not found for reordering.")

    for item in items:
        item.order = item.order + REORDER_OFFSET
    db.flush()

    for item in items:
        item.order = targets[item.id]
    db.flush()


"""
Presentation page

"""

COUNTER_DEFAULT_LABELS = {
    1: "Permanents",
    2: "Articles impactés",
    3: "Articles publiés",
}


def _is_local(url) -> bool:
    return isinstance(url, str) and url.startswith(URL_PREFIX + "/")


def _stored_path(url):
    """Undo public_url() so that only relative paths are persisted."""
    base = settings.PUBLIC_BASE_URL.rstrip("/")
    if base and isinstance(url, str) and url.startswith(base + URL_PREFIX + "/"):
        return url[len(base):]
    return url


def _block_out(block):
    if isinstance(block, dict) and block.get("type") == "image" and _is_local(block.get("url")):
        return {**block, "url": public_url(block["url"])}
    return block


def presentation_to_dict(p: PresentationContent) -> dict:
    return {
        "id": str(p.id),
        "sectionName": p.section_name,
        "contentBlocks": [_block_out(b) for b in (p.content_blocks or [])],
        "directorName": p.director_name,
        "directorPosition": p.director_position,
        "directorImage": public_url(p.director_image),
        "counter1Value": p.counter1_value,
        "counter1Label": p.counter1_label,
        "counter2Value": p.counter2_value,
        "counter2Label": p.counter2_label,
        "counter3Value": p.counter3_value,
        "counter3Label": p.counter3_label,
        **_timestamps(p),
    }


def get_or_create_presentation(db: Session) -> PresentationContent:
    presentation = db.scalar(
        select(PresentationContent).where(PresentationContent.section_name == MAIN_PRESENTATION_SECTION)
    )
    if presentation is None:
        presentation = PresentationContent(
            section_name=MAIN_PRESENTATION_SECTION,
            content_blocks=[],
            counter1_value=0,
            counter1_label=COUNTER_DEFAULT_LABELS[1],
            counter2_value=0,
            counter2_label=COUNTER_DEFAULT_LABELS[2],
            counter3_value=0,
            counter3_label=COUNTER_DEFAULT_LABELS[3],
        )
        db.add(presentation)
        db.flush()
        logger.info("Created default presentation content")
    return presentation


def _local_image_urls(blocks) -> set:
    return {
        b["url"]
        for b in blocks or []
        if isinstance(b, dict) and b.get("type") == "image" and _is_local(b.get("url"))
    }


def _counter_value(raw, index: int) -> int:
    text = _blank_to_none(raw)
    if text is None:
        return 0
    try:
        return int(text)
    except ValueError:
        raise ValidationFailedError(f"counter{index}Value must be an integer")


def merge_blocks(blocks: list, uploaded: dict[int, str]) -> list:
    """Apply uploaded block images (keyed by block index) and clear
    image blocks whose url is empty or a browser-local blob."""
    merged = []
    for index, block in enumerate(blocks):
        if not isinstance(block, dict):
            raise ValidationFailedError("contentBlocks must be a JSON array of objects")
        block = dict(block)
        if block.get("type") == "image":
            url = _stored_path(block.get("url"))
            if index in uploaded:
                block["url"] = uploaded[index]
            elif not url or (isinstance(url, str) and url.startswith("blob:")):
                block.update(url=None, width=None, height=None, originalWidth=None, originalHeight=None)
            else:
                block["url"] = url
        merged.append(block)
    return merged


"""
Update the presentation page

- blocks: decoded contentBlocks; uploaded: {block index: stored path}
- fields: directorName / directorPosition / counterN*, as sent
- director_image: newly stored path; clear_director_image: drop it
- returns (presentation, list of image paths no longer referenced)

"""

def update_presentation(
    db: Session,
    *,
    blocks: list,
    uploaded: dict[int, str],
    fields: dict,
    director_image: str | None = None,
    clear_director_image: bool = False,
) -> tuple[PresentationContent, list[str]]:
    presentation = get_or_create_presentation(db)

    previous_urls = _local_image_urls(presentation.content_blocks)
    new_blocks = merge_blocks(blocks, uploaded)
    stale = sorted(previous_urls - _local_image_urls(new_blocks))

    presentation.content_blocks = new_blocks
    presentation.director_name = _blank_to_none(fields.get("directorName"))
    presentation.director_position = _blank_to_none(fields.get("directorPosition"))
    for i in (1, 2, 3):
        setattr(presentation, f"counter{i}_value", _counter_value(fields.get(f"counter{i}Value"), i))
        setattr(
            presentation,
            f"counter{i}_label",
            _blank_to_none(fields.get(f"counter{i}Label")) or COUNTER_DEFAULT_LABELS[i],
        )

    if director_image is not None:
        if presentation.director_image:
            stale.append(presentation.director_image)
        presentation.director_image = director_image
    elif clear_director_image:
        if presentation.director_image:
            stale.append(presentation.director_image)
        presentation.director_image = None

    db.flush()
    return presentation, [p for p in stale if _is_local(p)]
