"""
services/uploads.py

Image upload storage.

Every image (news item, hero banner, carousel slide, profile picture,
director photo) is written under UPLOAD_DIR/<subdir>/ with a generated
file name. The database only keeps the public path "/uploads/<subdir>/<name>",
which app.main serves as static files.

Main functions:
- save_image   : validate and store one UploadFile, return its stored path
- remove_file  : best-effort removal of a previously stored path
- public_url   : prefix a stored path with PUBLIC_BASE_URL

Related files:
- app.core.config   : UPLOAD_DIR / MAX_UPLOAD_SIZE / PUBLIC_BASE_URL
- app.main          : static mount of UPLOAD_DIR on /uploads

"""

import logging
import uuid
from pathlib import Path

from fastapi import UploadFile

from app.core.config import settings
from app.core.errors import ValidationFailedError

logger = logging.getLogger(__name__)

URL_PREFIX = "/uploads"

ACTU_IMAGES = "actu_images"
HERO_IMAGES = "hero_images"
CAROUSEL_IMAGES = "carousel_images"
PROFILE_IMAGES = "profile_images"
PRESENTATION_IMAGES = "presentation_images"

_ALLOWED_SUFFIXES = {".jpg", ".jpeg", ".png", ".gif", ".webp", ".svg"}


def upload_root() -> Path:
    return Path(settings.UPLOAD_DIR)


def has_file(file: UploadFile | None) -> bool:
    # Browsers send an empty part when no file is picked
    return file is not None and bool(file.filename)


"""
Store an uploaded image

- only image/* content types are accepted
- files larger than MAX_UPLOAD_SIZE are rejected
- returns "/uploads/<subdir>/<generated name>"

"""

def save_image(file: UploadFile, subdir: str) -> str:
    content_type = file.content_type or ""
    if not content_type.startswith("image/"):
        raise ValidationFailedError("Only image files are allowed!")

    data = file.file.read(settings.MAX_UPLOAD_SIZE + 1)
    if len(data) > settings.MAX_UPLOAD_SIZE:
        raise ValidationFailedError(
            f"File too large (max {settings.MAX_UPLOAD_SIZE // (1024 * 1024)} MB)"
        )

    suffix = Path(file.filename or "").suffix.lower()
    if suffix not in _ALLOWED_SUFFIXES:
        suffix = ""

    target_dir = upload_root() / subdir
    target_dir.mkdir(parents=True, exist_ok=True)
    name = f"{uuid.uuid4().hex}{suffix}"
    (target_dir / name).write_bytes(data)

    logger.info("Stored upload %s/%s (%d bytes)", subdir, name, len(data))
    return f"{URL_PREFIX}/{subdir}/{name}"


def local_path(stored: str) -> Path | None:
    """Map a stored "/uploads/..." path back to the file on disk."""
    if not stored or not stored.startswith(URL_PREFIX + "/"):
        return None
    relative = stored[len(URL_PREFIX) + 1:]
    root = upload_root().resolve()
    path = (root / relative).resolve()
    if root not in path.parents:
        return None
    return path


"""
Remove a stored file

- never raises: a missing or locked file is logged and ignored
- called after the owning row has been saved or deleted

"""

def remove_file(stored: str | None) -> None:
    if not stored:
        return
    path = local_path(stored)
    if path is None:
        logger.warning("Refusing to remove file outside upload dir: %s", stored)
        return
    try:
        path.unlink()
        logger.info("Removed upload %s", stored)
    except FileNotFoundError:
        logger.warning("Upload already gone: %s", stored)
    except OSError as e:
        logger.error("Could not remove upload %s: %s", stored, e)


def public_url(stored: str | None) -> str | None:
    if not stored:
        return stored
    if stored.startswith(("http://", "https://")) or not settings.PUBLIC_BASE_URL:
        return stored
    return settings.PUBLIC_BASE_URL.rstrip("/") + stored
