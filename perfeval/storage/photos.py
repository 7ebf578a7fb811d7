"""Employee photo files on disk."""

import logging
import random
import time
from pathlib import Path

from fastapi import UploadFile

from perfeval.exceptions import PhotoRejectedError

logger = logging.getLogger(__name__)

ALLOWED_IMAGE_TYPES = ("jpeg", "jpg", "png", "gif", "webp")
DEFAULT_EXTENSION = ".jpg"
CHUNK_SIZE = 64 * 1024


def photo_filename(original_name: str | None) -> str:
    """photo-<epoch ms>-<random><ext>, keeping the upload's extension."""
    ext = Path(original_name or "").suffix or DEFAULT_EXTENSION
    unique_suffix = f"{int(time.time() * 1000)}-{random.randint(0, 10**9)}"
    return f"photo-{unique_suffix}{ext}"


def _format_size(num_bytes: int) -> str:
    if num_bytes >= 1024 * 1024:
        return f"{num_bytes // (1024 * 1024)}MB"
    return f"{num_bytes} bytes"


def _is_allowed(upload: UploadFile) -> bool:
    content_type = (upload.content_type or "").lower()
    if not any(kind in content_type for kind in ALLOWED_IMAGE_TYPES):
        return False
    ext = Path(upload.filename or "").suffix.lower().lstrip(".")
    return not ext or ext in ALLOWED_IMAGE_TYPES


async def save_photo(upload: UploadFile, upload_dir: Path, max_bytes: int) -> str:
    """
    Stream an uploaded image into upload_dir and return the stored filename.
    Raises PhotoRejectedError for non-image uploads or files over max_bytes;
    a partially written file is removed on any failure.
    """
    if not _is_allowed(upload):
        raise PhotoRejectedError("Only images are allowed (jpg, png, gif, webp)")

    upload_dir.mkdir(parents=True, exist_ok=True)
    filename = photo_filename(upload.filename)
    dest = upload_dir / filename
    written = 0
    try:
        with dest.open("wb") as f:
            while chunk := await upload.read(CHUNK_SIZE):
                written += len(chunk)
                if written > max_bytes:
                    raise PhotoRejectedError(f"File too large. Maximum {_format_size(max_bytes)}.")
                f.write(chunk)
    except BaseException:
        dest.unlink(missing_ok=True)
        raise

    logger.info("Stored photo %s (%d bytes)", filename, written)
    return filename


def delete_photo(upload_dir: Path, filename: str | None) -> None:
    """Remove a stored photo; failures are logged, not raised."""
    if not filename:
        return
    path = upload_dir / Path(filename).name
    try:
        path.unlink()
    except FileNotFoundError:
        logger.warning("Photo %s already removed", path)
    except OSError as exc:
        logger.warning("Could not remove photo %s: %s", path, exc)
