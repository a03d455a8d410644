"""
Disk storage for journal image attachments.
"""

import logging
import os
import secrets
import time
from pathlib import Path
from typing import Tuple

from fastapi import HTTPException, UploadFile

from growth_diary.core.config import MAX_IMAGE_BYTES, UPLOAD_DIR

logger = logging.getLogger(__name__)

ALLOWED_EXTENSIONS = {".jpeg", ".jpg", ".png", ".gif", ".webp"}
ALLOWED_CONTENT_TYPES = {"image/jpeg", "image/jpg", "image/png", "image/gif", "image/webp"}


def _size_label(size: int) -> str:
    mb = 1024 * 1024
    if size >= mb and size % mb == 0:
        return f"{size // mb}MB"
    return f"{size} bytes"


def journal_upload_dir() -> Path:
    return UPLOAD_DIR / "journal"


def unique_filename(original_name: str) -> str:
    extension = os.path.splitext(original_name)[1].lower()
    return f"{int(time.time() * 1000)}-{secrets.randbelow(10**9)}{extension}"


def validate_image(upload: UploadFile) -> None:
    extension = os.path.splitext(upload.filename or "")[1].lower()
    if extension not in ALLOWED_EXTENSIONS or upload.content_type not in ALLOWED_CONTENT_TYPES:
        raise HTTPException(status_code=400, detail="Only image files are allowed")


def save_image(upload: UploadFile) -> Tuple[str, str]:
    """
    Writes an uploaded image to the journal upload directory.

    Returns:
        Tuple[str, str]: (stored filename, original filename)
    """
    validate_image(upload)
    data = upload.file.read(MAX_IMAGE_BYTES + 1)
    if len(data) > MAX_IMAGE_BYTES:
        raise HTTPException(status_code=400, detail=f"Image exceeds the {_size_label(MAX_IMAGE_BYTES)} limit")

    target_dir = journal_upload_dir()
    target_dir.mkdir(parents=True, exist_ok=True)
    filename = unique_filename(upload.filename)
    (target_dir / filename).write_bytes(data)
    return filename, upload.filename


def remove_image(filename: str) -> None:
    path = journal_upload_dir() / filename
    try:
        path.unlink(missing_ok=True)
    except OSError as e:
        logger.warning(f"Could not remove image file {path}: {e}")
