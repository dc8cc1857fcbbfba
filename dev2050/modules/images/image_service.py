# dev2050/modules/images/image_service.py

import asyncio
import logging
import os
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import List, Optional

from dev2050.common.config import settings
from dev2050.modules.images.exceptions import (
    ImageConflictError, ImageNotFoundError, ImageTooLargeError,
    ImageValidationError, RenameError,
)
from dev2050.modules.images.schemas import ImageObject, RenameStatus
from dev2050.modules.images.storage import ObjectStorage

logger = logging.getLogger(__name__)

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


@dataclass
class RenameResult:
    """Outcome of a two-phase rename (copy to the new key, then delete the old one)."""
    status: RenameStatus
    old_key: str
    new_key: str
    image: ImageObject
    failed_phase: Optional[str] = None
    error_message: Optional[str] = None


def _sort_key(image: ImageObject) -> datetime:
    if image.last_modified is None:
        return _EPOCH
    if image.last_modified.tzinfo is None:
        return image.last_modified.replace(tzinfo=timezone.utc)
    return image.last_modified

def normalize_key(key: str, prefix: Optional[str] = None) -> str:
    """
    Clean a user-supplied key and keep it under the gallery prefix.
    """
    prefix = settings.R2_PREFIX if prefix is None else prefix
    key = key.strip().lstrip("/")
    if not key or key.endswith("/") or ".." in key.split("/"):
        raise ImageValidationError(f"Invalid image key {key!r}")
    if prefix and not key.startswith(prefix):
        key = f"{prefix}{key}"
    return key

def build_upload_key(filename: str, prefix: Optional[str] = None) -> str:
    """Random object key that keeps the original file extension."""
    prefix = settings.R2_PREFIX if prefix is None else prefix
    ext = os.path.splitext(filename or "")[1].lstrip(".").lower()
    key = f"{prefix}{uuid.uuid4()}"
    return f"{key}.{ext}" if ext else key

def validate_image(content_type: Optional[str], size: int, max_bytes: Optional[int] = None) -> None:
    max_bytes = settings.MAX_UPLOAD_BYTES if max_bytes is None else max_bytes
    if not content_type or not content_type.startswith("image/"):
        raise ImageValidationError("Only image files can be uploaded.")
    if size > max_bytes:
        raise ImageTooLargeError(
            f"File size too large. Maximum size is {max_bytes // (1024 * 1024)}MB."
        )

async def list_images(storage: ObjectStorage, prefix: Optional[str] = None) -> List[ImageObject]:
    """
    Every image under the gallery prefix, newest first. Storage errors are
    logged and produce an empty gallery.
    """
    prefix = settings.R2_PREFIX if prefix is None else prefix
    try:
        objects = await asyncio.to_thread(storage.list_objects, prefix)
    except Exception as e:
        logger.error("Error fetching images: %s", e)
        return []

    images = [
        ImageObject(
            url=storage.public_url(obj.key),
            key=obj.key,
            last_modified=obj.last_modified,
            size=obj.size,
        )
        for obj in objects
        if obj.key and obj.key != prefix  # skip the folder placeholder
    ]
    images.sort(key=_sort_key, reverse=True)
    return images

async def upload_image(
    storage: ObjectStorage,
    filename: str,
    content_type: Optional[str],
    data: bytes,
) -> ImageObject:
    """
    Validate and store an uploaded image under a fresh random key.
    Validation happens before any storage call.
    """
    validate_image(content_type, len(data))
    key = build_upload_key(filename)
    await asyncio.to_thread(storage.put_object, key, data, content_type)
    logger.info("Uploaded %s (%d bytes)", key, len(data))
    return ImageObject(url=storage.public_url(key), key=key, size=len(data))

async def rename_image(storage: ObjectStorage, old_key: str, new_key: str) -> RenameResult:
    """
    Rename an object in two phases: copy it to `new_key`, then delete `old_key`.

    - Copy failure raises RenameError(phase="copy"); the old object is untouched.
    - Delete failure returns a PARTIAL result with failed_phase="delete"; both
      keys exist and deleting the old key again completes the rename.
    """
    new_key = normalize_key(new_key)
    if new_key == old_key:
        raise ImageValidationError("The new key must differ from the current key.")

    if not await asyncio.to_thread(storage.exists, old_key):
        raise ImageNotFoundError(old_key)
    if await asyncio.to_thread(storage.exists, new_key):
        raise ImageConflictError(new_key)

    try:
        await asyncio.to_thread(storage.copy_object, old_key, new_key)
    except Exception as e:
        logger.error("Rename %s -> %s failed while copying: %s", old_key, new_key, e)
        raise RenameError("copy", f"Could not copy {old_key} to {new_key}.", e) from e

    image = ImageObject(url=storage.public_url(new_key), key=new_key)
    try:
        await asyncio.to_thread(storage.delete_object, old_key)
    except Exception as e:
        logger.error("Rename %s -> %s left the old key behind: %s", old_key, new_key, e)
        return RenameResult(
            status=RenameStatus.PARTIAL,
            old_key=old_key,
            new_key=new_key,
            image=image,
            failed_phase="delete",
            error_message=str(e),
        )

    logger.info("Renamed %s -> %s", old_key, new_key)
    return RenameResult(status=RenameStatus.RENAMED, old_key=old_key, new_key=new_key, image=image)

async def delete_image(storage: ObjectStorage, key: str) -> None:
    """
    Delete an image. S3 silently accepts deletes of missing keys, so existence
    is checked first and a missing key raises ImageNotFoundError.
    """
    if not await asyncio.to_thread(storage.exists, key):
        raise ImageNotFoundError(key)
    await asyncio.to_thread(storage.delete_object, key)
    logger.info("Deleted %s", key)
