"""
Upload and gallery controller.

Upload state machine:

    idle -> file_selected -> uploading -> success -> idle
                                       -> error   -> file_selected

The gallery list moves loading -> loaded on every refresh. Uploads and renames
re-list the whole bucket afterwards; deletes remove the entry locally. Errors
from the API never escape: they become a dismissable notification.
"""
import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

from dev2050.client.formatting import format_size, relative_time

logger = logging.getLogger(__name__)

DEFAULT_MAX_FILE_SIZE = 10 * 1024 * 1024


class UploadState(str, Enum):
    IDLE = "idle"
    FILE_SELECTED = "file_selected"
    UPLOADING = "uploading"
    SUCCESS = "success"
    ERROR = "error"


class GalleryState(str, Enum):
    LOADING = "loading"
    LOADED = "loaded"


@dataclass
class SelectedFile:
    filename: str
    content_type: str
    data: bytes

    @property
    def size(self) -> int:
        return len(self.data)


@dataclass
class Notification:
    type: str  # "success", "error" or "warning"
    message: str


@dataclass
class GalleryImage:
    url: str
    key: str
    last_modified: Optional[datetime] = None
    size: Optional[int] = None

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "GalleryImage":
        last_modified = data.get("last_modified")
        if isinstance(last_modified, str):
            last_modified = datetime.fromisoformat(last_modified.replace("Z", "+00:00"))
        return cls(url=data["url"], key=data["key"], last_modified=last_modified, size=data.get("size"))


@dataclass
class GalleryRow:
    key: str
    url: str
    size: Optional[str]
    uploaded: Optional[str]


class GalleryController:
    def __init__(
        self,
        api: Any,
        *,
        max_file_size: int = DEFAULT_MAX_FILE_SIZE,
        progress_interval: float = 0.2,
        progress_step: int = 10,
        progress_cap: int = 90,
        reset_delay: float = 2.0,
        on_change: Optional[Callable[["GalleryController"], None]] = None,
    ):
        self.api = api
        self.max_file_size = max_file_size
        self.progress_interval = progress_interval
        self.progress_step = progress_step
        self.progress_cap = progress_cap
        self.reset_delay = reset_delay
        self._on_change = on_change

        self.upload_state = UploadState.IDLE
        self.gallery_state = GalleryState.LOADING
        self.selected_file: Optional[SelectedFile] = None
        self.progress = 0
        self.validation_error: Optional[str] = None
        self.notification: Optional[Notification] = None
        self.images: List[GalleryImage] = []
        self.deleting_key: Optional[str] = None
        self.pending_cleanup: List[str] = []
        self._reset_timer: Optional[asyncio.TimerHandle] = None

    # Selection

    def select_file(self, filename: str, content_type: str, data: bytes) -> bool:
        """
        Validate and stage a file. Rejected files never reach the API.
        """
        if self.upload_state == UploadState.UPLOADING:
            return False
        if not content_type or not content_type.startswith("image/"):
            self.validation_error = "Please select an image file."
            self._notify()
            return False
        if len(data) > self.max_file_size:
            limit_mb = self.max_file_size // (1024 * 1024)
            self.validation_error = f"File size too large. Maximum size is {limit_mb}MB."
            self._notify()
            return False

        self.validation_error = None
        self.selected_file = SelectedFile(filename=filename, content_type=content_type, data=data)
        self.upload_state = UploadState.FILE_SELECTED
        self._notify()
        return True

    def reset(self) -> None:
        if self.upload_state == UploadState.UPLOADING:
            return
        self._cancel_reset_timer()
        self.selected_file = None
        self.progress = 0
        self.validation_error = None
        self.upload_state = UploadState.IDLE
        self._notify()

    # Upload

    async def upload(self) -> Optional[GalleryImage]:
        if self.upload_state != UploadState.FILE_SELECTED or self.selected_file is None:
            return None

        selected = self.selected_file
        self.upload_state = UploadState.UPLOADING
        self.progress = 0
        self.notification = None
        self._notify()

        real_progress = getattr(self.api, "reports_upload_progress", False)
        ticker = None if real_progress else asyncio.ensure_future(self._simulate_progress())
        try:
            kwargs = {"on_progress": self._set_progress} if real_progress else {}
            data = await self.api.upload_image(
                selected.filename, selected.data, selected.content_type, **kwargs
            )
        except Exception as e:
            logger.error("Upload of %s failed: %s", selected.filename, e)
            self.progress = 0
            self.upload_state = UploadState.FILE_SELECTED
            self.notification = Notification("error", f"Upload failed: {e}")
            self._notify()
            return None
        finally:
            if ticker is not None:
                ticker.cancel()

        self.progress = 100
        self.upload_state = UploadState.SUCCESS
        self.notification = Notification("success", "Image uploaded successfully!")
        self._notify()

        await self.refresh()
        self._schedule_reset()
        return GalleryImage(url=data["url"], key=data["key"], size=selected.size)

    async def _simulate_progress(self) -> None:
        while self.progress < self.progress_cap:
            await asyncio.sleep(self.progress_interval)
            self._set_progress(min(self.progress + self.progress_step, self.progress_cap))

    def _set_progress(self, value: int) -> None:
        # Only the final snap reaches 100
        self.progress = max(self.progress, min(int(value), 99))
        self._notify()

    def _schedule_reset(self) -> None:
        self._cancel_reset_timer()
        if self.reset_delay <= 0:
            self._finish_upload()
            return
        loop = asyncio.get_running_loop()
        self._reset_timer = loop.call_later(self.reset_delay, self._finish_upload)

    def _finish_upload(self) -> None:
        self._reset_timer = None
        if self.upload_state != UploadState.SUCCESS:
            return
        self.selected_file = None
        self.progress = 0
        self.notification = None
        self.upload_state = UploadState.IDLE
        self._notify()

    def _cancel_reset_timer(self) -> None:
        if self._reset_timer is not None:
            self._reset_timer.cancel()
            self._reset_timer = None

    # Gallery

    async def refresh(self) -> None:
        self.gallery_state = GalleryState.LOADING
        self._notify()
        try:
            self.images = [GalleryImage.from_api(item) for item in await self.api.list_images()]
        except Exception as e:
            logger.error("Error fetching images: %s", e)
            self.notification = Notification("error", "Could not load images.")
        finally:
            self.gallery_state = GalleryState.LOADED
            self._notify()

    async def rename(self, old_key: str, new_key: str) -> bool:
        """
        Rename through the API. A partial rename (new key written, old key left
        behind) is reported as a warning and the old key is queued for cleanup.
        """
        new_key = new_key.strip()
        if not new_key or new_key == old_key:
            return False
        try:
            result = await self.api.rename_image(old_key, new_key)
        except Exception as e:
            logger.error("Rename %s -> %s failed: %s", old_key, new_key, e)
            self.notification = Notification("error", "Failed to rename image.")
            self._notify()
            return False

        if result.get("status") == "partial":
            self.pending_cleanup.append(old_key)
            self.notification = Notification(
                "warning",
                f"Renamed to {result.get('new_key', new_key)}, but the old copy could not be removed.",
            )
        else:
            self.notification = Notification("success", "Image renamed successfully.")
        await self.refresh()
        return True

    async def retry_cleanup(self) -> List[str]:
        """Delete old keys left behind by partial renames. Returns the keys still pending."""
        remaining = []
        cleaned = set()
        for key in self.pending_cleanup:
            try:
                await self.api.delete_image(key)
            except Exception as e:
                logger.error("Cleanup of %s failed: %s", key, e)
                remaining.append(key)
            else:
                cleaned.add(key)
        self.pending_cleanup = remaining
        self.images = [img for img in self.images if img.key not in cleaned]
        if remaining:
            self.notification = Notification("error", f"{len(remaining)} old image(s) could not be removed.")
        else:
            self.notification = Notification("success", "Cleanup complete.")
        self._notify()
        return remaining

    async def delete(self, key: str) -> bool:
        self.deleting_key = key
        self._notify()
        try:
            await self.api.delete_image(key)
        except Exception as e:
            logger.error("Delete of %s failed: %s", key, e)
            self.notification = Notification("error", "Failed to delete image.")
            return False
        else:
            self.images = [img for img in self.images if img.key != key]
            self.notification = Notification("success", "Image deleted.")
            return True
        finally:
            self.deleting_key = None
            self._notify()

    def filtered_images(self, query: str = "") -> List[GalleryImage]:
        needle = query.lower()
        return [img for img in self.images if needle in img.key.lower()]

    def rows(self, query: str = "", now: Optional[datetime] = None) -> List[GalleryRow]:
        return [
            GalleryRow(
                key=img.key,
                url=img.url,
                size=format_size(img.size),
                uploaded=relative_time(img.last_modified, now) if img.last_modified else None,
            )
            for img in self.filtered_images(query)
        ]

    def dismiss_notification(self) -> None:
        self.notification = None
        self._notify()

    def _notify(self) -> None:
        if self._on_change is not None:
            self._on_change(self)
