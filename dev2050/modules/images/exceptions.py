"""
Errors raised by the image gallery service.
"""
from typing import Optional


class ImageError(Exception):
    """Base class for image store errors."""


class ImageValidationError(ImageError):
    """The request was rejected before any storage call."""


class ImageTooLargeError(ImageValidationError):
    pass


class ImageNotFoundError(ImageError):
    def __init__(self, key: str):
        super().__init__(f"No image stored under {key!r}")
        self.key = key


class ImageConflictError(ImageError):
    def __init__(self, key: str):
        super().__init__(f"An image is already stored under {key!r}")
        self.key = key


class RenameError(ImageError):
    """A rename failed in `phase` before anything was left half done."""

    def __init__(self, phase: str, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.phase = phase
        self.cause = cause
