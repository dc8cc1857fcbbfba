# dev2050/modules/images/schemas.py

from datetime import datetime
from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, Field

class ImageObject(BaseModel):
    url: str
    key: str
    last_modified: Optional[datetime] = None
    size: Optional[int] = None

    class Config:
        from_attributes = True

class ImageListResponse(BaseModel):
    images: List[ImageObject]

class UploadResponse(BaseModel):
    url: str
    key: str

class RenameStatus(str, Enum):
    RENAMED = "renamed"
    PARTIAL = "partial"

class RenameRequest(BaseModel):
    old_key: str = Field(..., min_length=1)
    new_key: str = Field(..., min_length=1)
    password: str

class RenameResponse(BaseModel):
    status: RenameStatus
    old_key: str
    new_key: str
    image: ImageObject
    failed_phase: Optional[str] = None
    error: Optional[str] = None
    message: str

class DeleteRequest(BaseModel):
    key: str = Field(..., min_length=1)
    password: str

class MessageResponse(BaseModel):
    message: str
