# dev2050/modules/resources/schemas.py

from datetime import datetime
from typing import Optional
from uuid import UUID
from pydantic import BaseModel, field_validator

class ResourceResponse(BaseModel):
    id: UUID
    title: str
    description: Optional[str] = None
    url: str
    type: str
    image_url: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True

    @field_validator("type", mode="before")
    def enum_value(cls, value):
        return getattr(value, "value", value)
