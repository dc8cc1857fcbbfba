# dev2050/modules/search/schemas.py

from datetime import datetime
from uuid import UUID
from pydantic import BaseModel

class SearchResultItem(BaseModel):
    id: UUID
    title: str
    description: str
    url: str
    category: str
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
