# dev2050/modules/news/schemas.py

from enum import Enum
from typing import Optional
from pydantic import BaseModel

class NewsSource(str, Enum):
    HACKER_NEWS = "hn"
    DEVTO = "devto"
    REDDIT = "reddit"
    GITHUB = "github"

class NewsCategory(str, Enum):
    LATEST = "latest"
    TOP = "top"
    SHOW = "show"
    ASK = "ask"

class NewsItem(BaseModel):
    id: str
    title: str
    url: str
    source: str  # display label, e.g. "Hacker News"
    points: Optional[str] = None
    author: Optional[str] = None
