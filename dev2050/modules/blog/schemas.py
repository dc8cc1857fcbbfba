# dev2050/modules/blog/schemas.py

from datetime import datetime
from typing import Any, Dict, List, Optional
from pydantic import BaseModel

class BlogPostSummary(BaseModel):
    id: str
    title: str
    slug: str
    main_image_url: Optional[str] = None
    published_at: Optional[datetime] = None
    categories: List[str] = []
    excerpt: Optional[str] = None

class BlogPost(BlogPostSummary):
    body: List[Dict[str, Any]] = []
    body_text: str = ""
