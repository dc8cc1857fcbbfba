# dev2050/modules/news/news_controller.py

from typing import List
from fastapi import APIRouter, Query

from dev2050.modules.news import news_service
from dev2050.modules.news.schemas import NewsCategory, NewsItem, NewsSource

router = APIRouter(prefix="/news", tags=["news"])

@router.get("", response_model=List[NewsItem])
async def get_news(
    source: NewsSource = Query(NewsSource.HACKER_NEWS),
    category: NewsCategory = Query(NewsCategory.LATEST),
):
    """
    Latest headlines from the selected source. Upstream failures yield an empty list.
    """
    return await news_service.get_tech_news(source, category)
