"""
Abstract base class for news providers.
"""
from abc import ABC, abstractmethod
from typing import Dict, List

import httpx

from dev2050.modules.news.schemas import NewsCategory, NewsItem

MAX_NEWS_ITEMS = 10
USER_AGENT = "TechNewsAggregator/1.0"


class BaseNewsProvider(ABC):
    """Abstract base class for news providers."""

    label: str
    default_url: str
    category_urls: Dict[NewsCategory, str] = {}

    def resolve_url(self, category: NewsCategory) -> str:
        """Category URL, or the provider default for unmapped categories."""
        return self.category_urls.get(category, self.default_url)

    @property
    def headers(self) -> Dict[str, str]:
        return {"User-Agent": USER_AGENT}

    @abstractmethod
    def parse(self, response: httpx.Response) -> List[NewsItem]:
        """
        Turn a successful response into news items.

        Implementations keep document order, skip entries missing a title or
        link, and return at most MAX_NEWS_ITEMS items.
        """
        pass
