"""
Dev.to article feed scraper.
"""
from typing import List
from urllib.parse import urljoin

import httpx
from bs4 import BeautifulSoup

from dev2050.modules.news.schemas import NewsCategory, NewsItem
from .base import BaseNewsProvider, MAX_NEWS_ITEMS


class DevtoProvider(BaseNewsProvider):
    """Scrapes the story cards on dev.to listing pages."""

    label = "Dev.to"
    base_url = "https://dev.to/"
    default_url = "https://dev.to/latest"
    category_urls = {
        NewsCategory.LATEST: "https://dev.to/latest",
        NewsCategory.TOP: "https://dev.to/top/week",
    }

    def parse(self, response: httpx.Response) -> List[NewsItem]:
        soup = BeautifulSoup(response.text, "html.parser")
        news: List[NewsItem] = []

        for index, story in enumerate(soup.select(".crayons-story")):
            if len(news) >= MAX_NEWS_ITEMS:
                break

            link = story.select_one(".crayons-story__title > a")
            if link is None:
                continue
            title = link.get_text(strip=True)
            href = link.get("href")
            if not title or not href:
                continue

            news.append(NewsItem(
                id=story.get("id") or f"devto-{index}",
                title=title,
                url=urljoin(self.base_url, href),
                source=self.label,
            ))

        return news
