"""
GitHub trending repositories scraper.
"""
import re
from typing import List
from urllib.parse import urljoin

import httpx
from bs4 import BeautifulSoup

from dev2050.modules.news.schemas import NewsItem
from .base import BaseNewsProvider, MAX_NEWS_ITEMS

_WHITESPACE = re.compile(r"\s+")


class GitHubTrendingProvider(BaseNewsProvider):
    """GitHub has a single trending page, so every category maps to it."""

    label = "GitHub"
    base_url = "https://github.com"
    default_url = "https://github.com/trending"

    def parse(self, response: httpx.Response) -> List[NewsItem]:
        soup = BeautifulSoup(response.text, "html.parser")
        news: List[NewsItem] = []

        for index, article in enumerate(soup.select("article.Box-row")):
            if len(news) >= MAX_NEWS_ITEMS:
                break

            link = article.select_one("h2 a")
            if link is None:
                continue
            # "owner /\n   repo" -> "owner / repo"
            title = _WHITESPACE.sub(" ", link.get_text()).strip()
            href = link.get("href")
            if not title or not href:
                continue

            news.append(NewsItem(
                id=f"github-{index}",
                title=title,
                url=urljoin(self.base_url, href),
                source=self.label,
            ))

        return news
