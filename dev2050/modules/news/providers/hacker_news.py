"""
Hacker News front page scraper.
"""
from typing import List
from urllib.parse import urljoin

import httpx
from bs4 import BeautifulSoup

from dev2050.modules.news.schemas import NewsCategory, NewsItem
from .base import BaseNewsProvider, MAX_NEWS_ITEMS


class HackerNewsProvider(BaseNewsProvider):
    """Scrapes the story table rendered at news.ycombinator.com."""

    label = "Hacker News"
    base_url = "https://news.ycombinator.com/"
    default_url = "https://news.ycombinator.com/newest"
    category_urls = {
        NewsCategory.LATEST: "https://news.ycombinator.com/newest",
        NewsCategory.TOP: "https://news.ycombinator.com/",
        NewsCategory.SHOW: "https://news.ycombinator.com/show",
        NewsCategory.ASK: "https://news.ycombinator.com/ask",
    }

    def parse(self, response: httpx.Response) -> List[NewsItem]:
        soup = BeautifulSoup(response.text, "html.parser")
        news: List[NewsItem] = []

        for index, row in enumerate(soup.select(".athing")):
            if len(news) >= MAX_NEWS_ITEMS:
                break

            link = row.select_one(".titleline > a")
            if link is None:
                continue
            title = link.get_text(strip=True)
            href = link.get("href")
            if not title or not href:
                continue

            item = NewsItem(
                id=row.get("id") or f"hn-{index}",
                title=title,
                # "Ask HN" posts link to item?id=..., relative to the site
                url=urljoin(self.base_url, href),
                source=self.label,
            )

            # Score and author live in the following "subtext" row
            subtext = row.find_next_sibling("tr")
            if subtext is not None:
                score = subtext.select_one(".score")
                user = subtext.select_one(".hnuser")
                if score is not None:
                    item.points = score.get_text(strip=True).split(" ")[0]
                if user is not None:
                    item.author = user.get_text(strip=True)

            news.append(item)

        return news
