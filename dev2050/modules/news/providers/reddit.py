"""
Reddit r/programming listing, read from the public JSON endpoint.
"""
from typing import List

import httpx

from dev2050.modules.news.schemas import NewsCategory, NewsItem
from .base import BaseNewsProvider, MAX_NEWS_ITEMS


class RedditProvider(BaseNewsProvider):
    """Reddit serves JSON, so no HTML parsing is needed."""

    label = "Reddit"
    default_url = "https://www.reddit.com/r/programming/new/.json"
    category_urls = {
        NewsCategory.LATEST: "https://www.reddit.com/r/programming/new/.json",
        NewsCategory.TOP: "https://www.reddit.com/r/programming/hot/.json",
    }

    def parse(self, response: httpx.Response) -> List[NewsItem]:
        children = response.json()["data"]["children"]
        news: List[NewsItem] = []

        for child in children:
            if len(news) >= MAX_NEWS_ITEMS:
                break

            post = child.get("data") or {}
            title = (post.get("title") or "").strip()
            url = post.get("url")
            if not title or not url:
                continue

            score = post.get("score")
            news.append(NewsItem(
                id=str(post.get("id") or f"reddit-{len(news)}"),
                title=title,
                url=url,
                source=self.label,
                points=str(score) if score is not None else None,
                author=post.get("author"),
            ))

        return news
