# dev2050/modules/news/news_service.py

import logging
from typing import Dict, List, Optional

import httpx

from dev2050.common.config import settings
from dev2050.common.utils.cache import TTLCache
from dev2050.modules.news.providers.base import BaseNewsProvider
from dev2050.modules.news.providers.devto import DevtoProvider
from dev2050.modules.news.providers.github import GitHubTrendingProvider
from dev2050.modules.news.providers.hacker_news import HackerNewsProvider
from dev2050.modules.news.providers.reddit import RedditProvider
from dev2050.modules.news.schemas import NewsCategory, NewsItem, NewsSource

logger = logging.getLogger(__name__)

PROVIDERS: Dict[NewsSource, BaseNewsProvider] = {
    NewsSource.HACKER_NEWS: HackerNewsProvider(),
    NewsSource.DEVTO: DevtoProvider(),
    NewsSource.REDDIT: RedditProvider(),
    NewsSource.GITHUB: GitHubTrendingProvider(),
}

# Keyed by request URL
news_cache = TTLCache(ttl_seconds=settings.NEWS_CACHE_TTL_SECONDS)

def get_provider(source: NewsSource) -> BaseNewsProvider:
    return PROVIDERS[NewsSource(source)]

async def _fetch(url: str, provider: BaseNewsProvider, client: httpx.AsyncClient) -> List[NewsItem]:
    response = await client.get(url, headers=provider.headers, timeout=10.0, follow_redirects=True)
    response.raise_for_status()
    return provider.parse(response)

async def get_tech_news(
    source: NewsSource = NewsSource.HACKER_NEWS,
    category: NewsCategory = NewsCategory.LATEST,
    client: Optional[httpx.AsyncClient] = None,
) -> List[NewsItem]:
    """
    Fetch up to ten headlines from one source.

    Responses are cached per URL for the configured window. Any network or
    parsing failure is logged and resolves to an empty list; failures are not
    cached so the next call tries again.
    """
    try:
        provider = get_provider(source)
        url = provider.resolve_url(NewsCategory(category))
    except (KeyError, ValueError) as e:
        logger.error("Unknown news source/category %s/%s: %s", source, category, e)
        return []

    cached = news_cache.get(url)
    if cached is not None:
        return list(cached)

    try:
        if client is not None:
            news = await _fetch(url, provider, client)
        else:
            async with httpx.AsyncClient() as owned_client:
                news = await _fetch(url, provider, owned_client)
    except Exception as e:
        logger.error("Error fetching tech news from %s: %s", url, e)
        return []

    if not news:
        logger.warning("No news items parsed from %s; page structure may have changed", url)

    news_cache.set(url, news)
    return list(news)
