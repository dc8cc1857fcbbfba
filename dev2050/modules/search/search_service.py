# dev2050/modules/search/search_service.py

import logging
from typing import List
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy import or_

from dev2050.models.models import SearchResult

logger = logging.getLogger(__name__)

LIKE_ESCAPE = "\\"

def contains_pattern(query: str) -> str:
    """
    Build an ILIKE pattern that matches `query` anywhere in a column.
    LIKE wildcards typed by the user are escaped so they match literally.
    """
    escaped = (
        query.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", f"{LIKE_ESCAPE}%")
        .replace("_", f"{LIKE_ESCAPE}_")
    )
    return f"%{escaped}%"

async def get_search_results(query: str, db: AsyncSession) -> List[SearchResult]:
    """
    Case-insensitive substring search over title, description and category,
    newest first. Blank queries return an empty list without hitting the database.
    """
    if not query or not query.strip():
        return []

    pattern = contains_pattern(query.strip())
    stmt = (
        select(SearchResult)
        .where(
            or_(
                SearchResult.title.ilike(pattern, escape=LIKE_ESCAPE),
                SearchResult.description.ilike(pattern, escape=LIKE_ESCAPE),
                SearchResult.category.ilike(pattern, escape=LIKE_ESCAPE),
            )
        )
        .order_by(SearchResult.created_at.desc())
    )
    try:
        result = await db.execute(stmt)
        return list(result.scalars().all())
    except Exception as e:
        logger.error("Search query failed for %r: %s", query, e)
        return []

# Alias used by the real-time search box
async def search_in_real_time(query: str, db: AsyncSession) -> List[SearchResult]:
    return await get_search_results(query, db)

async def get_all_results(db: AsyncSession) -> List[SearchResult]:
    try:
        result = await db.execute(select(SearchResult).order_by(SearchResult.created_at.desc()))
        return list(result.scalars().all())
    except Exception as e:
        logger.error("Failed to list search results: %s", e)
        return []
