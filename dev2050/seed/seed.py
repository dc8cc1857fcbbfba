import asyncio
import logging
from typing import Dict, Iterable, List, Tuple
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from dev2050.common.database.database import async_session, connect_to_db
from dev2050.models.models import Resource, ResourceType, SearchResult
from dev2050.seed.seed_learning_paths import seed_learning_paths

logger = logging.getLogger(__name__)

search_results_data = [
    {"title": "React", "description": "A JavaScript library for building user interfaces.", "url": "https://react.dev", "category": "Frontend"},
    {"title": "Next.js", "description": "The React framework for production with hybrid static and server rendering.", "url": "https://nextjs.org", "category": "Frontend"},
    {"title": "Vue.js", "description": "The progressive JavaScript framework.", "url": "https://vuejs.org", "category": "Frontend"},
    {"title": "Tailwind CSS", "description": "A utility-first CSS framework for rapid UI development.", "url": "https://tailwindcss.com", "category": "Frontend"},
    {"title": "FastAPI", "description": "Modern, fast web framework for building APIs with Python type hints.", "url": "https://fastapi.tiangolo.com", "category": "Backend"},
    {"title": "Express", "description": "Fast, unopinionated, minimalist web framework for Node.js.", "url": "https://expressjs.com", "category": "Backend"},
    {"title": "Go", "description": "An open source programming language for simple, reliable and efficient software.", "url": "https://go.dev", "category": "Languages"},
    {"title": "Rust", "description": "A language empowering everyone to build reliable and efficient software.", "url": "https://www.rust-lang.org", "category": "Languages"},
    {"title": "PostgreSQL", "description": "The world's most advanced open source relational database.", "url": "https://www.postgresql.org", "category": "Databases"},
    {"title": "Docker", "description": "Build, share and run containerized applications.", "url": "https://www.docker.com", "category": "DevOps"},
    {"title": "Kubernetes", "description": "Production-grade container orchestration.", "url": "https://kubernetes.io", "category": "DevOps"},
    {"title": "GitHub Actions", "description": "Automate build, test and deployment workflows from your repository.", "url": "https://github.com/features/actions", "category": "DevOps"},
]

resources_data = [
    {"title": "MDN Web Docs", "description": "Documentation for web technologies.", "url": "https://developer.mozilla.org", "type": ResourceType.DOCUMENTATION},
    {"title": "Full Stack Open", "description": "Deep dive into modern web development.", "url": "https://fullstackopen.com", "type": ResourceType.COURSE},
    {"title": "Pro Git", "description": "The entire Pro Git book, free to read online.", "url": "https://git-scm.com/book", "type": ResourceType.BOOK},
    {"title": "Excalidraw", "description": "Virtual whiteboard for sketching hand-drawn like diagrams.", "url": "https://excalidraw.com", "type": ResourceType.TOOL},
    {"title": "The Missing Semester", "description": "Lectures on shell, editors, version control and more.", "url": "https://missing.csail.mit.edu", "type": ResourceType.VIDEO},
    {"title": "The Twelve-Factor App", "description": "A methodology for building software-as-a-service apps.", "url": "https://12factor.net", "type": ResourceType.ARTICLE},
]


async def seed_resources(session: AsyncSession):
    existing = set((await session.execute(select(Resource.title))).scalars().all())
    for data in resources_data:
        if data["title"] in existing:
            continue
        session.add(Resource(**data))
    logger.info("Seeded resources")


async def add_new_search_results(session: AsyncSession, items: Iterable[Dict[str, str]]) -> Tuple[int, int]:
    """
    Import additional search results, skipping any whose title already exists.
    Returns (added, skipped).
    """
    added = 0
    skipped = 0
    seen: List[str] = []
    for item in items:
        title = item["title"]
        existing = await session.execute(select(SearchResult.id).where(SearchResult.title == title))
        if existing.first() is not None or title in seen:
            logger.info("Skipped: %r (already exists)", title)
            skipped += 1
            continue
        session.add(SearchResult(
            title=title,
            description=item["description"],
            url=item["url"],
            category=item["category"],
        ))
        seen.append(title)
        added += 1
        logger.info("Added: %r", title)
    await session.flush()
    logger.info("Summary: added=%d skipped=%d", added, skipped)
    return added, skipped


async def seed_all():
    """
    Run all seed functions against the configured database.
    """
    await connect_to_db()
    async with async_session() as session:
        async with session.begin():
            await add_new_search_results(session, search_results_data)
            await seed_resources(session)
            await seed_learning_paths(session)

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    asyncio.run(seed_all())
