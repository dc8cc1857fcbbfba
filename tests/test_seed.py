from sqlalchemy import func, select

from dev2050.models.models import LearningPath, SearchResult
from dev2050.seed.seed import add_new_search_results, search_results_data
from dev2050.seed.seed_learning_paths import learning_paths_data, seed_learning_paths


async def test_importing_search_results_skips_existing_titles(db_session):
    added, skipped = await add_new_search_results(db_session, search_results_data[:3])
    assert (added, skipped) == (3, 0)

    added, skipped = await add_new_search_results(db_session, search_results_data[:5])
    assert (added, skipped) == (2, 3)

    total = await db_session.scalar(select(func.count()).select_from(SearchResult))
    assert total == 5


async def test_learning_path_seed_is_idempotent(db_session):
    assert await seed_learning_paths(db_session) == len(learning_paths_data)
    await db_session.commit()
    assert await seed_learning_paths(db_session) == 0

    total = await db_session.scalar(select(func.count()).select_from(LearningPath))
    assert total == len(learning_paths_data)
