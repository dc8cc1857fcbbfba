# dev2050/modules/search/search_controller.py

from typing import List
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from dev2050.modules.search import search_service, schemas
from dev2050.common.database.database import get_db_session

router = APIRouter(prefix="/search", tags=["search"])

@router.get("", response_model=List[schemas.SearchResultItem])
async def search(
    q: str = Query("", description="Search query"),
    db: AsyncSession = Depends(get_db_session)
):
    """
    Real-time search endpoint.

    Returns catalog entries whose title, description or category contains the
    query (case-insensitive), newest first. A blank query returns an empty list.
    """
    return await search_service.search_in_real_time(q, db)

@router.get("/all", response_model=List[schemas.SearchResultItem])
async def list_all(db: AsyncSession = Depends(get_db_session)):
    return await search_service.get_all_results(db)
