# dev2050/modules/resources/resource_controller.py

from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from dev2050.common.database.database import get_db_session
from dev2050.common.utils.global_messages import GlobalMessages
from dev2050.modules.resources import resource_service, schemas

router = APIRouter(prefix="/resources", tags=["resources"])

# GET /resources – Retrieve resources, newest first
@router.get("", response_model=List[schemas.ResourceResponse])
async def get_resources(
    q: Optional[str] = Query(None, description="Filter by title or description"),
    type: Optional[str] = Query(None, description="Filter by resource type"),
    skip: int = Query(0, ge=0),
    limit: int = Query(50, ge=1, le=200),
    db: AsyncSession = Depends(get_db_session)
):
    return await resource_service.get_resources(db, q=q, rtype=type, skip=skip, limit=limit)

# GET /resources/{resourceId} – Retrieve a specific resource by its ID
@router.get("/{resourceId}", response_model=schemas.ResourceResponse)
async def get_resource(resourceId: str, db: AsyncSession = Depends(get_db_session)):
    resource = await resource_service.get_resource_by_id(resourceId, db)
    if not resource:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=GlobalMessages.RESOURCE_NOT_FOUND
        )
    return resource
