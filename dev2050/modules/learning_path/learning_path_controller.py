# dev2050/modules/learning_path/learning_path_controller.py

from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List

from dev2050.common.database.database import get_db_session
from dev2050.common.feature_flags import FeatureFlags, get_feature_flags
from dev2050.common.rate_limit import limiter
from dev2050.common.utils.global_messages import GlobalMessages
from dev2050.modules.learning_path import learning_path_service, schemas

router = APIRouter(prefix="/learning-paths", tags=["learning-path"])

@router.get("", response_model=List[schemas.LearningPathResponse])
async def get_learning_paths(db: AsyncSession = Depends(get_db_session)):
    """
    Retrieve every learning path with its ordered steps.
    """
    return await learning_path_service.get_learning_paths(db)

@router.post("/personalized", response_model=schemas.PersonalizedLearningPlan)
@limiter.limit("10/minute")
async def create_personalized_plan(
    request: Request,
    profile: schemas.UserProfile,
    flags: FeatureFlags = Depends(get_feature_flags),
    db: AsyncSession = Depends(get_db_session)
):
    """
    Turn a completed onboarding profile into a learning plan.
    """
    plan = await learning_path_service.recommend_learning_plan(profile, db, flags)
    if not plan:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=GlobalMessages.LEARNING_PLAN_UNAVAILABLE
        )
    return plan

@router.get("/{skill}", response_model=schemas.LearningPathResponse)
async def get_learning_path(skill: str, db: AsyncSession = Depends(get_db_session)):
    """
    Retrieve a learning path by its skill slug, e.g. /learning-paths/full-stack.
    """
    learning_path = await learning_path_service.get_learning_path_by_skill(skill, db)
    if not learning_path:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=GlobalMessages.LEARNING_PATH_NOT_FOUND
        )
    return learning_path
