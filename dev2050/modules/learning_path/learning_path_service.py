# dev2050/modules/learning_path/learning_path_service.py

import logging
import math
import re
from typing import List, Optional
from sqlalchemy import func
from sqlalchemy.orm import selectinload
from sqlalchemy.future import select
from sqlalchemy.ext.asyncio import AsyncSession

from dev2050.common.feature_flags import FeatureFlags
from dev2050.models.models import LearningPath
from dev2050.modules.ai import ai_service
from dev2050.modules.learning_path.schemas import (
    PersonalizedLearningPlan, PlanSource, PlanStep, UserProfile,
)

logger = logging.getLogger(__name__)

def skill_from_slug(slug: str) -> str:
    """
    Convert a URL slug back to title case, e.g. "full-stack" -> "Full Stack".
    """
    return " ".join(word[:1].upper() + word[1:] for word in slug.split("-") if word)

async def get_learning_paths(db: AsyncSession) -> List[LearningPath]:
    """
    Return every learning path, newest first, with steps loaded in order.
    """
    stmt = (
        select(LearningPath)
        .options(selectinload(LearningPath.steps))
        .order_by(LearningPath.created_at.desc())
    )
    try:
        result = await db.execute(stmt)
        return list(result.scalars().all())
    except Exception as e:
        logger.error("Error fetching learning paths: %s", e)
        return []

async def get_learning_path_by_skill(skill: str, db: AsyncSession) -> Optional[LearningPath]:
    skill_title = skill_from_slug(skill)
    if not skill_title:
        return None
    stmt = (
        select(LearningPath)
        .options(selectinload(LearningPath.steps))
        .where(func.lower(LearningPath.skill) == skill_title.lower())
    )
    try:
        result = await db.execute(stmt)
        return result.scalars().first()
    except Exception as e:
        logger.error("Error fetching learning path %r: %s", skill, e)
        return None

def _words(text: str) -> set:
    return {word for word in re.split(r"[^a-z0-9+#.]+", text.lower()) if word and word not in {"developer", "engineer"}}

def match_catalog_path(target_role: str, paths: List[LearningPath]) -> Optional[LearningPath]:
    """
    Pick the catalog path whose title or skill shares the most words with the
    target role. Falls back to the first path when nothing overlaps.
    """
    if not paths:
        return None
    role_words = _words(target_role)
    best, best_score = paths[0], 0
    for path in paths:
        score = len(role_words & (_words(path.title) | _words(path.skill)))
        if score > best_score:
            best, best_score = path, score
    return best

def _build_plan(
    *,
    title: str,
    description: str,
    steps: List[PlanStep],
    profile: UserProfile,
    source: PlanSource,
    skill: Optional[str] = None,
) -> PersonalizedLearningPlan:
    total_hours = sum(step.estimated_hours for step in steps)
    return PersonalizedLearningPlan(
        title=title,
        description=description,
        target_role=profile.target_role,
        source=source,
        skill=skill,
        total_hours=total_hours,
        estimated_weeks=math.ceil(total_hours / profile.hours_per_week),
        steps=steps,
    )

async def recommend_learning_plan(
    profile: UserProfile,
    db: AsyncSession,
    flags: FeatureFlags,
) -> Optional[PersonalizedLearningPlan]:
    """
    Produce a learning plan for an onboarding profile.

    - With beta features enabled the generative model drafts a tailored plan.
    - Otherwise, or if that fails, the closest catalog path is adapted instead.
    """
    if flags.features_enabled:
        generated = await ai_service.generate_learning_plan(profile)
        if generated:
            try:
                steps = [PlanStep(**step) for step in generated["steps"]]
                return _build_plan(
                    title=generated["title"],
                    description=generated.get("description") or "",
                    steps=steps,
                    profile=profile,
                    source=PlanSource.AI,
                )
            except Exception as e:
                logger.warning("Generated learning plan did not validate: %s", e)

    path = match_catalog_path(profile.target_role, await get_learning_paths(db))
    if path is None:
        return None

    known = {skill.lower() for skill in profile.current_skills}
    steps = [
        PlanStep(
            title=step.title,
            description=step.description,
            estimated_hours=step.estimated_hours,
            resources=list(step.resources or []),
        )
        for step in path.steps
        if step.title.lower() not in known
    ]
    return _build_plan(
        title=path.title,
        description=path.description,
        steps=steps,
        profile=profile,
        source=PlanSource.CATALOG,
        skill=path.skill,
    )
