# dev2050/modules/resources/resource_service.py

import logging
import uuid
from typing import List, Optional
from sqlalchemy import or_
from sqlalchemy.future import select
from sqlalchemy.ext.asyncio import AsyncSession

from dev2050.models.models import Resource, ResourceType
from dev2050.modules.search.search_service import LIKE_ESCAPE, contains_pattern

logger = logging.getLogger(__name__)

async def get_resources(
    db: AsyncSession,
    q: Optional[str] = None,
    rtype: Optional[str] = None,
    skip: int = 0,
    limit: int = 50,
) -> List[Resource]:
    """
    Return resources newest first, optionally filtered by q (title/description)
    and type. An unknown type is ignored rather than rejected.
    """
    stmt = select(Resource)

    conditions = []

    if q and q.strip():
        pattern = contains_pattern(q.strip())
        conditions.append(or_(
            Resource.title.ilike(pattern, escape=LIKE_ESCAPE),
            Resource.description.ilike(pattern, escape=LIKE_ESCAPE),
        ))

    if rtype:
        try:
            conditions.append(Resource.type == ResourceType(rtype.lower()))
        except ValueError:
            logger.debug("Ignoring unknown resource type filter %r", rtype)

    if conditions:
        stmt = stmt.where(*conditions)

    stmt = stmt.order_by(Resource.created_at.desc()).offset(skip).limit(limit)

    try:
        result = await db.execute(stmt)
        return list(result.scalars().all())
    except Exception as e:
        logger.error("Error fetching resources: %s", e)
        return []

async def get_resource_by_id(resource_id: str, db: AsyncSession) -> Optional[Resource]:
    """
    Retrieve a single resource by its ID. Malformed IDs resolve to None.
    """
    try:
        resource_uuid = uuid.UUID(str(resource_id))
    except ValueError:
        return None
    try:
        result = await db.execute(select(Resource).where(Resource.id == resource_uuid))
        return result.scalars().first()
    except Exception as e:
        logger.error("Error fetching resource %s: %s", resource_id, e)
        return None
