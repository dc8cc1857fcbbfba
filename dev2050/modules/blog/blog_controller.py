# dev2050/modules/blog/blog_controller.py

from typing import List
from fastapi import APIRouter, HTTPException, status

from dev2050.common.utils.global_messages import GlobalMessages
from dev2050.modules.blog import blog_service, schemas

router = APIRouter(prefix="/blog", tags=["blog"])

@router.get("", response_model=List[schemas.BlogPostSummary])
async def get_posts():
    return await blog_service.get_posts()

@router.get("/{slug}", response_model=schemas.BlogPost)
async def get_post(slug: str):
    post = await blog_service.get_post_by_slug(slug)
    if not post:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=GlobalMessages.BLOG_POST_NOT_FOUND
        )
    return post
