# dev2050/router/routers.py

from fastapi import FastAPI
from dev2050.auth.auth_controller import router as auth_router
from dev2050.modules.ai.ai_controller import router as ai_router
from dev2050.modules.blog.blog_controller import router as blog_router
from dev2050.modules.images.image_controller import router as image_router
from dev2050.modules.learning_path.learning_path_controller import router as learning_path_router
from dev2050.modules.news.news_controller import router as news_router
from dev2050.modules.resources.resource_controller import router as resource_router
from dev2050.modules.search.search_controller import router as search_router

def include_routers(app: FastAPI) -> None:
    app.include_router(auth_router)
    app.include_router(ai_router)
    app.include_router(blog_router)
    app.include_router(image_router)
    app.include_router(learning_path_router)
    app.include_router(news_router)
    app.include_router(resource_router)
    app.include_router(search_router)
