# dev2050/main.py

import logging

from contextlib import asynccontextmanager
from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.middleware import SlowAPIMiddleware
from slowapi.errors import RateLimitExceeded
from dev2050.common.database.database import connect_to_db, close_db_connection
from dev2050.common.config import settings
from dev2050.common.feature_flags import FeatureFlags, get_feature_flags
from dev2050.common.rate_limit import limiter
from dev2050.router.routers import include_routers

# Centralized logging configuration
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)

# Lifespan context manager for startup and shutdown events
@asynccontextmanager
async def lifespan(app: FastAPI):
    await connect_to_db()
    yield
    await close_db_connection()

# Initialize FastAPI app with lifespan manager
app = FastAPI(
    title=f"{settings.SITE_NAME} API",
    description="Search, learning paths, tech news, AI helpers and image gallery for developers.",
    version="1.0.0",
    lifespan=lifespan
)

# Feature gates are resolved once and injected into handlers
app.state.feature_flags = FeatureFlags.from_settings(settings)

# Rate limiting
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
app.add_middleware(SlowAPIMiddleware)

# Middleware for CORS using allowed origins from settings
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers from a separate file
include_routers(app)

# Health check endpoint
@app.get("/health", tags=["Health"])
async def health_check():
    return {"status": "ok", "message": "API is running"}

@app.get("/features", response_model=FeatureFlags, tags=["Health"])
async def features(flags: FeatureFlags = Depends(get_feature_flags)):
    return flags
