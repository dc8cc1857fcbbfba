import os

# Settings are read at import time, so the environment must be in place first.
os.environ["APP_ENV"] = "test"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["FEATURES_ENABLED"] = "false"
os.environ["ADMIN_PASSWORD"] = "letmein"
os.environ["R2_BUCKET"] = "gallery"
os.environ["R2_PUBLIC_URL"] = "https://cdn.example.com"
os.environ["R2_PREFIX"] = "uploads/"
os.environ["SANITY_PROJECT_ID"] = "proj123"
os.environ["SANITY_DATASET"] = "production"
os.environ["GEMINI_API_KEY"] = "test-key"

from datetime import datetime, timezone
from typing import Dict, List, Optional

import httpx
import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from dev2050.common.database.database import get_db_session
from dev2050.common.feature_flags import FeatureFlags
from dev2050.main import app
from dev2050.models.models import Base
from dev2050.modules.blog.blog_service import blog_cache
from dev2050.modules.images.image_controller import get_http_client_factory
from dev2050.modules.images.storage import StoredObject, get_object_storage
from dev2050.modules.news.news_service import news_cache


class InMemoryStorage:
    """Object store stand-in with the same surface as ObjectStorage."""

    def __init__(self, public_base_url: str = "https://cdn.example.com"):
        self.public_base_url = public_base_url
        self.objects: Dict[str, dict] = {}
        self.calls: List[tuple] = []
        self.fail_on: Dict[str, Exception] = {}

    def _record(self, name: str, *args):
        self.calls.append((name,) + args)
        if name in self.fail_on:
            raise self.fail_on[name]

    def add(self, key: str, data: bytes = b"img", last_modified: Optional[datetime] = None):
        self.objects[key] = {
            "data": data,
            "content_type": "image/jpeg",
            "last_modified": last_modified or datetime.now(timezone.utc),
        }

    def public_url(self, key: str) -> str:
        return f"{self.public_base_url}/{key}"

    def list_objects(self, prefix: str) -> List[StoredObject]:
        self._record("list_objects", prefix)
        return [
            StoredObject(key=key, last_modified=obj["last_modified"], size=len(obj["data"]))
            for key, obj in self.objects.items()
            if key.startswith(prefix)
        ]

    def put_object(self, key: str, data: bytes, content_type: Optional[str] = None) -> None:
        self._record("put_object", key)
        self.objects[key] = {
            "data": data,
            "content_type": content_type,
            "last_modified": datetime.now(timezone.utc),
        }

    def exists(self, key: str) -> bool:
        self._record("exists", key)
        return key in self.objects

    def copy_object(self, source_key: str, dest_key: str) -> None:
        self._record("copy_object", source_key, dest_key)
        self.objects[dest_key] = dict(self.objects[source_key])

    def delete_object(self, key: str) -> None:
        self._record("delete_object", key)
        self.objects.pop(key, None)


@pytest.fixture
async def db_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
async def db_session(db_engine):
    session_factory = async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        yield session


@pytest.fixture
def storage():
    return InMemoryStorage()


@pytest.fixture(autouse=True)
def clear_caches():
    news_cache.clear()
    blog_cache.clear()
    yield
    news_cache.clear()
    blog_cache.clear()


@pytest.fixture
def upstream_handler():
    """Handler used by the download proxy's outbound client. Tests replace `.handler`."""

    class Upstream:
        requests: List[httpx.Request] = []

        def handler(self, request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, content=b"\xff\xd8image-bytes", headers={"Content-Type": "image/jpeg"})

    upstream = Upstream()
    upstream.requests = []
    return upstream


@pytest.fixture
async def client(db_session, storage, upstream_handler):
    async def override_db():
        yield db_session

    def dispatch(request: httpx.Request) -> httpx.Response:
        upstream_handler.requests.append(request)
        return upstream_handler.handler(request)

    app.dependency_overrides[get_db_session] = override_db
    app.dependency_overrides[get_object_storage] = lambda: storage
    app.dependency_overrides[get_http_client_factory] = lambda: (
        lambda: httpx.AsyncClient(transport=httpx.MockTransport(dispatch))
    )
    original_flags = app.state.feature_flags

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as http_client:
        yield http_client

    app.dependency_overrides.clear()
    app.state.feature_flags = original_flags


@pytest.fixture
def enable_beta():
    original = app.state.feature_flags
    app.state.feature_flags = FeatureFlags(features_enabled=True)
    yield
    app.state.feature_flags = original
