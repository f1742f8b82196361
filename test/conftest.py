"""
Pytest configuration and fixtures for the multilingual CMS tests

Everything runs against an in-memory SQLite database through aiosqlite.
"""

import os
import sys
import tempfile
from collections.abc import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))  # noqa: PTH100, PTH118, PTH119, PTH120

# Configure the app before it is imported
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ.setdefault("UPLOAD_DIR", tempfile.mkdtemp(prefix="cms-uploads-"))
os.environ["LOG_JSON"] = "false"

from app.config import settings  # noqa: E402
from app.content_kinds import CONTENT_KINDS  # noqa: E402
from app.database import Base, get_db  # noqa: E402
from app.services.persistence import (  # noqa: E402
    SQLAlchemyContentStore,
    SQLAlchemyGalleryStore,
    SQLAlchemyPageStore,
)
from app.services.storage_service import LocalDiskStorage, get_storage  # noqa: E402

# One shared connection so every session sees the same in-memory database
test_engine = create_async_engine(
    "sqlite+aiosqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestSessionLocal = async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)

import app.database as database_module  # noqa: E402
from main import app  # noqa: E402

database_module.engine = test_engine
database_module.AsyncSessionLocal = TestSessionLocal


@pytest.fixture(scope="function")
async def setup_test_database():
    """Create all tables before a test and drop them afterwards."""
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)

    yield

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest.fixture(scope="function")
async def test_db(setup_test_database) -> AsyncGenerator[AsyncSession, None]:
    async with TestSessionLocal() as session:
        yield session


@pytest.fixture
def event_store(test_db):
    return SQLAlchemyContentStore(test_db, CONTENT_KINDS["event"])


@pytest.fixture
def news_store(test_db):
    return SQLAlchemyContentStore(test_db, CONTENT_KINDS["news"])


@pytest.fixture
def theme_store(test_db):
    return SQLAlchemyContentStore(test_db, CONTENT_KINDS["theme"])


@pytest.fixture
def team_store(test_db):
    return SQLAlchemyContentStore(test_db, CONTENT_KINDS["team"])


@pytest.fixture
def document_store(test_db):
    return SQLAlchemyContentStore(test_db, CONTENT_KINDS["document"])


@pytest.fixture
def focus_store(test_db):
    return SQLAlchemyContentStore(test_db, CONTENT_KINDS["focus_area"])


@pytest.fixture
def gallery_store(test_db):
    return SQLAlchemyGalleryStore(test_db)


@pytest.fixture
def page_store(test_db):
    return SQLAlchemyPageStore(test_db)


@pytest.fixture
def disk_storage(tmp_path):
    return LocalDiskStorage(upload_dir=tmp_path, url_prefix="/uploads")


@pytest.fixture
async def client(setup_test_database, disk_storage) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client bound to the app, the test database and a temporary upload directory."""

    async def override_get_db():
        async with TestSessionLocal() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_storage] = lambda: disk_storage
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def admin_credentials(monkeypatch):
    """Turn on HTTP Basic for the admin routes."""
    monkeypatch.setattr(settings, "admin_user", "admin")
    monkeypatch.setattr(settings, "admin_password", "secret")
    return ("admin", "secret")
