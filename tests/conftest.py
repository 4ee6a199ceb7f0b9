"""
SocialHub Backend - Test Configuration (conftest.py)
======================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── mock_db_session: Mock AsyncSession for service unit tests
    ├── database:        Empty SQLite schema (file-backed, recreated per test)
    ├── db_session:      Real AsyncSession for seeding and inspecting rows
    ├── make_user:       Factory inserting a User row
    └── test_client:     HTTPX AsyncClient wired to the FastAPI app
"""

import os
import tempfile

# Override settings for testing BEFORE any socialhub imports
_TEST_DIR = tempfile.mkdtemp(prefix="socialhub_test_")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_TEST_DIR}/test.db"
os.environ["JWT_SECRET"] = "test-secret-not-real"
os.environ["LOG_LEVEL"] = "WARNING"

import uuid
from typing import Dict
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from socialhub.database import Base, async_session_factory, engine
from socialhub.models.post import Comment, Like, Post  # noqa: F401
from socialhub.models.user import User
from socialhub.security import create_access_token


def auth_headers(user_id: uuid.UUID) -> Dict[str, str]:
    """Authorization header for a freshly issued token."""
    return {"Authorization": f"Bearer {create_access_token(user_id)}"}


@pytest.fixture
def headers_for():
    """`headers_for(user)` → Authorization header dict for that user."""
    return lambda user: auth_headers(user.id)


@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        mock_db_session.execute.return_value.scalar_one_or_none.return_value = post
        result = await post_service.get_post(mock_db_session, str(post.id))
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.delete = AsyncMock()
    session.add = MagicMock()
    return session


@pytest_asyncio.fixture
async def database():
    """Drops and recreates every table so each test starts empty."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    yield
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(database):
    async with async_session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def make_user(db_session):
    """
    Factory fixture: `await make_user("Jane")` inserts and returns a User.
    """
    async def _make(name: str = "Jane Doe", avatar: str | None = None) -> User:
        user = User(
            id=uuid.uuid4(),
            name=name,
            email=f"{name.lower().replace(' ', '.')}.{uuid.uuid4().hex[:6]}@example.com",
            avatar=avatar or f"//www.gravatar.com/avatar/{uuid.uuid4().hex}?s=200&r=pg&d=mm",
            password="$2b$10$not-a-real-hash",
        )
        db_session.add(user)
        await db_session.commit()
        return user

    return _make


@pytest_asyncio.fixture
async def test_client(database):
    """
    Provides an async HTTP test client for endpoint testing.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    from socialhub.main import app
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()
