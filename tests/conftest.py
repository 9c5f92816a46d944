"""
Blog API — Test Configuration (conftest.py)
=============================================

What:  Shared pytest fixtures for the entire test suite.
How:   HTTP tests run the real app against an in-memory SQLite database
       (aiosqlite + StaticPool so every session sees the same data).
       Unit tests use an AsyncMock session instead.

Fixture Hierarchy (all function-scoped):
    ├── test_settings:    Settings with a fixed secret
    ├── database:         Database handle with the schema created
    ├── test_app:         create_app(test_settings, database)
    ├── test_client:      HTTPX AsyncClient over ASGITransport
    ├── register_and_login: helper returning (user_id, auth headers)
    └── mock_db_session:  AsyncMock standing in for AsyncSession
"""

import os
from typing import Awaitable, Callable, Dict, Tuple
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

# Must be set before blogapi.config is imported anywhere
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["JWT_SECRET"] = "test-secret-not-real"
os.environ["LOG_LEVEL"] = "WARNING"

from blogapi.config import Settings  # noqa: E402
from blogapi.database import Database  # noqa: E402
from blogapi.main import create_app  # noqa: E402

TEST_SECRET = "test-secret-not-real"


@pytest.fixture
def test_settings() -> Settings:
    return Settings(
        database_url="sqlite+aiosqlite://",
        jwt_secret=TEST_SECRET,
        log_level="WARNING",
    )


@pytest_asyncio.fixture
async def database():
    """A fresh in-memory schema per test."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    db = Database(engine)
    await db.create_all()
    yield db
    await db.dispose()


@pytest.fixture
def test_app(test_settings, database):
    return create_app(test_settings, database)


@pytest_asyncio.fixture
async def test_client(test_app):
    """
    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def register_and_login(test_client) -> Callable[..., Awaitable[Tuple[int, Dict[str, str]]]]:
    """
    Returns a coroutine function that signs a user up, logs in, and hands
    back `(user_id, {"Authorization": "Bearer <token>"})`.
    """

    async def _register_and_login(email: str, password: str = "s3cret-pass"):
        signup = await test_client.post("/auth/signup", json={"email": email, "password": password})
        assert signup.status_code == 201, signup.text
        login = await test_client.post("/auth/login", json={"email": email, "password": password})
        assert login.status_code == 200, login.text
        body = login.json()
        return body["user"]["id"], {"Authorization": f"Bearer {body['token']}"}

    return _register_and_login


@pytest.fixture
def mock_db_session():
    """
    A MagicMock that simulates AsyncSession behavior.

    Usage:
        mock_db_session.execute.return_value.scalar_one_or_none.return_value = post
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.refresh = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session
