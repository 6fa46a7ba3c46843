"""
Postboard Backend — Test Configuration (conftest.py)
======================================================

What:  Shared pytest fixtures for the test suite.
How:   API tests run the real app (create_app) against a throw-away SQLite
       file per test through httpx's ASGITransport; service tests use a
       mocked AsyncSession.

Fixture Hierarchy (all function-scoped):
    ├── test_settings:     Settings pointing at tmp_path/test.db
    ├── app:               create_app(test_settings) with collections created
    ├── test_client:       httpx AsyncClient bound to `app`
    ├── register_and_login: helper returning bearer headers for a new user
    └── mock_db_session:   AsyncMock standing in for AsyncSession
"""

import os
import tempfile

# Module-level settings (postboard.config.settings, postboard.main.app) are
# built at import time: point them somewhere harmless before importing.
os.environ["DATABASE_URL"] = (
    f"sqlite+aiosqlite:///{tempfile.mkdtemp(prefix='postboard_test_')}/import.db"
)
os.environ["JWT_SECRET_KEY"] = "test-secret-not-real"
os.environ["LOG_LEVEL"] = "WARNING"

from unittest.mock import AsyncMock, MagicMock  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from postboard.config import Settings  # noqa: E402
from postboard.main import create_app  # noqa: E402


@pytest.fixture
def test_settings(tmp_path):
    """Fresh settings per test: own database file, generous rate limit."""
    return Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        jwt_secret_key="test-secret-not-real",
        log_level="WARNING",
        rate_limit_requests=10000,
        rate_limit_window=60,
    )


@pytest_asyncio.fixture
async def app(test_settings):
    """
    The application under test with both collections created.

    ASGITransport does not run the lifespan, so the collections are created
    here instead of on startup.
    """
    application = create_app(test_settings)
    await application.state.database.create_all()
    yield application
    await application.state.database.dispose()


@pytest_asyncio.fixture
async def test_client(app):
    """
    HTTPX AsyncClient talking to `app` in-process.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def register_and_login(test_client):
    """
    Register a user, log in, and return `Authorization` headers.

    Usage:
        headers = await register_and_login("ada@example.com")
    """

    async def _register_and_login(email: str, password: str = "correct-horse") -> dict:
        response = await test_client.post(
            "/api/user/", json={"email": email, "password": password}
        )
        assert response.status_code == 201, response.text
        response = await test_client.post(
            "/api/user/login", json={"email": email, "password": password}
        )
        assert response.status_code == 200, response.text
        return {"Authorization": f"Bearer {response.json()['access_token']}"}

    return _register_and_login


@pytest.fixture
def mock_db_session():
    """
    A mock AsyncSession.

    Usage:
        mock_db_session.execute.return_value.scalar_one_or_none.return_value = post
        result = await post_service.delete(mock_db_session, user, post_id)
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.delete = AsyncMock()
    session.get = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session
