"""
Playlist API: Test Configuration (conftest.py)
=================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped, fresh per test):
    ├── database:         in-memory Database with the schema created
    │   ├── db_session:   AsyncSession committing on exit (service tests)
    │   └── app:          FastAPI app bound to that database
    │       └── test_client: HTTPX AsyncClient talking to the app in-process
    ├── mock_db_session:  AsyncMock session (no database at all)
    └── sample_song_data / sample_playlist_data: request bodies
"""

import os

# Override settings for testing BEFORE any app imports
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["LOG_LEVEL"] = "WARNING"

from unittest.mock import AsyncMock, MagicMock  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from playlist_api.database import Database  # noqa: E402
from playlist_api.main import create_app  # noqa: E402

IN_MEMORY_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture
async def database():
    """
    A fresh, empty in-memory database for one test.

    ASGITransport does not run the app lifespan, so the schema is created
    here instead, and the engine is disposed at teardown.
    """
    db = Database(IN_MEMORY_URL)
    await db.create_schema()
    yield db
    await db.dispose()


@pytest_asyncio.fixture
async def db_session(database):
    """
    A unit-of-work session on the test database.

    Usage:
        async def test_get_song(db_session):
            await song_service.get_song(db_session, 1)
    """
    async with database.session() as session:
        yield session


@pytest.fixture
def app(database):
    return create_app(database=database)


@pytest_asyncio.fixture
async def test_client(app):
    """
    Async HTTP client for endpoint tests.

    Usage:
        async def test_list(test_client):
            response = await test_client.get("/songs")
            assert response.status_code == 200
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def mock_db_session():
    """
    A mock async session for tests that must not touch a database.

    Usage:
        mock_db_session.get.return_value = None
        mock_db_session.flush.side_effect = IntegrityError(...)
    """
    session = AsyncMock()
    session.get = AsyncMock(return_value=None)
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.delete = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def sample_song_data():
    return {"id": 1, "name": "Test Song", "artist": "Test Artist"}


@pytest.fixture
def sample_playlist_data():
    return {"id": 1, "name": "P", "songs": [1, 2]}
