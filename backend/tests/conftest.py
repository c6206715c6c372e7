"""
QuickNotes — Test Configuration (conftest.py)
==============================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── mock_db_session: Mock AsyncSession (no real DB needed)
    ├── db_schema: notes table created in a temp SQLite file, dropped afterwards
    ├── db_session / store: real AsyncSession and NoteStore on that file
    ├── test_client: HTTPX AsyncClient talking to the API app
    └── ui_client: HTTPX AsyncClient talking to the browser client app,
                   whose API calls are routed into the API app in-process
"""

import os
import tempfile
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient


# ══════════════════════════════════════════════════════════════════════════
# Environment Setup
# ══════════════════════════════════════════════════════════════════════════

# Must run before any quicknotes import: settings and the engine are built
# at import time
_TEST_DB_DIR = tempfile.mkdtemp(prefix="quicknotes_test_")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_TEST_DB_DIR}/test.db"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["API_BASE_URL"] = "http://api.test"


# ══════════════════════════════════════════════════════════════════════════
# Function-Scoped Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        async def test_list_failure(mock_db_session):
            mock_db_session.execute.side_effect = OperationalError(...)
            await NoteStore(mock_db_session).list()
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.get = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.delete = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def sample_note_data():
    """Field values of a stored note, as the ORM would hold them."""
    now = datetime.now(timezone.utc)
    return {
        "id": uuid4(),
        "title": "Shopping",
        "content": "Milk, eggs, bread",
        "category": "Personal",
        "created_at": now,
        "updated_at": now,
    }


@pytest_asyncio.fixture
async def db_schema():
    """Creates the schema for one test and tears it down afterwards."""
    from quicknotes.database import Base, engine, init_models

    await init_models()
    yield
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    # Pooled aiosqlite connections belong to this test's event loop
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(db_schema):
    from quicknotes.database import async_session_factory

    async with async_session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def store(db_session):
    from quicknotes.services.note_store import NoteStore

    return NoteStore(db_session)


@pytest_asyncio.fixture
async def test_client(db_schema):
    """
    HTTPX AsyncClient routed straight into the API app.

    raise_app_exceptions=False lets tests see the catch-all handler's 500
    response instead of the re-raised exception.
    """
    from quicknotes.main import app

    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def api_transport(db_schema):
    """Transport that delivers NotesAPIClient calls to the API app in-process."""
    from quicknotes.main import app

    return ASGITransport(app=app)


@pytest_asyncio.fixture
async def ui_client(api_transport):
    """HTTPX AsyncClient for the browser client app, backed by the real API."""
    from quicknotes.client.web import create_client_app

    ui_app = create_client_app(api_base_url="http://api.test", transport=api_transport)
    transport = ASGITransport(app=ui_app)
    async with AsyncClient(transport=transport, base_url="http://ui.test") as client:
        yield client
