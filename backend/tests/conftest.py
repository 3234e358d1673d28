"""
Jotter Backend: Test Configuration (conftest.py)
=================================================

What:  Shared pytest fixtures for the test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped):
    ├── mock_db_session:  AsyncMock session (no database)
    ├── mock_repository:  AsyncMock NoteRepository
    ├── db_engine:        in-memory SQLite engine with the schema created
    ├── db_session:       session bound to db_engine
    ├── app:              fresh FastAPI app using db_engine
    └── test_client:      HTTPX AsyncClient talking to `app`
"""

import os

# Must be set before anything imports jotter.config
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["LOG_LEVEL"] = "WARNING"

from datetime import datetime, timezone  # noqa: E402
from typing import AsyncGenerator  # noqa: E402
from unittest.mock import AsyncMock, MagicMock  # noqa: E402
from uuid import uuid4  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from jotter.database import Base, get_db_session  # noqa: E402
from jotter.models.note import Note  # noqa: E402
from jotter.repositories.note_repository import NoteRepository  # noqa: E402


@pytest.fixture
def mock_db_session():
    """
    A mock async database session.

    Usage:
        async def test_x(mock_db_session):
            result = await service.list_notes(mock_db_session)
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.refresh = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def mock_repository():
    """A NoteRepository whose every store call is an AsyncMock."""
    repo = MagicMock(spec=NoteRepository)
    repo.find_all = AsyncMock(return_value=[])
    repo.find_by_id = AsyncMock(return_value=None)
    repo.find_matching = AsyncMock(return_value=[])
    repo.create = AsyncMock()
    repo.update_by_id = AsyncMock()
    return repo


@pytest.fixture
def make_note():
    """Factory for detached Note instances (never added to a session)."""

    def _make(title="Shopping", content="milk, eggs", **overrides):
        now = datetime(2026, 1, 15, 12, 0, tzinfo=timezone.utc)
        fields = {
            "id": uuid4(),
            "title": title,
            "content": content,
            "created_at": now,
            "updated_at": now,
        }
        fields.update(overrides)
        return Note(**fields)

    return _make


@pytest_asyncio.fixture
async def db_engine():
    """In-memory SQLite shared by every session of one test."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(db_engine) -> AsyncGenerator[AsyncSession, None]:
    factory = async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        yield session


@pytest_asyncio.fixture
async def app(db_engine):
    """A fresh app (own rate limiter) wired to the test database."""
    from jotter.main import create_app

    application = create_app()
    factory = async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)

    async def _test_session() -> AsyncGenerator[AsyncSession, None]:
        async with factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    application.dependency_overrides[get_db_session] = _test_session
    return application


@pytest_asyncio.fixture
async def test_client(app):
    """
    HTTPX AsyncClient routed straight into the ASGI app.

    Usage:
        async def test_list(test_client):
            response = await test_client.get("/notes")
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
