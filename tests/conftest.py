"""
Notes Backend: Test Configuration (conftest.py)
===============================================

What:  Shared pytest fixtures for the whole suite.
How:   Environment is pointed at an in-memory SQLite database before any
       notesapp module is imported; each test that needs a database gets a
       fresh in-memory engine with the schema created.

Fixture Hierarchy:
    Database (real SQLite, per test):
    ├── db_engine:          in-memory aiosqlite engine with tables created
    ├── db_session:         AsyncSession bound to db_engine
    └── note_store:         SqlNoteStore over db_session

    Doubles:
    ├── mock_store:         AsyncMock implementing NoteStore
    └── mock_service:       AsyncMock implementing NoteService

    HTTP:
    ├── api_client:         AsyncClient, NoteService replaced by mock_service
    └── integration_client: AsyncClient, real service + store on db_engine
"""

import os

# Must run before notesapp.config is imported anywhere
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["AUTO_CREATE_SCHEMA"] = "false"

from datetime import datetime, timezone
from typing import AsyncGenerator
from unittest.mock import AsyncMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from notesapp.database import Base, get_db_session
from notesapp.dependencies import get_note_service
from notesapp.domain import Note, NoteTag
from notesapp.main import create_app
from notesapp.models import note as note_models  # noqa: F401
from notesapp.services.note_service import NoteService
from notesapp.store.base import NoteStore
from notesapp.store.sql import SqlNoteStore

CREATED_AT = datetime(2025, 2, 27, tzinfo=timezone.utc)


# ══════════════════════════════════════════════════════════════════════════
# Database Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def db_engine():
    """
    Fresh in-memory database per test.

    StaticPool keeps a single connection, so every session sees the same
    in-memory database.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
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


@pytest.fixture
def note_store(db_session) -> SqlNoteStore:
    return SqlNoteStore(db_session)


# ══════════════════════════════════════════════════════════════════════════
# Test Doubles
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def mock_store():
    """
    AsyncMock standing in for a NoteStore.

    Usage:
        mock_store.find_by_id.return_value = make_note(...)
        await NoteService(mock_store).get_by_id("123")
    """
    return AsyncMock(spec=NoteStore)


@pytest.fixture
def mock_service():
    return AsyncMock(spec=NoteService)


def make_note(
    note_id="123",
    title="Title",
    text="Text",
    tags=None,
    created_date=CREATED_AT,
) -> Note:
    return Note(
        id=note_id,
        title=title,
        text=text,
        tags=set(tags) if tags else set(),
        created_date=created_date,
    )


@pytest.fixture
def note_factory():
    """Builds domain Notes: note_factory(note_id="1", tags={NoteTag.BUSINESS})."""
    return make_note


@pytest.fixture
def sample_note() -> Note:
    return make_note(tags={NoteTag.PERSONAL})


# ══════════════════════════════════════════════════════════════════════════
# HTTP Clients
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def api_client(mock_service):
    """
    HTTP client against an app whose NoteService is `mock_service`.

    raise_app_exceptions=False: unhandled errors come back as the 500
    response built by the catch-all handler instead of being re-raised.
    """
    app = create_app()
    app.dependency_overrides[get_note_service] = lambda: mock_service
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture
async def integration_client(db_engine):
    """HTTP client against the real service and SQL store on `db_engine`."""
    factory = async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)

    async def override_db_session() -> AsyncGenerator[AsyncSession, None]:
        async with factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app = create_app()
    app.dependency_overrides[get_db_session] = override_db_session
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
