"""Pytest configuration and fixtures."""

import os
from collections.abc import AsyncGenerator
from unittest.mock import AsyncMock, MagicMock

# Keep the app off the production database during tests
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from meetingnotes.api.dependencies import get_mailer, get_summarizer
from meetingnotes.infrastructure.database import get_session
from meetingnotes.infrastructure.mailer import Mailer
from meetingnotes.infrastructure.models import Base
from meetingnotes.main import app
from meetingnotes.repositories.summary_repo import SummaryRepository
from meetingnotes.services.summarizer import SummarizerService

# Test database URL (use SQLite for tests)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
async def test_engine():
    """Create test database engine."""
    engine = create_async_engine(TEST_DATABASE_URL, echo=False)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
async def test_session(test_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create test database session."""
    session_factory = async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with session_factory() as session:
        yield session


@pytest.fixture
def summary_repo(test_session) -> SummaryRepository:
    """Repository bound to the test session."""
    return SummaryRepository(test_session)


@pytest.fixture
def fake_summarizer() -> MagicMock:
    """Summarizer double returning a fixed summary."""
    summarizer = MagicMock(spec=SummarizerService)
    summarizer.summarize = AsyncMock(return_value="- Budget approved")
    return summarizer


@pytest.fixture
def fake_mailer() -> MagicMock:
    """Mailer double that accepts every message."""
    mailer = MagicMock(spec=Mailer)
    mailer.send = AsyncMock(return_value=None)
    return mailer


@pytest.fixture
async def client(test_session, fake_summarizer, fake_mailer) -> AsyncGenerator[AsyncClient, None]:
    """Create async test client wired to the test database and client doubles."""

    async def _session_override() -> AsyncGenerator[AsyncSession, None]:
        yield test_session

    app.dependency_overrides[get_session] = _session_override
    app.dependency_overrides[get_summarizer] = lambda: fake_summarizer
    app.dependency_overrides[get_mailer] = lambda: fake_mailer

    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()
