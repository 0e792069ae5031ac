"""
Portfolio API - Test Configuration (conftest.py)
=================================================

What:  Shared pytest fixtures for the test suite.
How:   Points the app at a throwaway SQLite database (aiosqlite) and upload
       directory BEFORE any portfolio_api import, then provides sessions,
       an HTTP client and sample data.

Fixture Hierarchy (all function-scoped):
    ├── database:         creates all tables, drops them afterwards
    ├── db_session:       AsyncSession on the test database
    ├── client:           HTTPX AsyncClient wired to the FastAPI app
    ├── mock_db_session:  AsyncMock session for failure injection
    └── sample_pdf_bytes: small file content for upload tests
"""

import os
import tempfile
from unittest.mock import AsyncMock, MagicMock

_TEST_ROOT = tempfile.mkdtemp(prefix="portfolio_api_test_")

# Must run before portfolio_api.config is imported anywhere
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_TEST_ROOT}/test.db"
os.environ["UPLOAD_DIR"] = os.path.join(_TEST_ROOT, "uploads")
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["CORS_ORIGINS"] = "*"

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy import func, select  # noqa: E402

from portfolio_api.database import Base, async_session_factory, create_tables, engine  # noqa: E402


@pytest_asyncio.fixture
async def database():
    await create_tables()
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest_asyncio.fixture
async def db_session(database):
    async with async_session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(database):
    """
    HTTPX AsyncClient routed straight into the ASGI app (no server).

    Usage:
        async def test_list(client):
            response = await client.get("/projects")
            assert response.status_code == 200
    """
    from portfolio_api.main import app

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.fixture
def upload_dir():
    return os.environ["UPLOAD_DIR"]


@pytest.fixture
def mock_db_session():
    """
    An AsyncMock standing in for AsyncSession.

    Usage:
        mock_db_session.execute.side_effect = OperationalError("SELECT", {}, Exception("down"))
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.get = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.delete = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def sample_pdf_bytes():
    return b"%PDF-1.4\n1 0 obj << /Type /Catalog >> endobj\ntrailer << /Root 1 0 R >>\n%%EOF\n"


async def count_rows(model) -> int:
    """Count rows of `model` in a fresh session (direct store inspection)."""
    async with async_session_factory() as session:
        result = await session.execute(select(func.count()).select_from(model))
        return result.scalar_one()
