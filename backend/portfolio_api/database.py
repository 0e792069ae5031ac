"""
Portfolio API - Database Session Management
============================================

What:  Async SQLAlchemy engine, session factory, and FastAPI dependency.
How:   Creates an async engine, provides a session dependency that rolls back on
       error (services commit their own writes), and translates driver
       failures into application exceptions.
Who:   Used by route handlers via FastAPI's dependency injection system.
When:  Engine is created at module import; sessions are created per-request.

Each collection of the portfolio (resources, projects, profile, messages) is
one table. PostgreSQL (asyncpg) is the deployment target; SQLite (aiosqlite)
is used by the test suite.
"""

import logging
from typing import Any, AsyncGenerator, Dict

from sqlalchemy import exc as sa_exc
from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import NullPool

from portfolio_api.config import settings
from portfolio_api.exceptions import DatabaseError, StorageUnavailableError

logger = logging.getLogger(__name__)


def _engine_options() -> Dict[str, Any]:
    options: Dict[str, Any] = {"echo": settings.log_level == "DEBUG"}
    if settings.is_sqlite:
        # SQLite connections are bound to the event loop that opened them
        options["poolclass"] = NullPool
    else:
        options.update(
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_pre_ping=settings.db_pool_pre_ping,
            pool_recycle=3600,
        )
    return options


# ── Engine Configuration ──────────────────────────────────────────────────
engine = create_async_engine(settings.database_url, **_engine_options())

# ── Session Factory ───────────────────────────────────────────────────────
# expire_on_commit=False: records stay readable after the request commits
async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy ORM models (shared metadata for Alembic)."""
    pass


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    How it works:
        1. Creates a new session from the factory
        2. Yields it to the route handler
        3. On error: rolls back the transaction and re-raises
        4. Always: closes the session (returns connection to pool)

    Commits happen in the service layer, inside the handler. The teardown of a
    yield dependency may run after the response has been sent, so a commit
    here could fail after the client was already told the write succeeded.
    """
    async with async_session_factory() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


# ── Error Translation ─────────────────────────────────────────────────────
def is_connection_error(error: sa_exc.SQLAlchemyError) -> bool:
    """True when the failure means the database could not be reached."""
    if isinstance(error, (sa_exc.OperationalError, sa_exc.InterfaceError, sa_exc.TimeoutError)):
        return True
    return isinstance(error, sa_exc.DBAPIError) and error.connection_invalidated


def translate_db_error(error: sa_exc.SQLAlchemyError, **context: Any):
    """
    Map a SQLAlchemy failure to the application exception hierarchy.

    Returns (does not raise) so callers can write `raise translate_db_error(e) from e`.
    Connectivity failures become StorageUnavailableError (503); everything
    else becomes DatabaseError (500). Driver details go to the log only.
    """
    context["error_type"] = type(error).__name__
    if is_connection_error(error):
        logger.error("Database unreachable: %s | Context: %s", str(error), context)
        return StorageUnavailableError(context=context)
    logger.error("Database statement failed: %s | Context: %s", str(error), context)
    return DatabaseError(context=context)


# ── Lifecycle Helpers ─────────────────────────────────────────────────────
async def create_tables() -> None:
    """Create any missing tables for the registered models."""
    # Models register themselves on Base.metadata when imported
    from portfolio_api.models import message, profile, project, resource  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def ping() -> bool:
    """Run SELECT 1 against the database; False when it cannot be reached."""
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        return True
    except (sa_exc.SQLAlchemyError, OSError) as e:
        logger.warning("Database ping failed: %s", str(e))
        return False


async def dispose_engine() -> None:
    """Gracefully close all connections in the pool (application shutdown)."""
    await engine.dispose()
