"""
Produtos API — Database Handle and Session Management
======================================================

What:  Async SQLAlchemy engine, session factory, and FastAPI dependency.
Why:   Centralizes all database connection logic in one place.
How:   A `Database` object owns the engine (and therefore the connection pool)
       plus a session factory. It is built once at startup and stored on
       `app.state.database`; handlers reach it through `get_db_session`.
Who:   Built by the app factory (or by tests with an in-memory SQLite URL).
When:  One handle per process; one session per request.

Why an explicit handle instead of a module-level engine:
    Routes never import an engine. The app factory receives whatever
    `Database` it is given, so tests run the real SQL against
    `sqlite+aiosqlite://` without patching globals.

Connection Pooling:
    PostgreSQL engines use SQLAlchemy's QueuePool sized from settings, with
    pre-ping (catches connections killed by a DB restart) and hourly recycle.
    Pooling, timeouts and reconnects are entirely SQLAlchemy's/asyncpg's.
"""

import logging
from typing import Any, AsyncGenerator

from fastapi import Request
from sqlalchemy import event, func, select
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from produtos_api.config import Settings

logger = logging.getLogger(__name__)


# ── Base Model ────────────────────────────────────────────────────────────
class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Shares a single metadata object between the models, `Database.create_all`
    and Alembic's autogenerate.
    """
    pass


class Database:
    """
    Storage handle: an async engine plus the session factory bound to it.

    Attributes:
        engine:          AsyncEngine managing the connection pool
        session_factory: Creates one AsyncSession per request
    """

    def __init__(self, engine: AsyncEngine):
        self.engine = engine
        # expire_on_commit=False: returned rows stay readable after commit
        # without a second round-trip
        self.session_factory = async_sessionmaker(
            engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )
        event.listen(engine.sync_engine, "connect", _log_connect)

    @classmethod
    def from_url(cls, url: str, **engine_kwargs: Any) -> "Database":
        """Build a handle for an arbitrary SQLAlchemy URL."""
        return cls(create_async_engine(url, **engine_kwargs))

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        """
        What:  Build the production handle from environment configuration.
        How:   PostgreSQL pool options are only passed for pooled drivers;
               SQLite URLs (local runs) use the driver's default pool.
        """
        url = settings.sqlalchemy_url
        engine_kwargs: dict = {
            # Echo SQL only when debugging; it is noisy otherwise
            "echo": settings.log_level == "DEBUG",
        }
        if not url.startswith("sqlite"):
            engine_kwargs.update(
                pool_size=settings.db_pool_size,
                max_overflow=settings.db_max_overflow,
                pool_pre_ping=settings.db_pool_pre_ping,
                pool_recycle=3600,
            )
        return cls.from_url(url, **engine_kwargs)

    async def now(self) -> Any:
        """
        What:  Liveness probe; asks the database for its current time.
        Returns: The server timestamp (datetime on PostgreSQL, string on SQLite).
        Raises:  Whatever the driver raises when the database is unreachable.
        """
        async with self.engine.connect() as conn:
            result = await conn.execute(select(func.now()))
            return result.scalar_one()

    async def create_all(self) -> None:
        """Create every table known to `Base.metadata` (tests, local runs)."""
        # Imported for its side effect of registering the table on Base
        from produtos_api.models import produto  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def dispose(self) -> None:
        """
        What:  Gracefully closes all connections in the pool.
        When:  Called during application shutdown (lifespan handler).
        """
        await self.engine.dispose()


def _log_connect(dbapi_connection, connection_record) -> None:
    logger.info("Connected to database")


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    How it works:
        1. Creates a new session from the app's Database handle
        2. Yields it to the route handler (services commit their own writes)
        3. On error: rolls back so a failed statement leaves nothing behind
        4. Always: closes the session (returns connection to pool)

    Example usage in a route:
        @router.get("/produtos")
        async def list_produtos(db: AsyncSession = Depends(get_db_session)):
            ...
    """
    database: Database = request.app.state.database
    async with database.session_factory() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise  # Re-raise so the global error handler can respond
        finally:
            await session.close()
