"""
Boutique Backend — Database Session Management
===============================================

What:  Async SQLAlchemy engine construction, session factory and the
       per-request session dependency.
How:   create_engine_from_settings() builds an engine with connection pooling;
       the application factory stores the engine and its session factory on
       app.state, and get_db_session() hands each request its own session that
       commits on success and rolls back on error.
Who:   Used by route handlers via FastAPI's dependency injection system.

Connection Pooling:
    pool_size / max_overflow come from settings (default 10 + 5).
    pool_pre_ping validates connections before use.
    pool_recycle=3600 recycles connections every hour.
    SQLite (used by the test suite) does not take pool sizing arguments.
"""

from typing import AsyncGenerator

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from boutique.config import Settings


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Shares a single metadata object, which Alembic reads for migrations and
    the test suite uses for create_all.
    """
    pass


# ── Engine Configuration ──────────────────────────────────────────────────
def create_engine_from_settings(settings: Settings) -> AsyncEngine:
    """Create the async engine that owns the connection pool."""
    kwargs = {
        "pool_pre_ping": settings.db_pool_pre_ping,
        "echo": settings.log_level == "DEBUG",
    }
    if not settings.is_sqlite:
        kwargs.update(
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_recycle=3600,
        )
    return create_async_engine(settings.sqlalchemy_url, **kwargs)


# ── Session Factory ───────────────────────────────────────────────────────
# expire_on_commit=False: attributes stay readable after the request's commit
def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    How it works:
        1. Creates a new session from the factory on app.state
        2. Yields it to the route handler (the handler performs queries)
        3. On success: commits the transaction
        4. On error: rolls back the transaction
        5. Always: closes the session (returns connection to pool)

    Example usage in a route:
        @router.get("/products")
        async def list_products(db: AsyncSession = Depends(get_db_session)):
            ...
    """
    session_factory = request.app.state.session_factory
    async with session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


# ── Lifecycle Helpers ─────────────────────────────────────────────────────
async def ping(engine: AsyncEngine) -> None:
    """Run SELECT 1. Raises whatever the driver raises when the store is unreachable."""
    async with engine.connect() as conn:
        await conn.execute(text("SELECT 1"))


async def dispose_engine(engine: AsyncEngine) -> None:
    """
    What:  Gracefully closes all connections in the pool.
    When:  Called during application shutdown (lifespan handler).
    """
    await engine.dispose()
