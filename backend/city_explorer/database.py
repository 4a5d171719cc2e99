"""
City Explorer Backend — Database Session Management
=====================================================

What:  Async SQLAlchemy engine, session factory, declarative base and the
       per-request session dependency.
How:   The engine owns a connection pool for the whole process. Each request
       gets its own AsyncSession, committed when the handler returns and
       rolled back when it raises.
When:  Engine is created at import; disposed by the lifespan hook on shutdown.

Connection lifecycle:
    open   → engine creation (lazy connect on first use)
    query  → get_db_session() per request
    close  → dispose_engine() at shutdown
"""

import logging
from typing import AsyncGenerator

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from city_explorer.config import settings
from city_explorer.exceptions import StoreError

logger = logging.getLogger(__name__)


# ── Engine Configuration ──────────────────────────────────────────────────
engine = create_async_engine(
    settings.database_url,
    pool_size=settings.db_pool_size,
    max_overflow=settings.db_max_overflow,
    pool_pre_ping=settings.db_pool_pre_ping,
    pool_recycle=3600,
    echo=settings.log_level == "DEBUG",
)

# expire_on_commit=False keeps Location attributes readable after commit
async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


class Base(DeclarativeBase):
    """Base class for all ORM models; its metadata drives Alembic."""
    pass


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency providing one database session per request.

    Flow:
        1. Open a session from the factory
        2. Yield it to the route handler
        3. Commit on success, roll back on any exception
        4. Always close (returns the connection to the pool)

    A failed commit is raised as StoreError, like any other cache write.

    Example:
        @router.get("/location")
        async def get_location(db: AsyncSession = Depends(get_db_session)):
            ...
    """
    async with async_session_factory() as session:
        try:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise

            try:
                await session.commit()
            except SQLAlchemyError as e:
                logger.error("Session commit failed: %s", str(e))
                await session.rollback()
                raise StoreError(context={"operation": "commit", "error_type": type(e).__name__}) from e
        finally:
            await session.close()


# ── Lifecycle Helpers ─────────────────────────────────────────────────────
async def dispose_engine() -> None:
    """Closes every pooled connection. Called once during shutdown."""
    await engine.dispose()
