"""
Postboard Backend — Database Handle and Session Management
============================================================

What:  Async SQLAlchemy engine + session factory wrapped in an explicit
       `Database` handle, and the FastAPI dependency that hands out sessions.
Why:   There is no module-level engine. `create_app()` builds one `Database`
       from its `Settings`, stores it on `app.state.database`, and every
       request reaches it through `get_db_session`. Tests build their own.
How:   Session-per-request: rollback when the handler raises, always close.
       Services commit their own writes before returning; the teardown of a
       yield dependency runs after the response is sent, so a commit left
       to it could fail where the client never hears about it.

Collections:
    users:  registered accounts (models/user.py)
    posts:  blog posts owned by a user (models/post.py)
    Both are created by `Database.create_all()` on first boot, by
    postboard/init_db.py, or by the Alembic migration.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator, AsyncIterator

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from postboard.config import Settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Base class for all ORM models; its metadata drives create_all and Alembic."""
    pass


class Database:
    """
    Owns the engine (and therefore the connection pool) for one application.

    Attributes:
        engine:          AsyncEngine bound to settings.database_url
        session_factory: async_sessionmaker producing AsyncSession objects
    """

    def __init__(self, settings: Settings):
        engine_kwargs = {
            "pool_pre_ping": settings.db_pool_pre_ping,
            "echo": settings.log_level == "DEBUG",
        }
        # SQLite (tests, local runs) does not take server pool sizing
        if not settings.is_sqlite:
            engine_kwargs.update(
                pool_size=settings.db_pool_size,
                max_overflow=settings.db_max_overflow,
                pool_recycle=3600,
            )

        self.engine: AsyncEngine = create_async_engine(settings.database_url, **engine_kwargs)

        # expire_on_commit=False: response models are built from ORM objects
        # after the transaction has been committed
        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """
        Open one session; commit on success, roll back on any error.

        Usage:
            async with database.session() as db:
                db.add(obj)

        Raises:
            Whatever the caller raised, after rollback, so the error layer
            can build the response.
        """
        async with self.session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise
            finally:
                await session.close()

    async def create_all(self) -> None:
        """Create the `users` and `posts` collections if they do not exist."""
        # Registers the models on Base.metadata
        from postboard import models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Collections ready: %s", ", ".join(sorted(Base.metadata.tables)))

    async def ping(self) -> bool:
        """Lightweight connectivity probe used by the readiness endpoint."""
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.warning("Database ping failed: %s", str(e))
            return False

    async def dispose(self) -> None:
        """Close every pooled connection (application shutdown)."""
        await self.engine.dispose()


# ── Dependencies ──────────────────────────────────────────────────────────
def get_database(request: Request) -> Database:
    """Return the Database handle installed by create_app()."""
    return request.app.state.database


async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency providing one database session per request.

    Example usage in a route:
        @router.get("/myPosts")
        async def my_posts(db: AsyncSession = Depends(get_db_session)):
            ...
    """
    async with get_database(request).session() as session:
        yield session
