"""Async database configuration and session management."""

import asyncio

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import ClassVar

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from src.infrastructure.config.settings import get_settings


def to_async_url(database_url: str) -> str:
    """Rewrite a postgresql:// URL to use the asyncpg driver."""
    if database_url.startswith("postgresql://"):
        return database_url.replace("postgresql://", "postgresql+asyncpg://", 1)
    if database_url.startswith("postgres://"):
        return database_url.replace("postgres://", "postgresql+asyncpg://", 1)
    return database_url


class AsyncDatabase:
    """Async database manager.

    Engines are cached per event loop: an asyncpg connection pool cannot be
    shared between loops, and each CLI invocation runs its own loop.
    """

    _engines: ClassVar[dict[int, AsyncEngine]] = {}
    _session_makers: ClassVar[dict[int, async_sessionmaker[AsyncSession]]] = {}

    def __init__(self, database_url: str | None = None):
        """Initialize async database manager.

        Args:
            database_url: Overrides DATABASE_URL from the settings
        """
        self._async_url = to_async_url(
            database_url or get_settings().get_database_url()
        )

    def _get_engine_and_session_maker(
        self,
    ) -> tuple[AsyncEngine, async_sessionmaker[AsyncSession]]:
        """Return the engine and session maker of the running event loop."""
        try:
            loop_id = id(asyncio.get_running_loop())
        except RuntimeError:
            loop_id = 0

        if loop_id not in self._engines:
            engine = create_async_engine(self._async_url, echo=False)
            session_maker = async_sessionmaker(
                engine, class_=AsyncSession, expire_on_commit=False
            )
            self._engines[loop_id] = engine
            self._session_makers[loop_id] = session_maker

        return self._engines[loop_id], self._session_makers[loop_id]

    @property
    def engine(self) -> AsyncEngine:
        engine, _ = self._get_engine_and_session_maker()
        return engine

    @property
    def async_session_maker(self) -> async_sessionmaker[AsyncSession]:
        _, session_maker = self._get_engine_and_session_maker()
        return session_maker

    @asynccontextmanager
    async def get_session(self) -> AsyncGenerator[AsyncSession]:
        """Get an async database session.

        Repositories commit after each write, so nothing is committed here;
        an exception rolls back whatever is still pending.

        Yields:
            AsyncSession: Database session
        """
        async with self.async_session_maker() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise
            finally:
                await session.close()

    async def dispose(self) -> None:
        """Dispose the engine of the running event loop."""
        try:
            loop_id = id(asyncio.get_running_loop())
        except RuntimeError:
            loop_id = 0
        engine = self._engines.pop(loop_id, None)
        self._session_makers.pop(loop_id, None)
        if engine is not None:
            await engine.dispose()

