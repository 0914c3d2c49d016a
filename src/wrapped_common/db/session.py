"""Database session management via DatabaseManager class."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Self

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from wrapped_common.config.database import DatabaseSettings


class DatabaseManager:
    """Owns the async engine and hands out transactional sessions.

    Usage:
        db = DatabaseManager.from_env()

        async with db.session() as session:
            await session.execute(query)

        # FastAPI
        app.dependency_overrides[db.dependency] = ...

        await db.dispose()
    """

    def __init__(self, settings: DatabaseSettings) -> None:
        self._settings = settings
        self._engine = create_async_engine(
            settings.database_url,
            echo=settings.echo,
            poolclass=NullPool if settings.use_null_pool else None,
            pool_pre_ping=settings.pool_pre_ping,
        )
        self._session_factory = async_sessionmaker(
            self._engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )

    @classmethod
    def from_env(cls) -> Self:
        """Create a DatabaseManager from environment variables."""
        return cls(DatabaseSettings())

    @classmethod
    def from_url(cls, database_url: str) -> Self:
        return cls(DatabaseSettings(database_url=database_url))

    @property
    def engine(self) -> AsyncEngine:
        return self._engine

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession]:
        """Yield a session that commits on success and rolls back on error."""
        async with self._session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise
            finally:
                await session.close()

    async def dependency(self) -> AsyncGenerator[AsyncSession]:
        """FastAPI Depends() compatible session provider."""
        async with self.session() as session:
            yield session

    async def dispose(self) -> None:
        await self._engine.dispose()
