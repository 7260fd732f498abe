from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
    AsyncEngine,
)

from app.core.config import settings
from app.core.models import Base


class DatabaseManager:
    """
    Manages the SQLAlchemy AsyncEngine and the AsyncSession factory.

    The URL decides the backend: postgresql+asyncpg in production,
    sqlite+aiosqlite for local runs.
    """

    def __init__(self, db_url: str):
        """
        Args:
            db_url (str): The connection string for the asynchronous database driver.
        """
        self._engine: AsyncEngine = create_async_engine(
            db_url,
            pool_pre_ping=True,
            # Set to True only for debugging generated SQL.
            echo=settings.DEBUG,
        )

        self._async_session_factory: async_sessionmaker[AsyncSession] = async_sessionmaker(
            class_=AsyncSession,
            expire_on_commit=False,  # Repositories validate instances after commit.
            autoflush=False,
            bind=self._engine,
        )

    @property
    def async_session_factory(self) -> async_sessionmaker[AsyncSession]:
        return self._async_session_factory

    async def create_all(self):
        """Create missing tables for every model registered on Base."""
        # Registers the mapped classes on Base.metadata
        import app.api.v1.models  # noqa: F401

        async with self._engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def disconnect(self):
        await self._engine.dispose()


db_manager = DatabaseManager(settings.ASYNC_DATABASE_URL)


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides one database session per request.

    Yields:
        AsyncSession: An asynchronous SQLAlchemy session bound to the database.
    """
    async with db_manager.async_session_factory() as session:
        yield session
