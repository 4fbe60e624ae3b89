"""Database engine and session management."""
import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from ..config import DatabaseSettings
from ..models.base import Base

logger = logging.getLogger(__name__)


class Database:
    """Explicitly owned engine and session factory.

    Created once by the application factory, opened on startup with
    :meth:`connect` and released on shutdown with :meth:`dispose`.
    """

    def __init__(
        self,
        url: str,
        echo: bool = False,
        pool_size: int = 10,
        max_overflow: int = 20,
    ):
        self.url = url
        self.echo = echo
        self.pool_size = pool_size
        self.max_overflow = max_overflow
        self._engine: Optional[AsyncEngine] = None
        self._session_factory: Optional[async_sessionmaker[AsyncSession]] = None

    @classmethod
    def from_settings(cls, database_settings: DatabaseSettings) -> "Database":
        return cls(
            url=database_settings.url,
            echo=database_settings.echo,
            pool_size=database_settings.pool_size,
            max_overflow=database_settings.max_overflow,
        )

    @property
    def is_connected(self) -> bool:
        return self._engine is not None

    @property
    def engine(self) -> AsyncEngine:
        if self._engine is None:
            raise RuntimeError("Database is not connected")
        return self._engine

    def _engine_options(self) -> dict:
        if not self.url.startswith("sqlite"):
            return {
                "pool_size": self.pool_size,
                "max_overflow": self.max_overflow,
                "pool_pre_ping": True,
                "pool_recycle": 3600,  # 1 hour
            }
        if ":memory:" in self.url or self.url.rstrip("/").endswith(":"):
            # One shared connection, otherwise every session sees an empty database
            return {"poolclass": StaticPool}
        return {}

    async def connect(self) -> None:
        """Create the engine and session factory."""
        if self._engine is not None:
            return

        self._engine = create_async_engine(
            self.url,
            echo=self.echo,
            **self._engine_options(),
        )
        self._session_factory = async_sessionmaker(
            self._engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )
        logger.info("Database engine created")

    async def init_models(self) -> None:
        """Create tables that do not exist yet."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

        logger.info("Database tables created")

    async def dispose(self) -> None:
        """Close the database connections."""
        if self._engine is not None:
            await self._engine.dispose()
            self._engine = None
            self._session_factory = None
            logger.info("Database connections closed")

    def session(self) -> AsyncSession:
        """Open a new session. The caller owns closing it."""
        if self._session_factory is None:
            raise RuntimeError("Database is not connected")
        return self._session_factory()

    @asynccontextmanager
    async def transaction(self) -> AsyncGenerator[AsyncSession, None]:
        """Session scope that commits on success and rolls back on error."""
        session = self.session()
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()
