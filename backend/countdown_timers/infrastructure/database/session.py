"""Database handle — owns the async engine and session factory.

One ``Database`` is constructed per application, connected in the FastAPI
lifespan and disposed when the lifespan exits. Nothing here is module-global.
"""

import asyncio
import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from countdown_timers.domain.exceptions import StoreUnavailableError
from countdown_timers.infrastructure.database.base import Base

logger = logging.getLogger(__name__)


def _get_async_url(url: str) -> str:
    """Convert a sync SQLAlchemy URL to an async one."""
    if url.startswith("sqlite:///"):
        return url.replace("sqlite:///", "sqlite+aiosqlite:///", 1)
    if url.startswith("postgresql://"):
        return url.replace("postgresql://", "postgresql+asyncpg://", 1)
    return url


class Database:
    """Explicitly opened and closed persistence resource."""

    def __init__(
        self,
        url: str,
        *,
        echo: bool = False,
        connect_retries: int = 2,
        retry_delay: float = 1.0,
    ):
        self._url = _get_async_url(url)
        self._echo = echo
        self._connect_retries = connect_retries
        self._retry_delay = retry_delay
        self._engine: AsyncEngine | None = None
        self._session_factory: async_sessionmaker[AsyncSession] | None = None

    @property
    def url(self) -> str:
        return self._url

    @property
    def is_connected(self) -> bool:
        return self._engine is not None

    @property
    def engine(self) -> AsyncEngine:
        if self._engine is None:
            raise StoreUnavailableError("engine access (database not connected)")
        return self._engine

    async def connect(self, *, create_schema: bool = False) -> None:
        """Create the engine and verify connectivity, retrying a few times.

        Raises ``StoreUnavailableError`` when every attempt fails.
        """
        if self._engine is not None:
            return

        engine = create_async_engine(self._url, echo=self._echo, future=True)
        attempts = self._connect_retries + 1
        for attempt in range(1, attempts + 1):
            try:
                async with engine.begin() as conn:
                    await conn.execute(text("SELECT 1"))
                    if create_schema:
                        await conn.run_sync(Base.metadata.create_all)
                break
            except (SQLAlchemyError, OSError) as exc:
                if attempt >= attempts:
                    await engine.dispose()
                    logger.error("Database connection failed after %d attempt(s): %s", attempt, exc)
                    raise StoreUnavailableError("connect", exc) from exc
                logger.warning(
                    "Database connection attempt %d failed: %s — retrying (%d left)",
                    attempt,
                    exc,
                    attempts - attempt,
                )
                await asyncio.sleep(self._retry_delay)

        self._engine = engine
        self._session_factory = async_sessionmaker(
            engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )
        logger.info("Database connected (schema created=%s)", create_schema)

    async def dispose(self) -> None:
        """Close every pooled connection. Safe to call more than once."""
        if self._engine is None:
            return
        await self._engine.dispose()
        self._engine = None
        self._session_factory = None
        logger.info("Database disconnected")

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Unit of work: commit on success, roll back on any error."""
        if self._session_factory is None:
            raise StoreUnavailableError("session (database not connected)")
        async with self._session_factory() as session:
            try:
                yield session
                # a failed flush leaves the transaction needing a rollback
                if session.is_active:
                    await session.commit()
                else:
                    await session.rollback()
            except Exception:
                await session.rollback()
                raise
