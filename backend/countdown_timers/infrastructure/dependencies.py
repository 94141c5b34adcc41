"""FastAPI dependency injection — wires infrastructure to application layer.

Long-lived resources (settings, the ``Database`` handle, the session
verifier) live on ``app.state`` and are set up by the lifespan in
``countdown_timers.main``.
"""

from collections.abc import AsyncGenerator

from fastapi import Depends, Header, Request
from sqlalchemy.ext.asyncio import AsyncSession

from countdown_timers.application.interfaces import SessionVerifier
from countdown_timers.application.services import TimerLifecycleService, TimerService
from countdown_timers.config import Settings
from countdown_timers.infrastructure.auth import bearer_token
from countdown_timers.infrastructure.database import Database
from countdown_timers.infrastructure.database.repositories import SQLAlchemyTimerRepository


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_database(request: Request) -> Database:
    return request.app.state.database


def get_session_verifier(request: Request) -> SessionVerifier:
    return request.app.state.session_verifier


async def get_db_session(
    database: Database = Depends(get_database),
) -> AsyncGenerator[AsyncSession, None]:
    """Yields an async DB session per request; commits on success."""
    async with database.session() as session:
        yield session


async def get_session_store_domain(
    authorization: str | None = Header(None),
    verifier: SessionVerifier = Depends(get_session_verifier),
) -> str | None:
    """Store domain of the verified session, or None for anonymous callers."""
    return verifier.verify(bearer_token(authorization))


async def get_timer_service(
    session: AsyncSession = Depends(get_db_session),
    settings: Settings = Depends(get_app_settings),
) -> AsyncGenerator[TimerService, None]:
    """Provides a TimerService instance with its repository wired up."""
    repository = SQLAlchemyTimerRepository(session)
    yield TimerService(
        repository,
        TimerLifecycleService(),
        require_session_for_mutations=settings.require_session_for_mutations,
    )
