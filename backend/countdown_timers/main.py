"""FastAPI application factory."""

import logging
from contextlib import asynccontextmanager
from collections.abc import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from countdown_timers.config import Settings, get_settings
from countdown_timers.infrastructure.auth import ShopSessionTokenVerifier
from countdown_timers.infrastructure.database import Database
from countdown_timers.infrastructure.logging.log_config import setup_logging
from countdown_timers.presentation.api.router import router as api_router

logger = logging.getLogger(__name__)


def build_database(settings: Settings) -> Database:
    return Database(
        settings.database_url,
        echo=settings.db_echo,
        connect_retries=settings.db_connect_retries,
        retry_delay=settings.db_connect_retry_delay,
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan — open the database handle, close it on shutdown."""
    settings: Settings = app.state.settings
    setup_logging(settings)

    database: Database = app.state.database
    # Schema is created automatically everywhere except production
    await database.connect(create_schema=not settings.is_production)

    if not settings.session_token_secret:
        logger.warning(
            "SESSION_TOKEN_SECRET is not configured; every request is treated as anonymous."
        )
    if not settings.require_session_for_mutations:
        logger.warning(
            "REQUIRE_SESSION_FOR_MUTATIONS is off: updates and deletes without a "
            "session skip the ownership check."
        )

    try:
        yield
    finally:
        # Shutdown
        await database.dispose()


def create_app(settings: Settings | None = None) -> FastAPI:
    """Factory function that builds and configures the FastAPI application."""
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.app_title,
        version=settings.app_version,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.database = build_database(settings)
    app.state.session_verifier = ShopSessionTokenVerifier(
        secret_key=settings.session_token_secret,
        audience=settings.session_token_audience,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Mount API routes
    app.include_router(api_router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "countdown_timers.main:app",
        host="0.0.0.0",
        port=8020,
        reload=True,
    )
