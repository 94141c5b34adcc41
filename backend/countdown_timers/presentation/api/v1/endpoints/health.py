"""Health check endpoint — reports app metadata and database handle state."""

from fastapi import APIRouter, Depends

from countdown_timers.config import Settings
from countdown_timers.infrastructure.database import Database
from countdown_timers.infrastructure.dependencies import get_app_settings, get_database

router = APIRouter(tags=["Health"])


@router.get("/health")
async def health_check(
    settings: Settings = Depends(get_app_settings),
    database: Database = Depends(get_database),
) -> dict:
    """Returns the current application health status."""
    return {
        "status": "healthy",
        "version": settings.app_version,
        "environment": settings.app_env,
        "database": "connected" if database.is_connected else "disconnected",
    }
