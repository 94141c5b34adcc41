"""Top-level API router — timer routes plus versioned sub-routers."""

from fastapi import APIRouter

from countdown_timers.presentation.api.timers_controller import router as timers_router
from countdown_timers.presentation.api.v1.router import router as v1_router

router = APIRouter(prefix="/api")
router.include_router(timers_router)
router.include_router(v1_router)
