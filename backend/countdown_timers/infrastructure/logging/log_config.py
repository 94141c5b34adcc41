"""Logging setup for the timer API and the countdown preview.

Levels come from Settings, one knob per category:

    LOG_LEVEL           root
    LOG_LEVEL_SQL       SQLAlchemy engine/pool and the SQLite driver
    LOG_LEVEL_HTTP      httpx / httpcore (storefront polling)
    LOG_LEVEL_UVICORN   server access and error logs
    LOG_LEVEL_TIMERS    timer services, session checks, storefront client

Call ``setup_logging(settings)`` once at startup; calling it again only
re-applies the levels.
"""

import logging
import sys

from countdown_timers.config import Settings, get_settings

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s — %(message)s"

# category -> loggers it controls; the level lives in ``log_level_<category>``
LOGGER_CATEGORIES: dict[str, tuple[str, ...]] = {
    "sql": ("sqlalchemy.engine", "sqlalchemy.pool", "aiosqlite"),
    "http": ("httpx", "httpcore"),
    "uvicorn": ("uvicorn", "uvicorn.access", "uvicorn.error"),
    "timers": (
        "countdown_timers.application.services",
        "countdown_timers.infrastructure.auth",
        "countdown_timers.infrastructure.storefront",
        "countdown_timers.presentation.api",
    ),
}


def setup_logging(settings: Settings | None = None) -> dict[str, int]:
    """Apply root and per-category levels. Returns the level chosen per category."""
    settings = settings or get_settings()

    root = logging.getLogger()
    root.setLevel(_parse_level(settings.log_level))
    # uvicorn installs its own handler; scripts and tests need one too
    if not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)

    applied: dict[str, int] = {}
    for category, logger_names in LOGGER_CATEGORIES.items():
        level = _parse_level(getattr(settings, f"log_level_{category}", "INFO"))
        for name in logger_names:
            logging.getLogger(name).setLevel(level)
        applied[category] = level

    logging.getLogger(__name__).debug(
        "Logging configured: root=%s %s",
        settings.log_level,
        ", ".join(f"{c}={logging.getLevelName(lvl)}" for c, lvl in applied.items()),
    )
    return applied


def _parse_level(raw: str) -> int:
    """Level name to logging constant; unknown names fall back to INFO."""
    numeric = getattr(logging, str(raw).upper(), None)
    return numeric if isinstance(numeric, int) else logging.INFO
