from pathlib import Path

from pydantic_settings import BaseSettings
from functools import lru_cache

_BACKEND_DIR = Path(__file__).resolve().parents[1]
_ENV_FILES = (
    _BACKEND_DIR / ".env",
    ".env",
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    app_title: str = "Countdown Timers API"
    app_version: str = "0.1.0"
    app_env: str = "development"
    database_url: str = "sqlite:///./countdown_timers.db"
    cors_origins: list[str] = ["http://localhost:3000"]

    # Database handle
    db_echo: bool = False
    db_connect_retries: int = 2
    db_connect_retry_delay: float = 1.0

    # Session tokens (HS256, signed with the app secret)
    session_token_secret: str = ""
    session_token_audience: str | None = None
    # When False, update/delete without a verified session skip the ownership check
    require_session_for_mutations: bool = False

    # Storefront countdown widget
    storefront_api_base_url: str = "http://localhost:8020"
    storefront_poll_timeout: float = 10.0
    countdown_tick_seconds: float = 1.0

    # Logging: per-category log levels (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    log_level: str = "INFO"                  # Root / app-wide
    log_level_sql: str = "WARNING"           # sqlalchemy.engine SQL queries
    log_level_http: str = "WARNING"          # httpx / httpcore outbound HTTP
    log_level_uvicorn: str = "INFO"          # uvicorn.access / uvicorn.error
    log_level_timers: str = "INFO"           # timer services and countdown widget

    model_config = {
        "env_file": _ENV_FILES,
        "env_file_encoding": "utf-8",
    }

    @property
    def is_production(self) -> bool:
        return self.app_env.lower() == "production"


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance — reads .env once."""
    return Settings()
