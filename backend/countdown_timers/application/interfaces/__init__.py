from .timer_repository import TimerRepository
from .session_verifier import SessionVerifier
from .storefront_timer_source import StorefrontTimerSource

__all__ = [
    "TimerRepository",
    "SessionVerifier",
    "StorefrontTimerSource",
]
