from .timer_api_client import StorefrontTimerClient

__all__ = [
    "StorefrontTimerClient",
]
