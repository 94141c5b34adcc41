from .timer import TimerModel

__all__ = [
    "TimerModel",
]
