from .timer_repository import SQLAlchemyTimerRepository

__all__ = [
    "SQLAlchemyTimerRepository",
]
