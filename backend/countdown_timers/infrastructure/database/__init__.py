from .base import Base
from .session import Database
from .models import TimerModel

__all__ = [
    "Base",
    "Database",
    "TimerModel",
]
