from .timer_lifecycle import TimerLifecycleService
from .timer_service import TimerService
from .countdown_display import CountdownWidget

__all__ = [
    "TimerLifecycleService",
    "TimerService",
    "CountdownWidget",
]
