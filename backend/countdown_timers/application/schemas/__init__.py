from .timer import (
    TimerCreate,
    TimerUpdate,
    TimerResponse,
    TimerEnvelope,
    TimerListEnvelope,
    SuccessResponse,
    ErrorResponse,
)

__all__ = [
    "TimerCreate",
    "TimerUpdate",
    "TimerResponse",
    "TimerEnvelope",
    "TimerListEnvelope",
    "SuccessResponse",
    "ErrorResponse",
]
