from .timer import Timer, DEFAULT_URGENCY_MINUTES, as_utc, utc_now
from .countdown import (
    CountdownFrame,
    CountdownTimer,
    build_frame,
    format_remaining,
    is_urgent,
    remaining_ms,
    resolve_display_style,
    resolve_title,
)

__all__ = [
    "Timer",
    "DEFAULT_URGENCY_MINUTES",
    "as_utc",
    "utc_now",
    "CountdownFrame",
    "CountdownTimer",
    "build_frame",
    "format_remaining",
    "is_urgent",
    "remaining_ms",
    "resolve_display_style",
    "resolve_title",
]
