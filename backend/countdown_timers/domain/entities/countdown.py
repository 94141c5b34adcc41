"""Countdown arithmetic and display-state objects used by the storefront widget."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from .timer import DEFAULT_URGENCY_MINUTES, as_utc

MS_PER_SECOND = 1000
MS_PER_MINUTE = 60 * MS_PER_SECOND
MS_PER_HOUR = 60 * MS_PER_MINUTE

DEFAULT_TITLE = "Offer ends in"
DEFAULT_STYLE: dict[str, Any] = {
    "background_color": "#fff",
    "text_color": "#111",
}


@dataclass
class CountdownTimer:
    """The subset of a timer the storefront needs to draw a countdown."""

    id: str
    end_time: datetime
    urgency_minutes: int = DEFAULT_URGENCY_MINUTES
    message: str = ""
    styles: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.end_time = as_utc(self.end_time)


@dataclass(frozen=True)
class CountdownFrame:
    """One rendered state of the widget."""

    text: str
    remaining_ms: int
    urgent: bool
    title: str
    style: dict[str, Any]

    @property
    def finished(self) -> bool:
        return self.remaining_ms <= 0


def remaining_ms(end_time: datetime, now: datetime) -> int:
    """Milliseconds left until ``end_time``, clamped at zero."""
    delta = as_utc(end_time) - as_utc(now)
    return max(0, int(delta.total_seconds() * MS_PER_SECOND))


def format_remaining(ms: int) -> str:
    """Render ``MM:SS``, or ``HH:MM:SS`` once an hour or more remains."""
    total = max(0, ms) // MS_PER_SECOND
    hours, rest = divmod(total, 3600)
    minutes, seconds = divmod(rest, 60)
    if hours > 0:
        return f"{hours:02d}:{minutes:02d}:{seconds:02d}"
    return f"{minutes:02d}:{seconds:02d}"


def is_urgent(urgency_minutes: int, remaining: int) -> bool:
    """Recomputed every tick; a zero threshold disables urgency entirely."""
    return urgency_minutes > 0 and remaining <= urgency_minutes * MS_PER_MINUTE


def resolve_display_style(
    block_settings: dict[str, Any],
    timer_styles: dict[str, Any],
) -> dict[str, Any]:
    """Merge style sources: local block settings > timer styles > defaults.

    Falsy values (empty strings, None) do not override a lower-priority source.
    """
    resolved: dict[str, Any] = dict(DEFAULT_STYLE)
    for source in (timer_styles, block_settings):
        for key, value in source.items():
            if key == "title":
                continue
            if value not in (None, ""):
                resolved[key] = value
    return resolved


def resolve_title(
    block_settings: dict[str, Any],
    timer: CountdownTimer,
) -> str:
    return (
        block_settings.get("title")
        or timer.styles.get("title")
        or timer.message
        or DEFAULT_TITLE
    )


def build_frame(
    timer: CountdownTimer,
    now: datetime,
    block_settings: dict[str, Any] | None = None,
) -> CountdownFrame:
    """Compute the full display state for ``timer`` at ``now``."""
    settings = block_settings or {}
    remaining = remaining_ms(timer.end_time, now)
    return CountdownFrame(
        text=format_remaining(remaining),
        remaining_ms=remaining,
        urgent=is_urgent(timer.urgency_minutes, remaining),
        title=resolve_title(settings, timer),
        style=resolve_display_style(settings, timer.styles),
    )
