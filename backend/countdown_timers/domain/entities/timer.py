"""Domain entity — a promotional countdown bound to one store and one product."""

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Any
from uuid import uuid4

DEFAULT_URGENCY_MINUTES = 5


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Normalise a datetime to an aware UTC instant. Naive values are taken as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


@dataclass
class Timer:
    """Core domain entity for a storefront countdown timer.

    ``styles`` and ``metadata`` are opaque pass-through bags: the lifecycle
    rules never look inside them, they are handed verbatim to the renderer.
    """

    store_domain: str
    product_id: str
    start_time: datetime
    end_time: datetime
    message: str = ""
    styles: dict[str, Any] = field(default_factory=dict)
    urgency_minutes: int = DEFAULT_URGENCY_MINUTES
    active: bool = True
    metadata: dict[str, Any] = field(default_factory=dict)
    id: str = field(default_factory=lambda: str(uuid4()))
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)

    def __post_init__(self) -> None:
        self.start_time = as_utc(self.start_time)
        self.end_time = as_utc(self.end_time)

    def is_effectively_active(self, now: datetime) -> bool:
        """True when the merchant flag is on and ``now`` lies inside the inclusive window."""
        now = as_utc(now)
        return self.active and self.start_time <= now <= self.end_time

    def with_changes(self, **changes: Any) -> "Timer":
        """Return a copy with ``changes`` applied and ``updated_at`` refreshed."""
        return replace(self, **changes, updated_at=utc_now())
