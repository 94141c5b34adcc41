"""Abstract repository interface (port) for Timer persistence."""

from abc import ABC, abstractmethod
from datetime import datetime

from countdown_timers.domain.entities import Timer


class TimerRepository(ABC):
    """Port for timer persistence — implemented in the infrastructure layer.

    Implementations raise ``StoreUnavailableError`` when the backing store fails.
    """

    @abstractmethod
    async def get_by_id(self, timer_id: str) -> Timer | None:
        """Retrieve a single timer by its ID."""
        ...

    @abstractmethod
    async def find_active(
        self,
        store_domain: str,
        now: datetime,
        product_id: str | None = None,
    ) -> list[Timer]:
        """Timers of ``store_domain`` with ``active`` set and ``start <= now <= end``.

        Ordered by ascending end time (soonest-ending first).
        """
        ...

    @abstractmethod
    async def create(self, timer: Timer) -> Timer:
        """Persist a new timer and return the stored record."""
        ...

    @abstractmethod
    async def update(self, timer: Timer) -> Timer:
        """Overwrite an existing timer (last write wins)."""
        ...

    @abstractmethod
    async def delete(self, timer_id: str) -> bool:
        """Delete a timer. Returns True if deleted, False if not found."""
        ...
