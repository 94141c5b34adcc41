"""Port for the storefront side: where the countdown widget gets its timer from."""

from abc import ABC, abstractmethod

from countdown_timers.domain.entities import CountdownTimer


class StorefrontTimerSource(ABC):
    """Looks up the soonest-ending active timer for a product."""

    @abstractmethod
    async def fetch_active_timer(self, shop: str, product_id: str) -> CountdownTimer | None:
        """Return the first active timer, or None.

        Implementations must not raise: any failure is reported as None.
        """
        ...
