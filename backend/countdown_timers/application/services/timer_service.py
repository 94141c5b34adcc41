"""Application service (use case) for Timer operations exposed over the API."""

import logging
from collections.abc import Callable, Mapping
from datetime import datetime
from typing import Any

from countdown_timers.application.interfaces import TimerRepository
from countdown_timers.application.services.timer_lifecycle import TimerLifecycleService
from countdown_timers.domain.entities import Timer, as_utc, utc_now
from countdown_timers.domain.exceptions import EntityNotFoundError, ForbiddenError

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


class TimerService:
    """Orchestrates timer reads and writes. Depends on the repository port (DI).

    Holds no per-request state; the session store domain is passed into each
    mutating call.
    """

    def __init__(
        self,
        repository: TimerRepository,
        lifecycle: TimerLifecycleService | None = None,
        *,
        clock: Clock = utc_now,
        require_session_for_mutations: bool = False,
    ):
        self._repository = repository
        self._lifecycle = lifecycle or TimerLifecycleService()
        self._clock = clock
        self._require_session = require_session_for_mutations

    async def get_timer(self, timer_id: str) -> Timer:
        timer = await self._repository.get_by_id(timer_id)
        if timer is None:
            raise EntityNotFoundError("Timer", timer_id)
        return timer

    async def create_timer(
        self,
        data: Mapping[str, Any],
        session_store_domain: str | None = None,
    ) -> Timer:
        timer = self._lifecycle.validate_create(data, store_domain=session_store_domain)
        created = await self._repository.create(timer)
        logger.info(
            "Created timer %s for %s product %s (%s → %s)",
            created.id,
            created.store_domain,
            created.product_id,
            created.start_time.isoformat(),
            created.end_time.isoformat(),
        )
        return created

    async def list_active(
        self,
        store_domain: str,
        product_id: str | None = None,
        now: datetime | None = None,
    ) -> list[Timer]:
        """Effectively active timers for a store, soonest-ending first."""
        instant = as_utc(now) if now is not None else self._clock()
        product = product_id.strip() if product_id else None
        timers = await self._repository.find_active(store_domain, instant, product or None)
        running = [t for t in timers if self._lifecycle.is_effectively_active(t, instant)]
        running.sort(key=lambda t: t.end_time)
        logger.debug(
            "list_active store=%s product=%s → %d timer(s)", store_domain, product, len(running)
        )
        return running

    async def update_timer(
        self,
        timer_id: str,
        data: Mapping[str, Any],
        session_store_domain: str | None = None,
    ) -> Timer:
        existing = await self.get_timer(timer_id)
        self._authorize("update", existing, session_store_domain)
        updated = self._lifecycle.validate_update(existing, data)
        saved = await self._repository.update(updated)
        logger.info("Updated timer %s (%s)", saved.id, saved.store_domain)
        return saved

    async def delete_timer(
        self,
        timer_id: str,
        session_store_domain: str | None = None,
    ) -> None:
        existing = await self.get_timer(timer_id)
        self._authorize("delete", existing, session_store_domain)
        if not await self._repository.delete(timer_id):
            raise EntityNotFoundError("Timer", timer_id)
        logger.info("Deleted timer %s (%s)", timer_id, existing.store_domain)

    def _authorize(self, action: str, timer: Timer, session_store_domain: str | None) -> None:
        """Only the owning store may mutate a timer.

        Without a session there is nothing to compare against; the mutation is
        allowed unless ``require_session_for_mutations`` is set.
        """
        if session_store_domain:
            if session_store_domain != timer.store_domain:
                logger.warning(
                    "Store %s tried to %s timer %s owned by %s",
                    session_store_domain,
                    action,
                    timer.id,
                    timer.store_domain,
                )
                raise ForbiddenError(session_store_domain, timer.store_domain)
            return

        if self._require_session:
            logger.warning("Rejected anonymous %s of timer %s", action, timer.id)
            raise ForbiddenError(None, timer.store_domain)

        logger.warning(
            "Anonymous %s of timer %s allowed: no session to check ownership against",
            action,
            timer.id,
        )
