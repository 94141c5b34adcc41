"""Countdown widget — live storefront countdown for a single product.

The widget runs two independent asyncio tasks:

* a one-shot fetch of the soonest-ending active timer, and
* a tick loop that recomputes the remaining time every ``tick_interval``
  seconds and hands a ``CountdownFrame`` to the renderer.

The tick loop never waits on the fetch. A failed fetch renders nothing.
Unmounting cancels both tasks and drops any late fetch result.
"""

import asyncio
import logging
from collections.abc import Callable
from datetime import datetime
from typing import Any

from countdown_timers.application.interfaces import StorefrontTimerSource
from countdown_timers.domain.entities import (
    CountdownFrame,
    CountdownTimer,
    build_frame,
    utc_now,
)

logger = logging.getLogger(__name__)

# Receives a frame to draw, or None for the empty placeholder.
Renderer = Callable[[CountdownFrame | None], None]

TICK_INTERVAL = 1.0


class CountdownWidget:
    """One mounted countdown for ``(shop, product_id)``."""

    def __init__(
        self,
        source: StorefrontTimerSource,
        shop: str,
        product_id: str,
        renderer: Renderer,
        *,
        block_settings: dict[str, Any] | None = None,
        tick_interval: float = TICK_INTERVAL,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._source = source
        self._shop = shop
        self._product_id = product_id
        self._renderer = renderer
        self._block_settings = dict(block_settings or {})
        self._tick_interval = tick_interval
        self._clock = clock

        self._timer: CountdownTimer | None = None
        self._mounted = False
        self._finished = False
        self._fetch_task: asyncio.Task | None = None
        self._tick_task: asyncio.Task | None = None

    @property
    def shop(self) -> str:
        return self._shop

    @property
    def product_id(self) -> str:
        return self._product_id

    @property
    def tick_interval(self) -> float:
        return self._tick_interval

    @property
    def timer(self) -> CountdownTimer | None:
        return self._timer

    @property
    def mounted(self) -> bool:
        return self._mounted

    @property
    def ticking(self) -> bool:
        return self._tick_task is not None and not self._tick_task.done()

    async def mount(self) -> None:
        """Render the placeholder and start the fetch and the clock."""
        if self._mounted:
            return
        self._mounted = True
        self._finished = False
        self._draw(None)
        self._fetch_task = asyncio.create_task(self._load())
        self._tick_task = asyncio.create_task(self._tick_loop())
        logger.debug("Countdown mounted for %s product %s", self._shop, self._product_id)

    async def unmount(self) -> None:
        """Stop ticking and discard any in-flight fetch."""
        if not self._mounted:
            return
        self._mounted = False
        for task in (self._fetch_task, self._tick_task):
            if task is None or task.done():
                continue
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass
        self._fetch_task = None
        self._tick_task = None
        logger.debug("Countdown unmounted for %s product %s", self._shop, self._product_id)

    async def wait_loaded(self) -> CountdownTimer | None:
        """Wait for the initial fetch to settle and return what it found."""
        task = self._fetch_task
        if task is not None and not task.done():
            await asyncio.shield(task)
        return self._timer

    def current_frame(self) -> CountdownFrame | None:
        """Frame for the loaded timer at the current clock reading."""
        if self._timer is None:
            return None
        return build_frame(self._timer, self._clock(), self._block_settings)

    async def _load(self) -> None:
        try:
            timer = await self._source.fetch_active_timer(self._shop, self._product_id)
        except Exception:
            logger.exception("Countdown fetch failed for %s product %s", self._shop, self._product_id)
            timer = None

        if not self._mounted:
            return
        if timer is None:
            logger.debug("No active timer for %s product %s", self._shop, self._product_id)
            return

        self._timer = timer
        self._render_current()

    async def _tick_loop(self) -> None:
        while self._mounted and not self._finished:
            await asyncio.sleep(self._tick_interval)
            if not self._mounted:
                break
            self._render_current()

    def _render_current(self) -> None:
        frame = self.current_frame()
        if frame is None or self._finished:
            return
        self._draw(frame)
        if frame.finished:
            self._finished = True

    def _draw(self, frame: CountdownFrame | None) -> None:
        try:
            self._renderer(frame)
        except Exception:
            logger.exception("Countdown renderer failed")
