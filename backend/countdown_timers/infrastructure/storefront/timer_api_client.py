"""Storefront timer API client — implements the StorefrontTimerSource port.

Calls the public read endpoint ``GET /api/timer/{shop}?productId=`` with httpx
and returns the first (soonest-ending) timer. Every failure mode is logged
and reported as "no timer".
"""

import logging
from datetime import datetime
from typing import Any
from urllib.parse import quote

import httpx

from countdown_timers.application.interfaces import StorefrontTimerSource
from countdown_timers.domain.entities import DEFAULT_URGENCY_MINUTES, CountdownTimer

logger = logging.getLogger(__name__)


class StorefrontTimerClient(StorefrontTimerSource):
    """Infrastructure adapter — reads active timers from the timer API."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        http_client: httpx.AsyncClient | None = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._http_client = http_client

    async def _get_client(self) -> httpx.AsyncClient:
        """Return the injected client or create a new one."""
        if self._http_client is not None:
            return self._http_client
        return httpx.AsyncClient(timeout=self._timeout)

    async def fetch_active_timer(self, shop: str, product_id: str) -> CountdownTimer | None:
        url = f"{self._base_url}/api/timer/{quote(shop, safe='')}"
        client = await self._get_client()
        should_close = self._http_client is None

        try:
            response = await client.get(url, params={"productId": product_id})
            if response.status_code != 200:
                logger.warning(
                    "Timer API returned %d for %s product %s",
                    response.status_code,
                    shop,
                    product_id,
                )
                return None
            data = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning("Countdown fetch error for %s product %s: %s", shop, product_id, exc)
            return None
        finally:
            if should_close:
                await client.aclose()

        return self._parse_first_timer(data)

    @staticmethod
    def _parse_first_timer(data: Any) -> CountdownTimer | None:
        """Pick ``timers[0]`` out of a ``{success, timers}`` body."""
        if not isinstance(data, dict) or data.get("success") is not True:
            return None
        timers = data.get("timers")
        if not isinstance(timers, list) or not timers:
            return None

        raw = timers[0]
        try:
            urgency = raw.get("urgencyMinutes", DEFAULT_URGENCY_MINUTES)
            return CountdownTimer(
                id=str(raw.get("id", "")),
                end_time=datetime.fromisoformat(raw["endTime"]),
                urgency_minutes=int(urgency) if urgency is not None else 0,
                message=raw.get("message") or "",
                styles=dict(raw.get("styles") or {}),
            )
        except (AttributeError, KeyError, TypeError, ValueError) as exc:
            logger.warning("Malformed timer in API response: %s", exc)
            return None
