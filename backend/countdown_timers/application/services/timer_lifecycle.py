"""Timer lifecycle rules — validation of writes and the active-window predicate.

Every write passes through here before it reaches the repository:

* ``validate_create`` turns a raw request payload into a new ``Timer``.
* ``validate_update`` applies a partial payload to an existing ``Timer`` and
  re-checks the combined start/end invariant.
* ``is_effectively_active`` answers "does this timer show right now".

Field-level problems are collected and raised together as ``InvalidInputError``;
an end time that is not strictly after the start time raises ``InvalidRangeError``.
"""

import logging
from collections.abc import Mapping
from datetime import datetime
from typing import Any

from pydantic import ValidationError
from pydantic.alias_generators import to_camel

from countdown_timers.application.schemas import TimerCreate, TimerUpdate
from countdown_timers.domain.entities import Timer
from countdown_timers.domain.exceptions import InvalidInputError, InvalidRangeError

logger = logging.getLogger(__name__)

_STORE_DOMAIN_KEYS = ("storeDomain", "store_domain")


def _error_details(exc: ValidationError) -> list[str]:
    """Flatten pydantic errors into ``"field: message"`` strings."""
    details: list[str] = []
    for error in exc.errors():
        field = ".".join(str(part) for part in error["loc"]) or "body"
        details.append(f"{field}: {error['msg']}")
    return details


def _require_mapping(data: Any) -> dict[str, Any]:
    if not isinstance(data, Mapping):
        raise InvalidInputError(["body: must be a JSON object"])
    return dict(data)


def _check_range(start: datetime, end: datetime) -> None:
    if end <= start:
        raise InvalidRangeError(
            [f"endTime ({end.isoformat()}) must be after startTime ({start.isoformat()})"]
        )


class TimerLifecycleService:
    """Stateless validator for timer writes."""

    def validate_create(
        self,
        data: Mapping[str, Any],
        store_domain: str | None = None,
    ) -> Timer:
        """Build a new Timer from a create payload.

        ``store_domain`` comes from a verified session and takes precedence
        over any ``storeDomain`` declared in the payload.
        """
        payload = _require_mapping(data)
        if store_domain:
            for key in _STORE_DOMAIN_KEYS:
                payload.pop(key, None)

        try:
            parsed = TimerCreate.model_validate(payload)
        except ValidationError as exc:
            details = _error_details(exc)
            logger.info("Rejected timer create: %s", details)
            raise InvalidInputError(details) from exc

        owner = (store_domain or parsed.store_domain or "").strip()
        if not owner:
            raise InvalidInputError(["storeDomain: missing and no authenticated session"])

        _check_range(parsed.start_time, parsed.end_time)

        return Timer(
            store_domain=owner,
            product_id=parsed.product_id,
            start_time=parsed.start_time,
            end_time=parsed.end_time,
            message=parsed.message,
            styles=parsed.styles,
            urgency_minutes=parsed.urgency_minutes,
            active=parsed.active,
            metadata=parsed.metadata,
        )

    def validate_update(self, existing: Timer, data: Mapping[str, Any]) -> Timer:
        """Apply a partial payload to ``existing`` and return the updated copy.

        ``existing`` is left untouched; nothing changes unless the whole
        patch is valid.
        """
        payload = _require_mapping(data)
        details: list[str] = []

        for key in _STORE_DOMAIN_KEYS:
            if key in payload and payload.pop(key) != existing.store_domain:
                details.append("storeDomain: cannot be changed")

        patch: TimerUpdate | None = None
        try:
            patch = TimerUpdate.model_validate(payload)
        except ValidationError as exc:
            details.extend(_error_details(exc))

        changes: dict[str, Any] = {}
        if patch is not None:
            for name in sorted(patch.model_fields_set):
                value = getattr(patch, name)
                if value is None:
                    details.append(f"{to_camel(name)}: must not be null")
                else:
                    changes[name] = value
            if not patch.model_fields_set and not details:
                details.append("body: at least one field must be provided")

        if details:
            logger.info("Rejected update of timer %s: %s", existing.id, details)
            raise InvalidInputError(details)

        _check_range(
            changes.get("start_time", existing.start_time),
            changes.get("end_time", existing.end_time),
        )
        return existing.with_changes(**changes)

    @staticmethod
    def is_effectively_active(timer: Timer, now: datetime) -> bool:
        """``active`` and ``start <= now <= end`` (both bounds inclusive)."""
        return timer.is_effectively_active(now)
