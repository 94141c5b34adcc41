"""Unit tests for the TimerLifecycleService."""

from datetime import datetime, timedelta, timezone

import pytest

from countdown_timers.application.services import TimerLifecycleService
from countdown_timers.domain.entities import Timer
from countdown_timers.domain.exceptions import InvalidInputError, InvalidRangeError

START = datetime(2025, 1, 1, 0, 0, tzinfo=timezone.utc)
END = datetime(2025, 1, 1, 1, 0, tzinfo=timezone.utc)


@pytest.fixture
def lifecycle() -> TimerLifecycleService:
    return TimerLifecycleService()


@pytest.fixture
def existing() -> Timer:
    return Timer(
        store_domain="demo.myshopify.com",
        product_id="P1",
        start_time=START,
        end_time=END,
        urgency_minutes=10,
    )


def _payload(**overrides) -> dict:
    payload = {
        "productId": "P1",
        "startTime": "2025-01-01T00:00:00Z",
        "endTime": "2025-01-01T01:00:00Z",
        "urgencyMinutes": 10,
        "storeDomain": "demo.myshopify.com",
    }
    payload.update(overrides)
    return payload


# ── validate_create ──


def test_create_applies_defaults(lifecycle: TimerLifecycleService):
    timer = lifecycle.validate_create(_payload())
    assert timer.store_domain == "demo.myshopify.com"
    assert timer.product_id == "P1"
    assert timer.start_time == START
    assert timer.end_time == END
    assert timer.urgency_minutes == 10
    assert timer.active is True
    assert timer.message == ""
    assert timer.styles == {}
    assert timer.metadata == {}
    assert timer.id


def test_create_default_urgency_is_five(lifecycle: TimerLifecycleService):
    payload = _payload()
    del payload["urgencyMinutes"]
    assert lifecycle.validate_create(payload).urgency_minutes == 5


def test_create_numeric_product_id_is_stored_as_string(lifecycle: TimerLifecycleService):
    timer = lifecycle.validate_create(_payload(productId=8123456789))
    assert timer.product_id == "8123456789"


def test_create_drops_unknown_fields(lifecycle: TimerLifecycleService):
    timer = lifecycle.validate_create(_payload(color="red", id="forged"))
    assert not hasattr(timer, "color")
    assert timer.id != "forged"


def test_create_session_domain_overrides_declared_domain(lifecycle: TimerLifecycleService):
    timer = lifecycle.validate_create(
        _payload(storeDomain="spoofed.myshopify.com"),
        store_domain="real.myshopify.com",
    )
    assert timer.store_domain == "real.myshopify.com"


def test_create_requires_some_store_domain(lifecycle: TimerLifecycleService):
    payload = _payload()
    del payload["storeDomain"]
    with pytest.raises(InvalidInputError) as exc_info:
        lifecycle.validate_create(payload)
    assert any("storeDomain" in d for d in exc_info.value.details)


def test_create_normalises_offsets_to_utc(lifecycle: TimerLifecycleService):
    timer = lifecycle.validate_create(
        _payload(startTime="2025-01-01T02:00:00+02:00", endTime="2025-01-01T03:00:00+02:00")
    )
    assert timer.start_time == START
    assert timer.start_time.tzinfo == timezone.utc


def test_create_passes_attribute_bags_through(lifecycle: TimerLifecycleService):
    styles = {"title": "Flash sale", "background_color": "#000", "size": "large"}
    metadata = {"campaign": {"id": 7, "tags": ["bf"]}}
    timer = lifecycle.validate_create(_payload(styles=styles, metadata=metadata))
    assert timer.styles == styles
    assert list(timer.styles) == ["title", "background_color", "size"]
    assert timer.metadata == metadata


@pytest.mark.parametrize(
    "field",
    ["productId", "startTime", "endTime"],
)
def test_create_missing_required_field(lifecycle: TimerLifecycleService, field: str):
    payload = _payload()
    del payload[field]
    with pytest.raises(InvalidInputError) as exc_info:
        lifecycle.validate_create(payload)
    assert any(d.startswith(field) for d in exc_info.value.details)


@pytest.mark.parametrize(
    "overrides",
    [
        {"startTime": "not-a-date"},
        {"endTime": 1735693200},
        {"productId": "   "},
        {"productId": True},
        {"urgencyMinutes": -1},
        {"urgencyMinutes": 2.5},
        {"urgencyMinutes": "5"},
        {"urgencyMinutes": 2**31},
        {"urgencyMinutes": 10**20},
        {"productId": "9" * 65},
        {"storeDomain": "x" * 256},
        {"active": "yes"},
        {"styles": "bold"},
        {"message": 42},
    ],
)
def test_create_rejects_malformed_fields(lifecycle: TimerLifecycleService, overrides: dict):
    with pytest.raises(InvalidInputError):
        lifecycle.validate_create(_payload(**overrides))


@pytest.mark.parametrize(
    "overrides",
    [
        {"startTime": "0001-01-01T00:00:00+05:00"},
        {"endTime": "9999-12-31T23:59:59-05:00"},
    ],
)
def test_create_rejects_instants_outside_utc_range(
    lifecycle: TimerLifecycleService, overrides: dict
):
    with pytest.raises(InvalidInputError) as exc_info:
        lifecycle.validate_create(_payload(**overrides))
    field = next(iter(overrides))
    assert any(d.startswith(field) for d in exc_info.value.details)


def test_update_rejects_instant_outside_utc_range(lifecycle: TimerLifecycleService, existing: Timer):
    with pytest.raises(InvalidInputError):
        lifecycle.validate_update(existing, {"endTime": "9999-12-31T23:59:59-05:00"})
    assert existing.end_time.year == 2025


def test_create_accepts_largest_urgency(lifecycle: TimerLifecycleService):
    timer = lifecycle.validate_create(_payload(urgencyMinutes=2**31 - 1))
    assert timer.urgency_minutes == 2**31 - 1


def test_create_reports_every_problem(lifecycle: TimerLifecycleService):
    with pytest.raises(InvalidInputError) as exc_info:
        lifecycle.validate_create(_payload(startTime="nope", urgencyMinutes=-3))
    assert len(exc_info.value.details) == 2


@pytest.mark.parametrize(
    "end",
    ["2025-01-01T00:00:00Z", "2024-12-31T23:59:59Z"],
)
def test_create_rejects_end_not_after_start(lifecycle: TimerLifecycleService, end: str):
    with pytest.raises(InvalidRangeError):
        lifecycle.validate_create(_payload(endTime=end))


def test_create_rejects_non_object_body(lifecycle: TimerLifecycleService):
    with pytest.raises(InvalidInputError):
        lifecycle.validate_create(["productId", "P1"])  # type: ignore[arg-type]


# ── validate_update ──


def test_update_empty_patch_is_invalid(lifecycle: TimerLifecycleService, existing: Timer):
    with pytest.raises(InvalidInputError):
        lifecycle.validate_update(existing, {})


def test_update_only_unknown_fields_is_invalid(lifecycle: TimerLifecycleService, existing: Timer):
    with pytest.raises(InvalidInputError):
        lifecycle.validate_update(existing, {"colour": "red"})


def test_update_single_field(lifecycle: TimerLifecycleService, existing: Timer):
    updated = lifecycle.validate_update(existing, {"message": "  Hurry!  "})
    assert updated.message == "Hurry!"
    assert updated.id == existing.id
    assert updated.end_time == existing.end_time
    assert updated.updated_at >= existing.updated_at


def test_update_does_not_mutate_existing(lifecycle: TimerLifecycleService, existing: Timer):
    lifecycle.validate_update(existing, {"active": False})
    assert existing.active is True


def test_update_end_before_existing_start_is_invalid_range(
    lifecycle: TimerLifecycleService, existing: Timer
):
    with pytest.raises(InvalidRangeError):
        lifecycle.validate_update(existing, {"endTime": "2024-12-31T23:00:00Z"})


def test_update_start_after_existing_end_is_invalid_range(
    lifecycle: TimerLifecycleService, existing: Timer
):
    with pytest.raises(InvalidRangeError):
        lifecycle.validate_update(existing, {"startTime": "2025-01-01T02:00:00Z"})


def test_update_both_bounds_moved_together(lifecycle: TimerLifecycleService, existing: Timer):
    updated = lifecycle.validate_update(
        existing,
        {"startTime": "2025-02-01T00:00:00Z", "endTime": "2025-02-02T00:00:00Z"},
    )
    assert updated.start_time == datetime(2025, 2, 1, tzinfo=timezone.utc)
    assert updated.end_time - updated.start_time == timedelta(days=1)


def test_update_cannot_change_store_domain(lifecycle: TimerLifecycleService, existing: Timer):
    with pytest.raises(InvalidInputError) as exc_info:
        lifecycle.validate_update(existing, {"storeDomain": "other.myshopify.com", "active": False})
    assert any("storeDomain" in d for d in exc_info.value.details)


def test_update_rejects_explicit_null(lifecycle: TimerLifecycleService, existing: Timer):
    with pytest.raises(InvalidInputError) as exc_info:
        lifecycle.validate_update(existing, {"endTime": None})
    assert exc_info.value.details == ["endTime: must not be null"]


def test_update_rejects_negative_urgency(lifecycle: TimerLifecycleService, existing: Timer):
    with pytest.raises(InvalidInputError):
        lifecycle.validate_update(existing, {"urgencyMinutes": -5})


# ── is_effectively_active ──


@pytest.mark.parametrize(
    ("now", "expected"),
    [
        (START - timedelta(seconds=1), False),
        (START, True),
        (START + timedelta(minutes=30), True),
        (END, True),
        (END + timedelta(seconds=1), False),
    ],
)
def test_active_window_bounds_are_inclusive(
    lifecycle: TimerLifecycleService, existing: Timer, now: datetime, expected: bool
):
    assert lifecycle.is_effectively_active(existing, now) is expected


def test_inactive_flag_wins_inside_window(lifecycle: TimerLifecycleService, existing: Timer):
    existing.active = False
    assert lifecycle.is_effectively_active(existing, START + timedelta(minutes=1)) is False
