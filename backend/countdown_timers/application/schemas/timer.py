"""Pydantic DTOs (Data Transfer Objects) for the Timer feature.

Wire format is camelCase (``productId``, ``startTime`` ...); attributes are
snake_case. Unknown keys are dropped rather than rejected.
"""

from datetime import datetime
from typing import Annotated, Any

from pydantic import (
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    StrictBool,
    StringConstraints,
)
from pydantic.alias_generators import to_camel

from countdown_timers.domain.entities import DEFAULT_URGENCY_MINUTES, as_utc

# bounds of the timers table columns
MAX_URGENCY_MINUTES = 2**31 - 1
MAX_PRODUCT_ID_LENGTH = 64
MAX_STORE_DOMAIN_LENGTH = 255


def _parse_instant(value: Any) -> datetime:
    """Accept ISO-8601 strings or datetimes, normalised to aware UTC."""
    try:
        if isinstance(value, datetime):
            return as_utc(value)
        if isinstance(value, str):
            return as_utc(datetime.fromisoformat(value.strip()))
    except (ValueError, OverflowError):
        # offsets at year 1 / 9999 push the UTC instant out of range
        pass
    raise ValueError("must be a valid ISO-8601 date-time")


def _coerce_product_id(value: Any) -> str:
    """Product IDs may arrive as numbers; they are always stored as strings."""
    if isinstance(value, bool) or not isinstance(value, (str, int)):
        raise ValueError("must be a string or an integer")
    text = str(value).strip()
    if not text:
        raise ValueError("must not be empty")
    if len(text) > MAX_PRODUCT_ID_LENGTH:
        raise ValueError(f"must be at most {MAX_PRODUCT_ID_LENGTH} characters")
    return text


Instant = Annotated[datetime, BeforeValidator(_parse_instant)]
ProductId = Annotated[str, BeforeValidator(_coerce_product_id)]
TrimmedStr = Annotated[str, StringConstraints(strict=True, strip_whitespace=True)]
StoreDomain = Annotated[
    str, StringConstraints(strict=True, strip_whitespace=True, max_length=MAX_STORE_DOMAIN_LENGTH)
]
UrgencyMinutes = Annotated[int, Field(strict=True, ge=0, le=MAX_URGENCY_MINUTES)]
AttributeBag = dict[str, Any]

_WIRE_CONFIG = ConfigDict(
    alias_generator=to_camel,
    populate_by_name=True,
    extra="ignore",
)


class TimerCreate(BaseModel):
    """Schema for creating a new timer."""

    model_config = _WIRE_CONFIG

    store_domain: StoreDomain | None = Field(None, examples=["demo-shop.myshopify.com"])
    product_id: ProductId = Field(..., examples=["8123456789"])
    start_time: Instant = Field(..., examples=["2025-01-01T00:00:00Z"])
    end_time: Instant = Field(..., examples=["2025-01-01T01:00:00Z"])
    message: TrimmedStr = ""
    styles: AttributeBag = Field(default_factory=dict)
    urgency_minutes: UrgencyMinutes = DEFAULT_URGENCY_MINUTES
    active: StrictBool = True
    metadata: AttributeBag = Field(default_factory=dict)


class TimerUpdate(BaseModel):
    """Schema for a partial timer update — all fields optional, at least one required."""

    model_config = _WIRE_CONFIG

    product_id: ProductId | None = None
    start_time: Instant | None = None
    end_time: Instant | None = None
    message: TrimmedStr | None = None
    styles: AttributeBag | None = None
    urgency_minutes: UrgencyMinutes | None = None
    active: StrictBool | None = None
    metadata: AttributeBag | None = None


class TimerResponse(BaseModel):
    """Schema returned to the client."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )

    id: str
    store_domain: str
    product_id: str
    start_time: datetime
    end_time: datetime
    message: str
    styles: AttributeBag
    urgency_minutes: int
    active: bool
    metadata: AttributeBag
    created_at: datetime
    updated_at: datetime


class TimerEnvelope(BaseModel):
    success: bool = True
    timer: TimerResponse


class TimerListEnvelope(BaseModel):
    success: bool = True
    timers: list[TimerResponse]


class SuccessResponse(BaseModel):
    success: bool = True


class ErrorResponse(BaseModel):
    """Error body shared by every failing timer endpoint."""

    error: str
    details: list[str] | None = None
