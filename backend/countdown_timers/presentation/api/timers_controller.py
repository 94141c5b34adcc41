"""Timer endpoints — merchant writes and the public storefront read.

Routes (mounted under ``/api``):

* ``POST   /timer``           create a timer
* ``GET    /timer/{shop}``    active timers for a store, soonest-ending first
* ``PUT    /timer/{timer_id}`` partial update (owner only)
* ``DELETE /timer/{timer_id}`` delete (owner only)

Failures use a single body shape, ``{"error": ..., "details": [...]}``.
Internal error detail is logged, never returned.
"""

import logging
from typing import Any

from fastapi import APIRouter, Depends, Query, Request, status
from fastapi.responses import JSONResponse

from countdown_timers.application.schemas import (
    ErrorResponse,
    SuccessResponse,
    TimerEnvelope,
    TimerListEnvelope,
    TimerResponse,
)
from countdown_timers.application.services import TimerService
from countdown_timers.domain.exceptions import (
    EntityNotFoundError,
    ForbiddenError,
    InvalidInputError,
    TimerValidationError,
)
from countdown_timers.infrastructure.dependencies import (
    get_session_store_domain,
    get_timer_service,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/timer", tags=["Timers"])

_ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
    status.HTTP_403_FORBIDDEN: {"model": ErrorResponse},
    status.HTTP_404_NOT_FOUND: {"model": ErrorResponse},
    status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse},
}


def _error(status_code: int, error: str, details: list[str] | None = None) -> JSONResponse:
    body = ErrorResponse(error=error, details=details or None)
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


def _internal_error(route: str) -> JSONResponse:
    logger.exception("%s failed", route)
    return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


async def _read_json_body(request: Request) -> Any:
    try:
        return await request.json()
    except ValueError as exc:
        raise InvalidInputError(["body: must be valid JSON"]) from exc


@router.post(
    "",
    response_model=TimerEnvelope,
    status_code=status.HTTP_201_CREATED,
    responses=_ERROR_RESPONSES,
)
async def create_timer(
    request: Request,
    session_store_domain: str | None = Depends(get_session_store_domain),
    service: TimerService = Depends(get_timer_service),
) -> TimerEnvelope | JSONResponse:
    """Create a timer. A verified session's store wins over a declared ``storeDomain``."""
    try:
        payload = await _read_json_body(request)
        timer = await service.create_timer(payload, session_store_domain)
    except TimerValidationError as e:
        return _error(status.HTTP_400_BAD_REQUEST, e.message, e.details)
    except Exception:
        return _internal_error("POST /api/timer")
    return TimerEnvelope(timer=TimerResponse.model_validate(timer))


@router.get("/{shop}", response_model=TimerListEnvelope, responses=_ERROR_RESPONSES)
async def list_active_timers(
    shop: str,
    product_id: str | None = Query(None, alias="productId", description="Filter by product ID"),
    service: TimerService = Depends(get_timer_service),
) -> TimerListEnvelope | JSONResponse:
    """Public storefront read: effectively active timers, ordered by ascending end time."""
    try:
        timers = await service.list_active(shop, product_id=product_id)
    except Exception:
        return _internal_error("GET /api/timer/{shop}")
    return TimerListEnvelope(timers=[TimerResponse.model_validate(t) for t in timers])


@router.put("/{timer_id}", response_model=TimerEnvelope, responses=_ERROR_RESPONSES)
async def update_timer(
    timer_id: str,
    request: Request,
    session_store_domain: str | None = Depends(get_session_store_domain),
    service: TimerService = Depends(get_timer_service),
) -> TimerEnvelope | JSONResponse:
    """Partially update a timer; the merged start/end must stay valid."""
    try:
        payload = await _read_json_body(request)
        timer = await service.update_timer(timer_id, payload, session_store_domain)
    except EntityNotFoundError:
        return _error(status.HTTP_404_NOT_FOUND, "Timer not found")
    except ForbiddenError:
        return _error(status.HTTP_403_FORBIDDEN, "Forbidden")
    except TimerValidationError as e:
        return _error(status.HTTP_400_BAD_REQUEST, e.message, e.details)
    except Exception:
        return _internal_error("PUT /api/timer/{id}")
    return TimerEnvelope(timer=TimerResponse.model_validate(timer))


@router.delete("/{timer_id}", response_model=SuccessResponse, responses=_ERROR_RESPONSES)
async def delete_timer(
    timer_id: str,
    session_store_domain: str | None = Depends(get_session_store_domain),
    service: TimerService = Depends(get_timer_service),
) -> SuccessResponse | JSONResponse:
    """Delete a timer owned by the caller's store."""
    try:
        await service.delete_timer(timer_id, session_store_domain)
    except EntityNotFoundError:
        return _error(status.HTTP_404_NOT_FOUND, "Timer not found")
    except ForbiddenError:
        return _error(status.HTTP_403_FORBIDDEN, "Forbidden")
    except Exception:
        return _internal_error("DELETE /api/timer/{id}")
    return SuccessResponse()
