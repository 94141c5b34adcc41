"""Concrete repository implementation for Timer backed by SQLAlchemy."""

import logging
from datetime import datetime

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from countdown_timers.application.interfaces import TimerRepository
from countdown_timers.domain.entities import Timer, as_utc
from countdown_timers.domain.exceptions import EntityNotFoundError, StoreUnavailableError
from countdown_timers.infrastructure.database.models import TimerModel

logger = logging.getLogger(__name__)


class SQLAlchemyTimerRepository(TimerRepository):
    """Implements the TimerRepository port using SQLAlchemy async sessions.

    All instants are written as UTC; SQLite hands them back naive, so they
    are re-tagged as UTC on the way out.
    """

    def __init__(self, session: AsyncSession):
        self._session = session

    def _to_entity(self, model: TimerModel) -> Timer:
        """Map ORM model → domain entity."""
        return Timer(
            id=model.id,
            store_domain=model.store_domain,
            product_id=model.product_id,
            start_time=as_utc(model.start_time),
            end_time=as_utc(model.end_time),
            message=model.message,
            styles=dict(model.styles or {}),
            urgency_minutes=model.urgency_minutes,
            active=model.active,
            metadata=dict(model.metadata_ or {}),
            created_at=as_utc(model.created_at),
            updated_at=as_utc(model.updated_at),
        )

    def _to_model(self, entity: Timer) -> TimerModel:
        """Map domain entity → ORM model (for creation)."""
        return TimerModel(
            id=entity.id,
            store_domain=entity.store_domain,
            product_id=entity.product_id,
            start_time=as_utc(entity.start_time),
            end_time=as_utc(entity.end_time),
            message=entity.message,
            styles=entity.styles,
            urgency_minutes=entity.urgency_minutes,
            active=entity.active,
            metadata_=entity.metadata,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )

    async def get_by_id(self, timer_id: str) -> Timer | None:
        try:
            result = await self._session.get(TimerModel, timer_id)
        except SQLAlchemyError as exc:
            raise StoreUnavailableError("get_by_id", exc) from exc
        return self._to_entity(result) if result else None

    async def find_active(
        self,
        store_domain: str,
        now: datetime,
        product_id: str | None = None,
    ) -> list[Timer]:
        now = as_utc(now)
        stmt = select(TimerModel).where(
            TimerModel.store_domain == store_domain,
            TimerModel.active.is_(True),
            TimerModel.start_time <= now,
            TimerModel.end_time >= now,
        )
        if product_id is not None:
            stmt = stmt.where(TimerModel.product_id == product_id)
        stmt = stmt.order_by(TimerModel.end_time.asc())

        try:
            result = await self._session.execute(stmt)
        except SQLAlchemyError as exc:
            raise StoreUnavailableError("find_active", exc) from exc
        return [self._to_entity(row) for row in result.scalars().all()]

    async def create(self, timer: Timer) -> Timer:
        model = self._to_model(timer)
        self._session.add(model)
        try:
            await self._session.flush()
        except SQLAlchemyError as exc:
            raise StoreUnavailableError("create", exc) from exc
        return self._to_entity(model)

    async def update(self, timer: Timer) -> Timer:
        try:
            model = await self._session.get(TimerModel, timer.id)
            if model is None:
                raise EntityNotFoundError("Timer", timer.id)
            model.product_id = timer.product_id
            model.start_time = as_utc(timer.start_time)
            model.end_time = as_utc(timer.end_time)
            model.message = timer.message
            model.styles = timer.styles
            model.urgency_minutes = timer.urgency_minutes
            model.active = timer.active
            model.metadata_ = timer.metadata
            model.updated_at = timer.updated_at
            await self._session.flush()
        except SQLAlchemyError as exc:
            raise StoreUnavailableError("update", exc) from exc
        return self._to_entity(model)

    async def delete(self, timer_id: str) -> bool:
        try:
            model = await self._session.get(TimerModel, timer_id)
            if model is None:
                return False
            await self._session.delete(model)
            await self._session.flush()
        except SQLAlchemyError as exc:
            raise StoreUnavailableError("delete", exc) from exc
        return True
