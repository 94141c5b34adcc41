"""SQLAlchemy ORM model for the Timer entity."""

from datetime import datetime, timezone
from typing import Any

from sqlalchemy import JSON, Boolean, DateTime, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from countdown_timers.infrastructure.database.base import Base


class TimerModel(Base):
    """ORM model — maps to the 'timers' table."""

    __tablename__ = "timers"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    store_domain: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    product_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    start_time: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    end_time: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    message: Mapped[str] = mapped_column(Text, nullable=False, default="")
    styles: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)
    urgency_minutes: Mapped[int] = mapped_column(Integer, nullable=False, default=5)
    active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True, index=True)
    # "metadata" is reserved on declarative classes
    metadata_: Mapped[dict[str, Any]] = mapped_column(
        "metadata", JSON, nullable=False, default=dict
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    __table_args__ = (
        Index("ix_timers_store_product", "store_domain", "product_id"),
    )

    def __repr__(self) -> str:
        return (
            f"<TimerModel(id={self.id}, store='{self.store_domain}', "
            f"product='{self.product_id}')>"
        )
