"""Delivery scheduling ORM models."""

import datetime as dt
from datetime import datetime, timezone

from sqlalchemy import Boolean, Date, DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from storefront.db.base import Base


class DeliverySetting(Base):
    """Singleton settings row (id=1) with order cutoff and processing days."""

    __tablename__ = "delivery_settings"

    id: Mapped[int] = mapped_column(primary_key=True, default=1)
    cutoff_hour: Mapped[int] = mapped_column(Integer, nullable=False, default=18)
    cutoff_minute: Mapped[int] = mapped_column(Integer, nullable=False, default=30)
    processing_days: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )


class NonDeliveryDay(Base):
    """Blackout date; recurring rows match every year by month and day."""

    __tablename__ = "non_delivery_days"

    id: Mapped[int] = mapped_column(primary_key=True)
    date: Mapped[dt.date] = mapped_column(Date, nullable=False, index=True)
    reason: Mapped[str] = mapped_column(String(255), nullable=False)
    is_recurring_yearly: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
