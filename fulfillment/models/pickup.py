"""Pickup location ORM model."""

from datetime import datetime, time

from sqlalchemy import JSON, Boolean, DateTime, Integer, String, Text, Time
from sqlalchemy.orm import Mapped, mapped_column

from fulfillment.db.base import Base
from fulfillment.utils.time import utc_now


class PickupLocation(Base):
    """Physical pickup site with its own set of pickup weekdays."""

    __tablename__ = "pickup_locations"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    address: Mapped[str] = mapped_column(String(1000), nullable=False)
    pickup_days: Mapped[list[int]] = mapped_column(JSON, nullable=False, default=list)
    time_window: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    instructions: Mapped[str | None] = mapped_column(Text, nullable=True)
    requires_preorder: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    cutoff_day: Mapped[int | None] = mapped_column(Integer, nullable=True)
    cutoff_time: Mapped[time | None] = mapped_column(Time, nullable=True)
    lead_time_days: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True, index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utc_now)
