"""Delivery schedule, closure, zone and fee rule ORM models."""

from datetime import date, datetime, time

from sqlalchemy import JSON, Boolean, Date, DateTime, ForeignKey, Integer, String, Time
from sqlalchemy.orm import Mapped, mapped_column, relationship

from fulfillment.db.base import Base
from fulfillment.utils.time import utc_now


class DeliverySchedule(Base):
    """Recurring weekly delivery offering."""

    __tablename__ = "delivery_schedules"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    day_of_week: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    cutoff_day: Mapped[int] = mapped_column(Integer, nullable=False)
    cutoff_time: Mapped[time] = mapped_column(Time, nullable=False)
    lead_time_days: Mapped[int] = mapped_column(Integer, nullable=False, default=2)
    time_window: Mapped[str | None] = mapped_column(String(100), nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True, index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utc_now)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
        onupdate=utc_now,
    )


class DeliveryCalendarClosure(Base):
    """Business-local calendar date closed for delivery and/or pickup."""

    __tablename__ = "delivery_calendar_closures"

    id: Mapped[int] = mapped_column(primary_key=True)
    closure_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    reason: Mapped[str] = mapped_column(String(500), nullable=False, default="")
    affects_delivery: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    affects_pickup: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utc_now)


class DeliveryZone(Base):
    """ZIP-code based delivery pricing region."""

    __tablename__ = "delivery_zones"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    zip_codes: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    fee_amount_cents: Mapped[int] = mapped_column(Integer, nullable=False)
    priority: Mapped[int] = mapped_column(Integer, nullable=False, default=0, index=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True, index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utc_now)

    fee_rules: Mapped[list["DeliveryFeeRule"]] = relationship(back_populates="zone")


class DeliveryFeeRule(Base):
    """Override or threshold applied on top of the zone fee."""

    __tablename__ = "delivery_fee_rules"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    rule_type: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    fee_amount_cents: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    priority: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    free_delivery_threshold_cents: Mapped[int | None] = mapped_column(Integer, nullable=True)
    delivery_zone_id: Mapped[int | None] = mapped_column(ForeignKey("delivery_zones.id"), nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True, index=True)

    zone: Mapped[DeliveryZone | None] = relationship(back_populates="fee_rules")
