"""Planner result records."""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field

from fulfillment.schemas.schedule import DeliveryZoneRead


class DeliveryDateResult(BaseModel):
    """Delivery occurrence offered by one schedule."""

    delivery_date: date
    cutoff_at: datetime
    time_window: str
    schedule_id: int
    schedule_name: str = ""
    day_of_week: int

    model_config = ConfigDict(frozen=True)


class CartDeliveryDateResult(BaseModel):
    """Single delivery date satisfying every item in the cart."""

    delivery_date: date
    cutoff_at: datetime
    time_window: str
    schedule_id: int
    items_by_date: dict[date, list[str]] = Field(default_factory=dict)


class PickupDateResult(BaseModel):
    """Pickup occurrence at one location; cutoff only for preorder locations."""

    pickup_date: date
    cutoff_at: datetime | None = None
    time_window: str
    location_id: int
    day_of_week: int

    model_config = ConfigDict(frozen=True)


class PickupLocationOption(BaseModel):
    location_id: int
    name: str
    address: str
    instructions: str | None = None
    pickup_date: date
    cutoff_at: datetime | None = None
    time_window: str


class FeeAdjustment(BaseModel):
    reason: str
    amount_cents: int


class FeeBreakdown(BaseModel):
    zone_fee_cents: int = 0
    adjustments: list[FeeAdjustment] = Field(default_factory=list)


class DeliveryFeeResult(BaseModel):
    """Delivery fee in cents; zone is None when the ZIP is not served."""

    fee_amount_cents: int = Field(ge=0)
    zone: DeliveryZoneRead | None = None
    breakdown: FeeBreakdown = Field(default_factory=FeeBreakdown)
