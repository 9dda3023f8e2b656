"""Request and response schemas for storefront fulfillment options."""

from datetime import date, datetime

from pydantic import BaseModel, Field

from fulfillment.schemas.planning import DeliveryDateResult, FeeBreakdown, PickupLocationOption
from fulfillment.schemas.schedule import CartItem


class DeliveryOptionsRequest(BaseModel):
    """Cart contents and optional ZIP code for delivery quoting."""

    items: list[CartItem] = Field(min_length=1)
    delivery_zip_code: str | None = None


class DeliveryOptionsResponse(BaseModel):
    available: bool
    delivery_date: date | None = None
    cutoff_at: datetime | None = None
    cutoff_display: str | None = None
    time_window: str | None = None
    schedule_id: int | None = None
    items_by_date: dict[date, list[str]] = Field(default_factory=dict)
    delivery_dates: list[DeliveryDateResult] = Field(default_factory=list)
    fee_amount_cents: int = 0
    zone_id: int | None = None
    zone_name: str | None = None


class PickupOptionsRequest(BaseModel):
    items: list[CartItem] = Field(min_length=1)


class PickupOptionsResponse(BaseModel):
    available: bool
    fee_amount_cents: int = 0
    locations: list[PickupLocationOption] = Field(default_factory=list)


class DeliveryFeeRequest(BaseModel):
    delivery_zip_code: str = Field(min_length=1)
    order_amount_cents: int | None = Field(default=None, ge=0)


class DeliveryFeeResponse(BaseModel):
    """Serialized fee quote; zone fields are null for unserved ZIP codes."""

    fee_amount_cents: int
    zone_id: int | None = None
    zone_name: str | None = None
    breakdown: FeeBreakdown
