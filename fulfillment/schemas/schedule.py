"""Validated read models for schedules, locations, closures, rules and zones.

These are the plain entities the planners consume. Rows coming out of the
database are validated here, so malformed weekday lists or cutoff strings fail
at the registry boundary instead of deep inside date arithmetic.
"""

from datetime import date, time
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from fulfillment.utils.time import parse_hhmm_time

Weekday = int
FeeRuleType = Literal["base", "zone", "order_amount", "product_category", "custom"]


def _coerce_hhmm(value: object) -> object:
    if isinstance(value, str):
        return parse_hhmm_time(value)
    if isinstance(value, time):
        return value.replace(second=0, microsecond=0)
    return value


def _validate_weekdays(values: list[int]) -> list[int]:
    for value in values:
        if not 0 <= value <= 6:
            raise ValueError(f"Weekday must be between 0 (Sunday) and 6 (Saturday), got {value}")
    return sorted(set(values))


class DeliveryScheduleRead(BaseModel):
    """Recurring weekly delivery offering."""

    id: int
    name: str = ""
    day_of_week: Weekday = Field(ge=0, le=6)
    cutoff_day: Weekday = Field(ge=0, le=6)
    cutoff_time: time
    lead_time_days: int = Field(default=0, ge=0)
    time_window: str | None = None
    is_active: bool = True

    model_config = ConfigDict(from_attributes=True, frozen=True)

    @field_validator("cutoff_time", mode="before")
    @classmethod
    def normalize_cutoff_time(cls, value: object) -> object:
        return _coerce_hhmm(value)


class PickupLocationRead(BaseModel):
    """Pickup site with one or more pickup weekdays."""

    id: int
    name: str = ""
    address: str = ""
    pickup_days: list[Weekday]
    time_window: str = ""
    instructions: str | None = None
    requires_preorder: bool = False
    cutoff_day: Weekday | None = Field(default=None, ge=0, le=6)
    cutoff_time: time | None = None
    lead_time_days: int = Field(default=0, ge=0)
    is_active: bool = True

    model_config = ConfigDict(from_attributes=True, frozen=True)

    @field_validator("cutoff_time", mode="before")
    @classmethod
    def normalize_cutoff_time(cls, value: object) -> object:
        return _coerce_hhmm(value)

    @field_validator("pickup_days")
    @classmethod
    def check_pickup_days(cls, value: list[int]) -> list[int]:
        return _validate_weekdays(value)

    @property
    def has_cutoff(self) -> bool:
        """Cutoff only applies to preorder locations with both fields set."""
        return self.requires_preorder and self.cutoff_day is not None and self.cutoff_time is not None


class CalendarClosureRead(BaseModel):
    id: int
    closure_date: date
    reason: str = ""
    affects_delivery: bool = True
    affects_pickup: bool = True

    model_config = ConfigDict(from_attributes=True, frozen=True)


class ProductDeliveryRuleRead(BaseModel):
    """Per-product override; missing fields fall back to schedule defaults."""

    product_id: str
    allowed_delivery_days: list[Weekday] | None = None
    minimum_lead_time_days: int | None = Field(default=None, ge=0)
    allow_pickup: bool = True
    allow_delivery: bool = True

    model_config = ConfigDict(from_attributes=True, frozen=True)

    @field_validator("allowed_delivery_days")
    @classmethod
    def check_allowed_days(cls, value: list[int] | None) -> list[int] | None:
        if value is None:
            return None
        return _validate_weekdays(value)


class DeliveryZoneRead(BaseModel):
    """Named ZIP-code set with a flat fee in cents."""

    id: int
    name: str = ""
    zip_codes: list[str]
    fee_amount_cents: int = Field(ge=0)
    priority: int = 0
    is_active: bool = True

    model_config = ConfigDict(from_attributes=True, frozen=True)

    @field_validator("zip_codes")
    @classmethod
    def strip_zip_codes(cls, value: list[str]) -> list[str]:
        return [zip_code.strip() for zip_code in value]


class DeliveryFeeRuleRead(BaseModel):
    id: int
    name: str = ""
    rule_type: FeeRuleType
    fee_amount_cents: int = Field(default=0, ge=0)
    priority: int = 0
    free_delivery_threshold_cents: int | None = Field(default=None, ge=0)
    delivery_zone_id: int | None = None
    is_active: bool = True

    model_config = ConfigDict(from_attributes=True, frozen=True)


class CartItem(BaseModel):
    """Single cart line used for cart-level planning."""

    product_id: str = Field(min_length=1)
    quantity: int = Field(default=1, ge=1)
