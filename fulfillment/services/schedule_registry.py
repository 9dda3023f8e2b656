"""Read-only access to configured schedules, locations, closures, rules and zones.

Rows are validated into plain read models before they reach the planners.
Malformed rows raise ``pydantic.ValidationError`` here.
"""

from collections.abc import Iterable
from typing import Literal

from sqlalchemy.orm import Session

from fulfillment.models import (
    DeliveryCalendarClosure,
    DeliveryFeeRule,
    DeliverySchedule,
    DeliveryZone,
    PickupLocation,
    ProductDeliveryRule,
)
from fulfillment.schemas.schedule import (
    CalendarClosureRead,
    DeliveryFeeRuleRead,
    DeliveryScheduleRead,
    DeliveryZoneRead,
    PickupLocationRead,
    ProductDeliveryRuleRead,
)


def list_active_delivery_schedules(db: Session) -> list[DeliveryScheduleRead]:
    """Return active delivery schedules ordered by weekday."""
    rows: list[DeliverySchedule] = (
        db.query(DeliverySchedule)
        .filter(DeliverySchedule.is_active.is_(True))
        .order_by(DeliverySchedule.day_of_week.asc(), DeliverySchedule.id.asc())
        .all()
    )
    return [DeliveryScheduleRead.model_validate(row) for row in rows]


def list_active_pickup_locations(db: Session) -> list[PickupLocationRead]:
    """Return active pickup locations."""
    rows: list[PickupLocation] = (
        db.query(PickupLocation)
        .filter(PickupLocation.is_active.is_(True))
        .order_by(PickupLocation.name.asc(), PickupLocation.id.asc())
        .all()
    )
    return [PickupLocationRead.model_validate(row) for row in rows]


def list_closures(db: Session, affects: Literal["delivery", "pickup"]) -> list[CalendarClosureRead]:
    """Return closure dates affecting one fulfillment method."""
    if affects == "delivery":
        flag = DeliveryCalendarClosure.affects_delivery
    elif affects == "pickup":
        flag = DeliveryCalendarClosure.affects_pickup
    else:
        raise ValueError(f"Unknown closure scope: {affects}")
    rows: list[DeliveryCalendarClosure] = (
        db.query(DeliveryCalendarClosure)
        .filter(flag.is_(True))
        .order_by(DeliveryCalendarClosure.closure_date.asc())
        .all()
    )
    return [CalendarClosureRead.model_validate(row) for row in rows]


def get_product_delivery_rule(db: Session, product_id: str) -> ProductDeliveryRuleRead | None:
    """Return the rule for one product, if configured."""
    row: ProductDeliveryRule | None = (
        db.query(ProductDeliveryRule).filter(ProductDeliveryRule.product_id == product_id).first()
    )
    if row is None:
        return None
    return ProductDeliveryRuleRead.model_validate(row)


def get_product_delivery_rules(db: Session, product_ids: Iterable[str]) -> dict[str, ProductDeliveryRuleRead]:
    """Return configured rules keyed by product id."""
    unique_ids: list[str] = list(dict.fromkeys(product_ids))
    if not unique_ids:
        return {}
    rows: list[ProductDeliveryRule] = (
        db.query(ProductDeliveryRule).filter(ProductDeliveryRule.product_id.in_(unique_ids)).all()
    )
    return {row.product_id: ProductDeliveryRuleRead.model_validate(row) for row in rows}


def list_active_delivery_zones(db: Session) -> list[DeliveryZoneRead]:
    """Return active zones, highest priority first."""
    rows: list[DeliveryZone] = (
        db.query(DeliveryZone)
        .filter(DeliveryZone.is_active.is_(True))
        .order_by(DeliveryZone.priority.desc(), DeliveryZone.id.asc())
        .all()
    )
    return [DeliveryZoneRead.model_validate(row) for row in rows]


def list_active_delivery_fee_rules(db: Session) -> list[DeliveryFeeRuleRead]:
    rows: list[DeliveryFeeRule] = (
        db.query(DeliveryFeeRule)
        .filter(DeliveryFeeRule.is_active.is_(True))
        .order_by(DeliveryFeeRule.priority.desc(), DeliveryFeeRule.id.asc())
        .all()
    )
    return [DeliveryFeeRuleRead.model_validate(row) for row in rows]
