"""Storefront fulfillment option endpoints."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from fulfillment.db.session import get_db
from fulfillment.schemas.fulfillment import (
    DeliveryFeeRequest,
    DeliveryFeeResponse,
    DeliveryOptionsRequest,
    DeliveryOptionsResponse,
    PickupOptionsRequest,
    PickupOptionsResponse,
)
from fulfillment.schemas.planning import CartDeliveryDateResult, DeliveryDateResult, DeliveryFeeResult
from fulfillment.services import schedule_registry
from fulfillment.services.delivery_planner import available_cart_delivery_dates, get_cart_delivery_date
from fulfillment.services.pickup_planner import get_cart_pickup_locations
from fulfillment.services.zone_service import PICKUP_FEE_CENTS, calculate_delivery_fee
from fulfillment.utils.time import BusinessClock, get_business_clock

router: APIRouter = APIRouter()


def _fee_response(result: DeliveryFeeResult) -> DeliveryFeeResponse:
    return DeliveryFeeResponse(
        fee_amount_cents=result.fee_amount_cents,
        zone_id=result.zone.id if result.zone else None,
        zone_name=result.zone.name if result.zone else None,
        breakdown=result.breakdown,
    )


@router.post("/delivery-options", response_model=DeliveryOptionsResponse)
def get_delivery_options(
    payload: DeliveryOptionsRequest,
    db: Session = Depends(get_db),
    clock: BusinessClock = Depends(get_business_clock),
) -> DeliveryOptionsResponse:
    """Return the cart delivery date, per-schedule options and the ZIP fee."""
    schedules = schedule_registry.list_active_delivery_schedules(db)
    closures = schedule_registry.list_closures(db, affects="delivery")
    rules = schedule_registry.get_product_delivery_rules(db, (item.product_id for item in payload.items))
    order_instant = clock.now()

    cart_date: CartDeliveryDateResult | None = get_cart_delivery_date(
        payload.items,
        schedules=schedules,
        closures=closures,
        rules=rules,
        order_instant=order_instant,
        clock=clock,
    )
    if cart_date is None:
        return DeliveryOptionsResponse(available=False)

    options: list[DeliveryDateResult] = available_cart_delivery_dates(
        payload.items,
        schedules=schedules,
        closures=closures,
        rules=rules,
        order_instant=order_instant,
        clock=clock,
    )
    response = DeliveryOptionsResponse(
        available=True,
        delivery_date=cart_date.delivery_date,
        cutoff_at=cart_date.cutoff_at,
        cutoff_display=clock.format(cart_date.cutoff_at, "full"),
        time_window=cart_date.time_window,
        schedule_id=cart_date.schedule_id,
        items_by_date=cart_date.items_by_date,
        delivery_dates=options,
    )
    if payload.delivery_zip_code:
        fee = calculate_delivery_fee(
            schedule_registry.list_active_delivery_zones(db),
            payload.delivery_zip_code,
            fee_rules=schedule_registry.list_active_delivery_fee_rules(db),
        )
        response.fee_amount_cents = fee.fee_amount_cents
        response.zone_id = fee.zone.id if fee.zone else None
        response.zone_name = fee.zone.name if fee.zone else None
    return response


@router.post("/pickup-options", response_model=PickupOptionsResponse)
def get_pickup_options(
    payload: PickupOptionsRequest,
    db: Session = Depends(get_db),
    clock: BusinessClock = Depends(get_business_clock),
) -> PickupOptionsResponse:
    """Return pickup locations able to serve the whole cart."""
    locations = get_cart_pickup_locations(
        payload.items,
        schedule_registry.list_active_pickup_locations(db),
        closures=schedule_registry.list_closures(db, affects="pickup"),
        rules=schedule_registry.get_product_delivery_rules(db, (item.product_id for item in payload.items)),
        order_instant=clock.now(),
        clock=clock,
    )
    return PickupOptionsResponse(available=bool(locations), fee_amount_cents=PICKUP_FEE_CENTS, locations=locations)


@router.post("/delivery-fee", response_model=DeliveryFeeResponse)
def quote_delivery_fee(payload: DeliveryFeeRequest, db: Session = Depends(get_db)) -> DeliveryFeeResponse:
    result: DeliveryFeeResult = calculate_delivery_fee(
        schedule_registry.list_active_delivery_zones(db),
        payload.delivery_zip_code,
        fee_rules=schedule_registry.list_active_delivery_fee_rules(db),
        order_amount_cents=payload.order_amount_cents,
    )
    return _fee_response(result)
