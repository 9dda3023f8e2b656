"""Pickup date planning for pickup locations."""

import logging
from collections.abc import Iterable, Mapping, Sequence
from datetime import date, datetime

from fulfillment.core.config import settings
from fulfillment.schemas.planning import PickupDateResult, PickupLocationOption
from fulfillment.schemas.schedule import (
    CalendarClosureRead,
    CartItem,
    PickupLocationRead,
    ProductDeliveryRuleRead,
)
from fulfillment.services.cutoff_service import (
    cutoff_instant,
    is_before_cutoff,
    next_week_occurrence,
    resolve_occurrence,
)
from fulfillment.utils.time import BusinessClock

logger = logging.getLogger(__name__)


def pickup_closure_dates(closures: Iterable[CalendarClosureRead]) -> set[date]:
    return {closure.closure_date for closure in closures if closure.affects_pickup}


def available_pickup_dates(
    location: PickupLocationRead,
    *,
    closures: Iterable[CalendarClosureRead] = (),
    rule: ProductDeliveryRuleRead | None = None,
    order_instant: datetime | None = None,
    clock: BusinessClock,
    max_dates: int | None = None,
) -> list[PickupDateResult]:
    """Return pickup options for each of the location's weekdays, soonest first.

    Preorder locations evaluate their cutoff once and apply it to every
    pickup weekday; other locations accept any future occurrence.
    """
    if not location.is_active or not location.pickup_days:
        return []
    if rule is not None and not rule.allow_pickup:
        logger.debug("[PICKUP] product=%s does not allow pickup", rule.product_id)
        return []

    now: datetime = clock.to_business_time(order_instant) if order_instant is not None else clock.now()
    closed_dates: set[date] = pickup_closure_dates(closures)

    lead_time_days: int = location.lead_time_days
    if rule is not None and rule.minimum_lead_time_days is not None:
        lead_time_days = rule.minimum_lead_time_days

    before_cutoff: bool = True
    if location.has_cutoff:
        before_cutoff = is_before_cutoff(now, location.cutoff_day, location.cutoff_time)

    options: list[PickupDateResult] = []
    for day in location.pickup_days:
        pickup_date: date = resolve_occurrence(
            day,
            now=now,
            before_cutoff=before_cutoff,
            lead_time_days=lead_time_days,
            closed_dates=closed_dates,
            rollover=next_week_occurrence,
        )
        cutoff_at: datetime | None = None
        if location.has_cutoff:
            cutoff_at = cutoff_instant(pickup_date, location.cutoff_day, location.cutoff_time, clock)
        options.append(
            PickupDateResult(
                pickup_date=pickup_date,
                cutoff_at=cutoff_at,
                time_window=location.time_window,
                location_id=location.id,
                day_of_week=day,
            )
        )

    options.sort(key=lambda option: option.pickup_date)
    limit: int = settings.pickup_max_dates if max_dates is None else max_dates
    return options[:limit]


def next_pickup_date(
    location: PickupLocationRead,
    *,
    closures: Iterable[CalendarClosureRead] = (),
    rule: ProductDeliveryRuleRead | None = None,
    order_instant: datetime | None = None,
    clock: BusinessClock,
) -> PickupDateResult | None:
    """Return the earliest pickup date at a location, or None."""
    options: list[PickupDateResult] = available_pickup_dates(
        location,
        closures=closures,
        rule=rule,
        order_instant=order_instant,
        clock=clock,
        max_dates=1,
    )
    return options[0] if options else None


def _location_option(location: PickupLocationRead, result: PickupDateResult) -> PickupLocationOption:
    return PickupLocationOption(
        location_id=location.id,
        name=location.name,
        address=location.address,
        instructions=location.instructions,
        pickup_date=result.pickup_date,
        cutoff_at=result.cutoff_at,
        time_window=result.time_window,
    )


def get_available_pickup_locations(
    locations: Sequence[PickupLocationRead],
    *,
    closures: Iterable[CalendarClosureRead] = (),
    rule: ProductDeliveryRuleRead | None = None,
    order_instant: datetime | None = None,
    clock: BusinessClock,
) -> list[PickupLocationOption]:
    """Return every active location with its own earliest pickup date."""
    closure_list: list[CalendarClosureRead] = list(closures)
    instant: datetime = order_instant if order_instant is not None else clock.now()
    results: list[PickupLocationOption] = []
    for location in locations:
        result: PickupDateResult | None = next_pickup_date(
            location,
            closures=closure_list,
            rule=rule,
            order_instant=instant,
            clock=clock,
        )
        if result is None:
            logger.debug("[PICKUP] location=%s has no pickup date", location.id)
            continue
        results.append(_location_option(location, result))
    return results


def get_cart_pickup_locations(
    items: Sequence[CartItem],
    locations: Sequence[PickupLocationRead],
    *,
    closures: Iterable[CalendarClosureRead] = (),
    rules: Mapping[str, ProductDeliveryRuleRead] | None = None,
    order_instant: datetime | None = None,
    clock: BusinessClock,
) -> list[PickupLocationOption]:
    """Return locations able to hand over the whole cart, with the cart pickup date.

    Per location the cart date is the latest of the items' earliest dates; a
    location is omitted when any product cannot be picked up there.
    """
    if not items:
        return []

    rules = rules or {}
    closure_list: list[CalendarClosureRead] = list(closures)
    instant: datetime = order_instant if order_instant is not None else clock.now()
    product_ids: list[str] = list(dict.fromkeys(item.product_id for item in items))

    results: list[PickupLocationOption] = []
    for location in locations:
        per_product: list[PickupDateResult | None] = [
            next_pickup_date(
                location,
                closures=closure_list,
                rule=rules.get(product_id),
                order_instant=instant,
                clock=clock,
            )
            for product_id in product_ids
        ]
        if any(result is None for result in per_product):
            logger.debug("[PICKUP] location=%s cannot serve the whole cart", location.id)
            continue
        latest: PickupDateResult = max(per_product, key=lambda result: result.pickup_date)
        results.append(_location_option(location, latest))
    return results
