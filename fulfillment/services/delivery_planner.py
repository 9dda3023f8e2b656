"""Delivery date planning for single products and whole carts."""

import logging
from collections.abc import Iterable, Mapping, Sequence
from datetime import date, datetime

from fulfillment.schemas.planning import CartDeliveryDateResult, DeliveryDateResult
from fulfillment.schemas.schedule import (
    CalendarClosureRead,
    CartItem,
    DeliveryScheduleRead,
    ProductDeliveryRuleRead,
)
from fulfillment.services.cutoff_service import cutoff_instant, is_before_cutoff, resolve_occurrence
from fulfillment.utils.time import BusinessClock

logger = logging.getLogger(__name__)


def delivery_closure_dates(closures: Iterable[CalendarClosureRead]) -> set[date]:
    return {closure.closure_date for closure in closures if closure.affects_delivery}


def eligible_schedules(
    schedules: Iterable[DeliveryScheduleRead],
    rule: ProductDeliveryRuleRead | None,
) -> list[DeliveryScheduleRead]:
    """Return active schedules the product rule allows."""
    active: list[DeliveryScheduleRead] = [schedule for schedule in schedules if schedule.is_active]
    if rule is None:
        return active
    if not rule.allow_delivery:
        return []
    if rule.allowed_delivery_days is None:
        return active
    allowed: set[int] = set(rule.allowed_delivery_days)
    return [schedule for schedule in active if schedule.day_of_week in allowed]


def plan_schedule(
    schedule: DeliveryScheduleRead,
    *,
    now: datetime,
    closed_dates: set[date],
    rule: ProductDeliveryRuleRead | None,
    clock: BusinessClock,
) -> DeliveryDateResult:
    """Compute the next valid occurrence of one schedule."""
    lead_time_days: int = schedule.lead_time_days
    if rule is not None and rule.minimum_lead_time_days is not None:
        lead_time_days = rule.minimum_lead_time_days

    before_cutoff: bool = is_before_cutoff(now, schedule.cutoff_day, schedule.cutoff_time)
    delivery_date: date = resolve_occurrence(
        schedule.day_of_week,
        now=now,
        before_cutoff=before_cutoff,
        lead_time_days=lead_time_days,
        closed_dates=closed_dates,
    )
    logger.debug(
        "[DELIVERY] schedule=%s before_cutoff=%s lead_days=%s -> %s",
        schedule.id,
        before_cutoff,
        lead_time_days,
        delivery_date,
    )
    return DeliveryDateResult(
        delivery_date=delivery_date,
        cutoff_at=cutoff_instant(delivery_date, schedule.cutoff_day, schedule.cutoff_time, clock),
        time_window=schedule.time_window or "",
        schedule_id=schedule.id,
        schedule_name=schedule.name,
        day_of_week=schedule.day_of_week,
    )


def available_delivery_dates(
    schedules: Sequence[DeliveryScheduleRead],
    *,
    closures: Iterable[CalendarClosureRead] = (),
    rule: ProductDeliveryRuleRead | None = None,
    order_instant: datetime | None = None,
    clock: BusinessClock,
) -> list[DeliveryDateResult]:
    """Return one delivery option per eligible schedule, soonest first."""
    valid_schedules: list[DeliveryScheduleRead] = eligible_schedules(schedules, rule)
    if not valid_schedules:
        logger.debug("[DELIVERY] no eligible schedules for product=%s", rule.product_id if rule else None)
        return []

    now: datetime = clock.to_business_time(order_instant) if order_instant is not None else clock.now()
    closed_dates: set[date] = delivery_closure_dates(closures)
    options: list[DeliveryDateResult] = [
        plan_schedule(schedule, now=now, closed_dates=closed_dates, rule=rule, clock=clock)
        for schedule in valid_schedules
    ]
    return sorted(options, key=lambda option: (option.delivery_date, option.cutoff_at))


def next_delivery_date(
    schedules: Sequence[DeliveryScheduleRead],
    *,
    closures: Iterable[CalendarClosureRead] = (),
    rule: ProductDeliveryRuleRead | None = None,
    order_instant: datetime | None = None,
    clock: BusinessClock,
) -> DeliveryDateResult | None:
    """Return the earliest delivery across all eligible schedules, or None."""
    options: list[DeliveryDateResult] = available_delivery_dates(
        schedules,
        closures=closures,
        rule=rule,
        order_instant=order_instant,
        clock=clock,
    )
    if not options:
        return None
    return options[0]


def available_cart_delivery_dates(
    items: Sequence[CartItem],
    *,
    schedules: Sequence[DeliveryScheduleRead],
    closures: Iterable[CalendarClosureRead] = (),
    rules: Mapping[str, ProductDeliveryRuleRead] | None = None,
    order_instant: datetime | None = None,
    clock: BusinessClock,
) -> list[DeliveryDateResult]:
    """Return per-schedule options usable by every item in the cart.

    A schedule is offered only when each product's rule allows it; its date is
    the latest any item needs on that schedule.
    """
    if not items:
        return []

    rules = rules or {}
    now: datetime = clock.to_business_time(order_instant) if order_instant is not None else clock.now()
    closed_dates: set[date] = delivery_closure_dates(closures)
    product_ids: list[str] = list(dict.fromkeys(item.product_id for item in items))
    eligible_ids: list[set[int]] = [
        {schedule.id for schedule in eligible_schedules(schedules, rules.get(product_id))}
        for product_id in product_ids
    ]

    options: list[DeliveryDateResult] = []
    for schedule in schedules:
        if not all(schedule.id in ids for ids in eligible_ids):
            continue
        per_product: list[DeliveryDateResult] = [
            plan_schedule(schedule, now=now, closed_dates=closed_dates, rule=rules.get(product_id), clock=clock)
            for product_id in product_ids
        ]
        options.append(max(per_product, key=lambda result: result.delivery_date))
    return sorted(options, key=lambda option: (option.delivery_date, option.cutoff_at))


def get_cart_delivery_date(
    items: Sequence[CartItem],
    *,
    schedules: Sequence[DeliveryScheduleRead],
    closures: Iterable[CalendarClosureRead] = (),
    rules: Mapping[str, ProductDeliveryRuleRead] | None = None,
    order_instant: datetime | None = None,
    clock: BusinessClock,
) -> CartDeliveryDateResult | None:
    """Return the delivery date for the whole cart.

    Every item ships together on a schedule each product allows, on the
    earliest such schedule's latest item date. Returns None for an empty cart,
    when any product cannot be delivered at all, or when no schedule serves
    every product.
    """
    if not items:
        return None

    rules = rules or {}
    closure_list: list[CalendarClosureRead] = list(closures)
    instant: datetime = order_instant if order_instant is not None else clock.now()

    per_product: dict[str, DeliveryDateResult] = {}
    for item in items:
        if item.product_id in per_product:
            continue
        result: DeliveryDateResult | None = next_delivery_date(
            schedules,
            closures=closure_list,
            rule=rules.get(item.product_id),
            order_instant=instant,
            clock=clock,
        )
        if result is None:
            logger.info("[DELIVERY] product=%s has no delivery date; cart delivery unavailable", item.product_id)
            return None
        per_product[item.product_id] = result

    items_by_date: dict[date, list[str]] = {}
    for product_id, result in per_product.items():
        items_by_date.setdefault(result.delivery_date, []).append(product_id)

    shared: list[DeliveryDateResult] = available_cart_delivery_dates(
        items,
        schedules=schedules,
        closures=closure_list,
        rules=rules,
        order_instant=instant,
        clock=clock,
    )
    if not shared:
        logger.info("[DELIVERY] no schedule serves every cart item; cart delivery unavailable")
        return None

    chosen: DeliveryDateResult = shared[0]
    return CartDeliveryDateResult(
        delivery_date=chosen.delivery_date,
        cutoff_at=chosen.cutoff_at,
        time_window=chosen.time_window,
        schedule_id=chosen.schedule_id,
        items_by_date=dict(sorted(items_by_date.items())),
    )
