"""Delivery zone lookup and delivery fee calculation."""

import logging
from collections.abc import Iterable, Sequence

from fulfillment.schemas.planning import DeliveryFeeResult, FeeAdjustment, FeeBreakdown
from fulfillment.schemas.schedule import DeliveryFeeRuleRead, DeliveryZoneRead

logger = logging.getLogger(__name__)

PICKUP_FEE_CENTS: int = 0
NO_ZONE_REASON: str = "ZIP code not in delivery zones"


def resolve_zone(zones: Iterable[DeliveryZoneRead], zip_code: str) -> DeliveryZoneRead | None:
    """Return the highest-priority active zone containing the ZIP code.

    Equal priorities keep the order zones were supplied in.
    """
    normalized_zip: str = zip_code.strip()
    active_zones: list[DeliveryZoneRead] = [zone for zone in zones if zone.is_active]
    for zone in sorted(active_zones, key=lambda zone: zone.priority, reverse=True):
        if normalized_zip in zone.zip_codes:
            return zone
    return None


def _apply_fee_rules(
    fee_amount_cents: int,
    zone: DeliveryZoneRead,
    fee_rules: Sequence[DeliveryFeeRuleRead],
    order_amount_cents: int | None,
) -> tuple[int, list[FeeAdjustment]]:
    adjustments: list[FeeAdjustment] = []
    active_rules: list[DeliveryFeeRuleRead] = sorted(
        (rule for rule in fee_rules if rule.is_active),
        key=lambda rule: rule.priority,
        reverse=True,
    )

    zone_override: DeliveryFeeRuleRead | None = next(
        (rule for rule in active_rules if rule.rule_type == "zone" and rule.delivery_zone_id == zone.id),
        None,
    )
    if zone_override is not None and zone_override.fee_amount_cents != fee_amount_cents:
        adjustments.append(
            FeeAdjustment(
                reason=zone_override.name or "Zone fee override",
                amount_cents=zone_override.fee_amount_cents - fee_amount_cents,
            )
        )
        fee_amount_cents = zone_override.fee_amount_cents

    if order_amount_cents is None:
        return fee_amount_cents, adjustments

    for rule in active_rules:
        if rule.rule_type != "order_amount" or rule.free_delivery_threshold_cents is None:
            continue
        if rule.delivery_zone_id is not None and rule.delivery_zone_id != zone.id:
            continue
        if order_amount_cents >= rule.free_delivery_threshold_cents:
            if fee_amount_cents > 0:
                adjustments.append(FeeAdjustment(reason=rule.name or "Free delivery threshold", amount_cents=-fee_amount_cents))
            fee_amount_cents = 0
            break

    return fee_amount_cents, adjustments


def calculate_delivery_fee(
    zones: Iterable[DeliveryZoneRead],
    zip_code: str,
    *,
    fee_rules: Sequence[DeliveryFeeRuleRead] = (),
    order_amount_cents: int | None = None,
) -> DeliveryFeeResult:
    """Return the delivery fee for a ZIP code.

    An unserved ZIP yields a zero fee and no zone; deciding to reject the
    order is left to the caller.
    """
    zone: DeliveryZoneRead | None = resolve_zone(zones, zip_code)
    if zone is None:
        logger.info("[ZONES] ZIP %s is not in any active delivery zone", zip_code)
        return DeliveryFeeResult(
            fee_amount_cents=0,
            zone=None,
            breakdown=FeeBreakdown(
                zone_fee_cents=0,
                adjustments=[FeeAdjustment(reason=NO_ZONE_REASON, amount_cents=0)],
            ),
        )

    fee_amount_cents, adjustments = _apply_fee_rules(zone.fee_amount_cents, zone, fee_rules, order_amount_cents)
    return DeliveryFeeResult(
        fee_amount_cents=fee_amount_cents,
        zone=zone,
        breakdown=FeeBreakdown(zone_fee_cents=zone.fee_amount_cents, adjustments=adjustments),
    )
