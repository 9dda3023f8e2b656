"""Fulfillment models package."""

from fulfillment.models.delivery import DeliveryCalendarClosure, DeliveryFeeRule, DeliverySchedule, DeliveryZone
from fulfillment.models.pickup import PickupLocation
from fulfillment.models.product_rule import ProductDeliveryRule

__all__ = [
    "DeliverySchedule", "DeliveryCalendarClosure", "DeliveryZone", "DeliveryFeeRule", "PickupLocation",
    "ProductDeliveryRule",
]
