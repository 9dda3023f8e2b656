"""Schema exports."""

from fulfillment.schemas.fulfillment import (
    DeliveryFeeRequest,
    DeliveryFeeResponse,
    DeliveryOptionsRequest,
    DeliveryOptionsResponse,
    PickupOptionsRequest,
    PickupOptionsResponse,
)
from fulfillment.schemas.planning import (
    CartDeliveryDateResult,
    DeliveryDateResult,
    DeliveryFeeResult,
    FeeAdjustment,
    FeeBreakdown,
    PickupDateResult,
    PickupLocationOption,
)
from fulfillment.schemas.schedule import (
    CalendarClosureRead,
    CartItem,
    DeliveryFeeRuleRead,
    DeliveryScheduleRead,
    DeliveryZoneRead,
    PickupLocationRead,
    ProductDeliveryRuleRead,
)

__all__ = [
    "CalendarClosureRead",
    "CartDeliveryDateResult",
    "CartItem",
    "DeliveryDateResult",
    "DeliveryFeeRequest",
    "DeliveryFeeResponse",
    "DeliveryFeeResult",
    "DeliveryFeeRuleRead",
    "DeliveryOptionsRequest",
    "DeliveryOptionsResponse",
    "DeliveryScheduleRead",
    "DeliveryZoneRead",
    "FeeAdjustment",
    "FeeBreakdown",
    "PickupDateResult",
    "PickupLocationOption",
    "PickupLocationRead",
    "PickupOptionsRequest",
    "PickupOptionsResponse",
    "ProductDeliveryRuleRead",
]
