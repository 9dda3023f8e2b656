"""Database seeding helpers."""

import logging
from datetime import time

from sqlalchemy.orm import Session

from fulfillment.core.config import settings
from fulfillment.models import DeliverySchedule, DeliveryZone, PickupLocation

logger = logging.getLogger(__name__)


def ensure_seed_data(session: Session) -> None:
    """Seed default Thursday/Saturday delivery, Boise zones and the main store in development only."""
    if settings.app_env != "dev" or not settings.seed_demo_data:
        return

    if session.query(DeliverySchedule).first() is None:
        session.add_all(
            [
                DeliverySchedule(
                    name="Thursday Delivery",
                    day_of_week=4,
                    cutoff_day=2,
                    cutoff_time=time(23, 59),
                    lead_time_days=2,
                    time_window="10:00 AM - 4:00 PM MT",
                    is_active=True,
                ),
                DeliverySchedule(
                    name="Saturday Delivery",
                    day_of_week=6,
                    cutoff_day=2,
                    cutoff_time=time(23, 59),
                    lead_time_days=2,
                    time_window="9:00 AM - 2:00 PM MT",
                    is_active=True,
                ),
            ]
        )
        logger.info("[BOOTSTRAP] Seeded default delivery schedules")

    if session.query(DeliveryZone).first() is None:
        session.add_all(
            [
                DeliveryZone(
                    name="Local Boise",
                    zip_codes=["83702", "83703", "83704", "83705", "83706"],
                    fee_amount_cents=500,
                    priority=10,
                    is_active=True,
                ),
                DeliveryZone(
                    name="Extended Treasure Valley",
                    zip_codes=["83642", "83646", "83651", "83686", "83687"],
                    fee_amount_cents=1000,
                    priority=5,
                    is_active=True,
                ),
            ]
        )
        logger.info("[BOOTSTRAP] Seeded default delivery zones")

    if session.query(PickupLocation).first() is None:
        session.add(
            PickupLocation(
                name="Main Store",
                address="Boise, ID",
                pickup_days=[4, 6],
                time_window="10:00 AM - 6:00 PM MT",
                requires_preorder=False,
                lead_time_days=0,
                is_active=True,
            )
        )
        logger.info("[BOOTSTRAP] Seeded default pickup location")

    session.commit()
