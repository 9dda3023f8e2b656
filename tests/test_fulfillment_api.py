"""Storefront fulfillment option endpoint tests."""

from collections.abc import Iterator
from datetime import date, datetime, time
from pathlib import Path
from zoneinfo import ZoneInfo

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from fulfillment.core.config import settings
from fulfillment.db import session as db_session
from fulfillment.db.base import Base
from fulfillment.main import app
from fulfillment.models import (
    DeliveryCalendarClosure,
    DeliveryFeeRule,
    DeliverySchedule,
    DeliveryZone,
    PickupLocation,
    ProductDeliveryRule,
)
from fulfillment.utils.time import BusinessClock, get_business_clock

MONDAY_MORNING = datetime(2025, 1, 6, 10, 0, tzinfo=ZoneInfo("America/Boise"))


def _build_test_engine(db_file: Path) -> Engine:
    return create_engine(
        f"sqlite:///{db_file}",
        connect_args={"check_same_thread": False},
    )


def _seed_fulfillment_data(testing_session_local: sessionmaker) -> dict[str, int]:
    with testing_session_local() as db:
        thursday = DeliverySchedule(
            name="Thursday Delivery",
            day_of_week=4,
            cutoff_day=2,
            cutoff_time=time(23, 59),
            lead_time_days=2,
            time_window="10:00 AM - 4:00 PM MT",
        )
        saturday = DeliverySchedule(
            name="Saturday Delivery",
            day_of_week=6,
            cutoff_day=2,
            cutoff_time=time(23, 59),
            lead_time_days=2,
            time_window="9:00 AM - 2:00 PM MT",
        )
        local = DeliveryZone(name="Local Boise", zip_codes=["83702", "83703"], fee_amount_cents=500, priority=10)
        extended = DeliveryZone(name="Extended", zip_codes=["83702", "83642"], fee_amount_cents=1000, priority=5)
        store = PickupLocation(name="Main Store", address="Boise", pickup_days=[4, 6], time_window="10-6")
        market = PickupLocation(
            name="Saturday Market",
            address="Downtown",
            pickup_days=[6],
            time_window="8-1",
            requires_preorder=True,
            cutoff_day=3,
            cutoff_time=time(12, 0),
        )
        db.add_all([thursday, saturday, local, extended, store, market])
        db.add_all(
            [
                ProductDeliveryRule(product_id="baguette", allowed_delivery_days=[6]),
                ProductDeliveryRule(product_id="pot-pie", allowed_delivery_days=[4]),
                ProductDeliveryRule(product_id="catering-tray", allow_pickup=False),
                ProductDeliveryRule(product_id="ice-cream-cake", allow_delivery=False),
                DeliveryCalendarClosure(closure_date=date(2025, 1, 9), reason="Oven repair", affects_delivery=False),
                DeliveryFeeRule(name="Free over $75", rule_type="order_amount", free_delivery_threshold_cents=7500),
            ]
        )
        db.commit()
        return {"thursday_id": thursday.id, "saturday_id": saturday.id, "local_id": local.id, "market_id": market.id}


@pytest.fixture()
def client_with_data(tmp_path: Path, monkeypatch) -> Iterator[tuple[TestClient, dict[str, int]]]:
    engine = _build_test_engine(tmp_path / "test_fulfillment_api.db")
    testing_session_local = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    Base.metadata.create_all(bind=engine)
    monkeypatch.setattr(db_session, "engine", engine)
    monkeypatch.setattr(db_session, "SessionLocal", testing_session_local)
    monkeypatch.setattr(settings, "seed_demo_data", False)
    app.dependency_overrides[get_business_clock] = lambda: BusinessClock(
        "America/Boise", now_provider=lambda: MONDAY_MORNING
    )

    ids = _seed_fulfillment_data(testing_session_local)
    try:
        with TestClient(app) as client:
            yield client, ids
    finally:
        app.dependency_overrides.clear()


def test_health() -> None:
    response = TestClient(app).get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_delivery_options_for_mixed_cart(client_with_data) -> None:
    """Cart ships on the latest item date and lists only schedules every item allows."""
    client, ids = client_with_data

    response = client.post(
        "/api/v1/fulfillment/delivery-options",
        json={
            "items": [{"product_id": "cookie", "quantity": 2}, {"product_id": "baguette", "quantity": 1}],
            "delivery_zip_code": "83702",
        },
    )

    assert response.status_code == 200
    body = response.json()
    assert body["available"] is True
    assert body["delivery_date"] == "2025-01-11"
    assert body["schedule_id"] == ids["saturday_id"]
    assert body["cutoff_at"] == "2025-01-07T23:59:00-07:00"
    assert body["cutoff_display"] == "Tuesday, January 7, 2025 11:59 PM MST"
    assert body["items_by_date"] == {"2025-01-09": ["cookie"], "2025-01-11": ["baguette"]}
    assert [option["delivery_date"] for option in body["delivery_dates"]] == ["2025-01-11"]
    assert body["fee_amount_cents"] == 500
    assert body["zone_id"] == ids["local_id"]
    assert body["zone_name"] == "Local Boise"


def test_delivery_options_unavailable_for_undeliverable_product(client_with_data) -> None:
    client, _ = client_with_data

    response = client.post(
        "/api/v1/fulfillment/delivery-options",
        json={"items": [{"product_id": "cookie"}, {"product_id": "ice-cream-cake"}], "delivery_zip_code": "83702"},
    )

    assert response.status_code == 200
    assert response.json()["available"] is False
    assert response.json()["delivery_dates"] == []


def test_delivery_options_unavailable_without_shared_schedule(client_with_data) -> None:
    client, _ = client_with_data

    response = client.post(
        "/api/v1/fulfillment/delivery-options",
        json={"items": [{"product_id": "pot-pie"}, {"product_id": "baguette"}]},
    )

    assert response.status_code == 200
    assert response.json()["available"] is False
    assert response.json()["delivery_date"] is None


def test_delivery_options_with_unserved_zip_report_no_zone(client_with_data) -> None:
    client, _ = client_with_data

    response = client.post(
        "/api/v1/fulfillment/delivery-options",
        json={"items": [{"product_id": "cookie"}], "delivery_zip_code": "00000"},
    )

    body = response.json()
    assert body["available"] is True
    assert body["delivery_date"] == "2025-01-09"
    assert body["fee_amount_cents"] == 0
    assert body["zone_id"] is None


def test_delivery_options_require_items(client_with_data) -> None:
    client, _ = client_with_data

    response = client.post("/api/v1/fulfillment/delivery-options", json={"items": []})

    assert response.status_code == 422


def test_pickup_options_per_location_with_closures(client_with_data) -> None:
    """The Thursday closure also closes pickup, so the store offers Saturday instead."""
    client, ids = client_with_data

    response = client.post("/api/v1/fulfillment/pickup-options", json={"items": [{"product_id": "cookie"}]})

    assert response.status_code == 200
    body = response.json()
    assert body["available"] is True
    assert body["fee_amount_cents"] == 0
    by_name = {location["name"]: location for location in body["locations"]}
    assert by_name["Main Store"]["pickup_date"] == "2025-01-11"
    assert by_name["Main Store"]["cutoff_at"] is None
    assert by_name["Saturday Market"]["location_id"] == ids["market_id"]
    assert by_name["Saturday Market"]["pickup_date"] == "2025-01-11"
    assert by_name["Saturday Market"]["cutoff_at"] == "2025-01-08T12:00:00-07:00"


def test_pickup_options_unavailable_when_product_disallows_pickup(client_with_data) -> None:
    client, _ = client_with_data

    response = client.post(
        "/api/v1/fulfillment/pickup-options",
        json={"items": [{"product_id": "cookie"}, {"product_id": "catering-tray"}]},
    )

    assert response.status_code == 200
    assert response.json() == {"available": False, "fee_amount_cents": 0, "locations": []}


def test_delivery_fee_quote(client_with_data) -> None:
    client, ids = client_with_data

    overlap = client.post("/api/v1/fulfillment/delivery-fee", json={"delivery_zip_code": "83702"})
    free = client.post(
        "/api/v1/fulfillment/delivery-fee",
        json={"delivery_zip_code": "83642", "order_amount_cents": 9000},
    )
    unserved = client.post("/api/v1/fulfillment/delivery-fee", json={"delivery_zip_code": "00000"})

    assert overlap.status_code == 200
    assert overlap.json()["fee_amount_cents"] == 500
    assert overlap.json()["zone_id"] == ids["local_id"]
    assert free.json()["fee_amount_cents"] == 0
    assert free.json()["zone_name"] == "Extended"
    assert free.json()["breakdown"]["zone_fee_cents"] == 1000
    assert unserved.json()["fee_amount_cents"] == 0
    assert unserved.json()["zone_id"] is None
    assert unserved.json()["breakdown"]["adjustments"][0]["reason"] == "ZIP code not in delivery zones"
