"""Per-product fulfillment rule ORM model."""

from sqlalchemy import JSON, Boolean, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from fulfillment.db.base import Base


class ProductDeliveryRule(Base):
    """Optional per-product override of schedule days, lead time and methods."""

    __tablename__ = "product_delivery_rules"

    id: Mapped[int] = mapped_column(primary_key=True)
    product_id: Mapped[str] = mapped_column(String(64), nullable=False, unique=True, index=True)
    allowed_delivery_days: Mapped[list[int] | None] = mapped_column(JSON, nullable=True)
    minimum_lead_time_days: Mapped[int | None] = mapped_column(Integer, nullable=True)
    allow_pickup: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    allow_delivery: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
