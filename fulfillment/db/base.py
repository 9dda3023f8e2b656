"""Shared SQLAlchemy base declarative class and model imports."""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for ORM models."""


# Import model modules so metadata is populated before create_all.
from fulfillment.models import delivery as _delivery  # noqa: E402,F401
from fulfillment.models import pickup as _pickup  # noqa: E402,F401
from fulfillment.models import product_rule as _product_rule  # noqa: E402,F401
