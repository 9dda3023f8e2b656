"""Application configuration."""

from os import getenv

from pydantic import BaseModel


class Settings(BaseModel):
    """Runtime settings for the fulfillment service."""

    app_name: str = "bakery fulfillment API"
    app_env: str = getenv("APP_ENV", "dev")
    debug: bool = getenv("DEBUG", "0") == "1"
    database_url: str = getenv("DATABASE_URL", "sqlite:///./fulfillment.db")
    business_timezone: str = getenv("BUSINESS_TIMEZONE", "America/Boise")
    pickup_max_dates: int = int(getenv("PICKUP_MAX_DATES", "4"))
    seed_demo_data: bool = getenv("SEED_DEMO_DATA", "1") == "1"


settings: Settings = Settings()
