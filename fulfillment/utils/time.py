"""Business-timezone clock and calendar helpers.

Delivery cutoffs and weekdays are defined in the bakery's local business
hours. Every conversion between instants and wall-clock fields goes through
``BusinessClock`` so the host timezone never leaks into weekday or cutoff
arithmetic. Weekdays use 0 = Sunday ... 6 = Saturday throughout the service.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import date, datetime, time, timezone
from zoneinfo import ZoneInfo

from fulfillment.core.config import settings

WEEKDAY_NAMES: tuple[str, ...] = (
    "Sunday",
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
)


class BusinessClock:
    """Clock pinned to a single IANA business timezone."""

    def __init__(self, timezone_name: str, now_provider: Callable[[], datetime] | None = None) -> None:
        self.timezone_name: str = timezone_name
        self.tz: ZoneInfo = ZoneInfo(timezone_name)
        self._now_provider = now_provider

    def now(self) -> datetime:
        """Return the current instant expressed in business time."""
        if self._now_provider is None:
            return datetime.now(self.tz)
        return self.to_business_time(self._now_provider())

    def to_business_time(self, instant: datetime) -> datetime:
        """Convert an aware instant to business-local wall-clock fields."""
        if instant.tzinfo is None or instant.utcoffset() is None:
            raise ValueError("Naive datetimes are ambiguous; pass a timezone-aware instant")
        return instant.astimezone(self.tz)

    def iso_date(self, instant: datetime) -> str:
        """Return the business-local calendar date as YYYY-MM-DD."""
        return self.to_business_time(instant).date().isoformat()

    def at(self, day: date, wall_time: time) -> datetime:
        """Return the instant at a business-local wall-clock time on a date."""
        return datetime.combine(day, wall_time.replace(second=0, microsecond=0), tzinfo=self.tz)

    def format(self, instant: datetime, style: str = "datetime") -> str:
        return format_business_time(self.to_business_time(instant), style)


def business_weekday(day: date) -> int:
    """Return weekday number with Sunday as 0."""
    return day.isoweekday() % 7


def parse_hhmm_time(value: str) -> time:
    """Parse time from HH:MM format string."""
    parsed: time = time.fromisoformat(value)
    return time(hour=parsed.hour, minute=parsed.minute)


def format_business_time(value: datetime, style: str = "datetime") -> str:
    """Format a business-local datetime for display."""
    weekday: str = WEEKDAY_NAMES[business_weekday(value.date())]
    hour: str = value.strftime("%I").lstrip("0") or "12"
    clock: str = f"{hour}:{value.strftime('%M %p')}"
    if style == "full":
        return f"{weekday}, {value.strftime('%B')} {value.day}, {value.year} {clock} {value.tzname()}"
    if style == "date":
        return f"{weekday[:3]}, {value.strftime('%b')} {value.day}, {value.year}"
    if style == "time":
        return f"{clock} {value.tzname()}"
    if style == "datetime":
        return f"{value.strftime('%b')} {value.day}, {clock}"
    raise ValueError(f"Unknown format style: {style}")


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def get_business_clock() -> BusinessClock:
    """Build the clock for the configured business timezone."""
    return BusinessClock(settings.business_timezone)
