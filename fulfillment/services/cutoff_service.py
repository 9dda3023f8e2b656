"""Weekly cutoff evaluation and weekday occurrence resolution.

All inputs are already in business time; nothing here converts timezones
except ``cutoff_instant``, which asks the clock to pin a wall-clock time.
"""

import logging
from collections.abc import Callable, Collection
from datetime import date, datetime, time, timedelta

from fulfillment.utils.time import BusinessClock, business_weekday

logger = logging.getLogger(__name__)

WEEK: timedelta = timedelta(days=7)


def is_before_cutoff(now: datetime, cutoff_day: int, cutoff_time: time) -> bool:
    """Return True while the current ordering cycle is still open.

    The cutoff minute itself still counts as before the cutoff.
    """
    current_day: int = business_weekday(now.date())
    if current_day < cutoff_day:
        return True
    if current_day > cutoff_day:
        return False
    return (now.hour, now.minute) <= (cutoff_time.hour, cutoff_time.minute)


def _as_date(value: date | datetime) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


def next_occurrence(target_weekday: int, from_time: date | datetime) -> date:
    """Return the first date on or after from_time falling on target_weekday."""
    start: date = _as_date(from_time)
    days_until: int = (target_weekday - business_weekday(start)) % 7
    return start + timedelta(days=days_until)


def week_after_next(target_weekday: int, from_time: date | datetime) -> date:
    return next_occurrence(target_weekday, from_time) + WEEK


def next_week_occurrence(target_weekday: int, from_time: date | datetime) -> date:
    """Return target_weekday in the Sunday-to-Saturday week after the one containing from_time."""
    start: date = _as_date(from_time)
    next_sunday: date = start + timedelta(days=7 - business_weekday(start))
    return next_sunday + timedelta(days=target_weekday)


def skip_closures(candidate: date, closed_dates: Collection[date]) -> date:
    """Move a candidate forward whole weeks until it is not a closure date."""
    while candidate in closed_dates:
        logger.debug("[CALENDAR] %s is closed; trying %s", candidate, candidate + WEEK)
        candidate += WEEK
    return candidate


def roll_to_lead_time(candidate: date, minimum: date) -> date:
    """Move a candidate forward whole weeks until it meets the minimum date."""
    while candidate < minimum:
        candidate += WEEK
    return candidate


def cutoff_instant(occurrence: date, cutoff_day: int, cutoff_time: time, clock: BusinessClock) -> datetime:
    """Return the order-by instant for a specific occurrence.

    The cutoff falls on cutoff_day of the same week, at or before the
    occurrence itself.
    """
    days_back: int = (business_weekday(occurrence) - cutoff_day) % 7
    return clock.at(occurrence - timedelta(days=days_back), cutoff_time)


def resolve_occurrence(
    target_weekday: int,
    *,
    now: datetime,
    before_cutoff: bool,
    lead_time_days: int,
    closed_dates: Collection[date],
    rollover: Callable[[int, date | datetime], date] = week_after_next,
) -> date:
    """Apply cutoff rollover, lead time and closures to one weekday.

    rollover picks the candidate once the cutoff has passed.
    """
    if before_cutoff:
        candidate: date = next_occurrence(target_weekday, now)
    else:
        candidate = rollover(target_weekday, now)
    minimum: date = now.date() + timedelta(days=lead_time_days)
    candidate = roll_to_lead_time(candidate, minimum)
    return skip_closures(candidate, closed_dates)
