"""Cutoff evaluation and weekday occurrence tests."""

from datetime import date, datetime, time, timedelta
from zoneinfo import ZoneInfo

from fulfillment.services.cutoff_service import (
    cutoff_instant,
    is_before_cutoff,
    next_occurrence,
    next_week_occurrence,
    resolve_occurrence,
    roll_to_lead_time,
    skip_closures,
    week_after_next,
)
from fulfillment.utils.time import BusinessClock, business_weekday

BOISE = ZoneInfo("America/Boise")
TUESDAY_CUTOFF = time(23, 59)


def _mt(year: int, month: int, day: int, hour: int = 0, minute: int = 0, second: int = 0) -> datetime:
    return datetime(year, month, day, hour, minute, second, tzinfo=BOISE)


def test_before_cutoff_earlier_in_week() -> None:
    """Monday is before a Tuesday cutoff regardless of time."""
    assert is_before_cutoff(_mt(2025, 1, 6, 10, 0), 2, TUESDAY_CUTOFF) is True
    assert is_before_cutoff(_mt(2025, 1, 5, 23, 59), 2, TUESDAY_CUTOFF) is True


def test_after_cutoff_later_in_week() -> None:
    assert is_before_cutoff(_mt(2025, 1, 8, 9, 0), 2, TUESDAY_CUTOFF) is False
    assert is_before_cutoff(_mt(2025, 1, 11, 0, 0), 2, TUESDAY_CUTOFF) is False


def test_cutoff_minute_is_inclusive() -> None:
    """Orders placed during the cutoff minute are still accepted."""
    assert is_before_cutoff(_mt(2025, 1, 7, 23, 59), 2, TUESDAY_CUTOFF) is True
    assert is_before_cutoff(_mt(2025, 1, 7, 23, 59, 59), 2, TUESDAY_CUTOFF) is True
    assert is_before_cutoff(_mt(2025, 1, 7, 21, 31), 2, time(21, 30)) is False
    assert is_before_cutoff(_mt(2025, 1, 7, 20, 59), 2, time(21, 30)) is True


def test_cutoff_never_reopens_within_a_week() -> None:
    """Walking forward from Sunday, the result flips to closed once and stays closed."""
    instant = _mt(2025, 1, 5, 0, 0)
    end = _mt(2025, 1, 12, 0, 0)
    seen_closed = False
    while instant < end:
        before = is_before_cutoff(instant, 2, TUESDAY_CUTOFF)
        if seen_closed:
            assert before is False
        seen_closed = seen_closed or not before
        instant += timedelta(minutes=30)

    assert seen_closed is True


def test_next_occurrence_properties_for_every_weekday() -> None:
    """Result is on or after the reference, on the target weekday, within a week."""
    for offset in range(14):
        reference = date(2025, 1, 5) + timedelta(days=offset)
        for weekday in range(7):
            result = next_occurrence(weekday, reference)

            assert result >= reference
            assert business_weekday(result) == weekday
            assert (result - reference).days < 7
            if business_weekday(reference) == weekday:
                assert result == reference
            assert week_after_next(weekday, reference) == result + timedelta(days=7)


def test_next_occurrence_accepts_business_datetime() -> None:
    assert next_occurrence(4, _mt(2025, 1, 6, 10, 0)) == date(2025, 1, 9)
    assert next_occurrence(4, _mt(2025, 1, 9, 18, 0)) == date(2025, 1, 9)
    assert next_occurrence(4, _mt(2025, 1, 10, 8, 0)) == date(2025, 1, 16)


def test_skip_closures_moves_whole_weeks() -> None:
    """Back-to-back closures delay by multiple weeks without changing weekday."""
    closed = {date(2025, 1, 9), date(2025, 1, 16)}

    assert skip_closures(date(2025, 1, 9), closed) == date(2025, 1, 23)
    assert skip_closures(date(2025, 1, 11), closed) == date(2025, 1, 11)


def test_roll_to_lead_time() -> None:
    assert roll_to_lead_time(date(2025, 1, 16), date(2025, 1, 18)) == date(2025, 1, 23)
    assert roll_to_lead_time(date(2025, 1, 16), date(2025, 1, 16)) == date(2025, 1, 16)
    assert roll_to_lead_time(date(2025, 1, 9), date(2025, 2, 1)) == date(2025, 2, 6)


def test_cutoff_instant_shifts_back_within_week() -> None:
    clock = BusinessClock("America/Boise")

    assert cutoff_instant(date(2025, 1, 9), 2, TUESDAY_CUTOFF, clock) == _mt(2025, 1, 7, 23, 59)
    assert cutoff_instant(date(2025, 1, 11), 2, TUESDAY_CUTOFF, clock) == _mt(2025, 1, 7, 23, 59)
    assert cutoff_instant(date(2025, 1, 9), 4, time(8, 0), clock) == _mt(2025, 1, 9, 8, 0)


def test_resolve_occurrence_rolls_after_cutoff() -> None:
    """After the cutoff the occurrence moves to the week after next."""
    wednesday = _mt(2025, 1, 8, 9, 0)

    assert resolve_occurrence(4, now=wednesday, before_cutoff=True, lead_time_days=0, closed_dates=set()) == date(2025, 1, 9)
    assert resolve_occurrence(4, now=wednesday, before_cutoff=False, lead_time_days=0, closed_dates=set()) == date(2025, 1, 16)
    assert resolve_occurrence(
        4,
        now=wednesday,
        before_cutoff=False,
        lead_time_days=10,
        closed_dates={date(2025, 1, 23)},
    ) == date(2025, 1, 30)


def test_next_week_occurrence_lands_in_following_week() -> None:
    """Saturday already sits at the end of the week, so the coming Thursday is next week's."""
    assert next_week_occurrence(4, date(2025, 1, 11)) == date(2025, 1, 16)
    assert next_week_occurrence(4, date(2025, 1, 8)) == date(2025, 1, 16)
    assert next_week_occurrence(6, date(2025, 1, 11)) == date(2025, 1, 18)
    assert next_week_occurrence(0, _mt(2025, 1, 5, 8, 0)) == date(2025, 1, 12)


def test_resolve_occurrence_with_weekly_rollover() -> None:
    saturday = _mt(2025, 1, 11, 10, 0)

    assert resolve_occurrence(4, now=saturday, before_cutoff=False, lead_time_days=0, closed_dates=set()) == date(2025, 1, 23)
    assert resolve_occurrence(
        4,
        now=saturday,
        before_cutoff=False,
        lead_time_days=0,
        closed_dates=set(),
        rollover=next_week_occurrence,
    ) == date(2025, 1, 16)
