"""Date and time helpers shared by events and the calendar.

All values are naive; Daybook has no notion of time zones.
"""

from __future__ import annotations

from datetime import date, datetime, time, timedelta

ONE_DAY = timedelta(days=1)


def overlaps(start_a: datetime, end_a: datetime, start_b: datetime, end_b: datetime) -> bool:
    """Return True if two datetime spans intersect.

    Spans that only touch at an endpoint do not overlap, so a meeting
    ending at 11:00 never overlaps one starting at 11:00.
    """
    return start_a < end_b and start_b < end_a


def overlaps_all_day(start_a: date, end_a: date, start_b: date, end_b: date) -> bool:
    """Return True if two inclusive date ranges share at least one day."""
    return start_a <= end_b and start_b <= end_a


def start_of_day(day: date) -> datetime:
    """First instant of ``day``."""
    return datetime.combine(day, time.min)


def end_of_day(day: date) -> datetime:
    """Last representable instant of ``day`` (23:59:59.999999)."""
    return datetime.combine(day, time.max)


def plus_hours(value: time, hours: int) -> time:
    """Add hours to a clock time, wrapping around midnight."""
    shifted = datetime.combine(date.min, value) + timedelta(hours=hours)
    return shifted.time()


def add_years(day: date, years: int) -> date:
    """Shift ``day`` by whole years; February 29 falls back to February 28."""
    try:
        return day.replace(year=day.year + years)
    except ValueError:
        return day.replace(year=day.year + years, day=28)
