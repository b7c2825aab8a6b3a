"""
Helpers for the integer nanosecond ticks used for all stored dates.
Ticks count nanoseconds since the Unix epoch, in UTC.
"""

from datetime import date, datetime, time, timedelta, timezone
from typing import Tuple

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
NANOS_PER_MICROSECOND = 1_000

START_OF_DAY = time(0, 0, 0)
END_OF_DAY = time(23, 59, 59)


def datetime_to_nanos(value: datetime) -> int:
    """Convert a datetime to ticks. Naive datetimes are taken as UTC."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return ((value - EPOCH) // timedelta(microseconds=1)) * NANOS_PER_MICROSECOND


def nanos_to_datetime(ticks: int) -> datetime:
    return EPOCH + timedelta(microseconds=ticks // NANOS_PER_MICROSECOND)


def date_to_nanos(day: date, at: time = START_OF_DAY) -> int:
    return datetime_to_nanos(datetime.combine(day, at, tzinfo=timezone.utc))


def day_range(date_from: date, date_to: date) -> Tuple[int, int]:
    """
    Tick bounds for a calendar-date range.

    `date_from` starts at 00:00:00 and `date_to` ends at 23:59:59, matching
    the range a statement search form submits. An inverted range is passed
    through unchanged.
    """
    return date_to_nanos(date_from, START_OF_DAY), date_to_nanos(date_to, END_OF_DAY)


def format_nanos_date(ticks: int) -> str:
    """Render ticks as D/M/YYYY for statements, without zero padding."""
    moment = nanos_to_datetime(ticks)
    return f"{moment.day}/{moment.month}/{moment.year}"
