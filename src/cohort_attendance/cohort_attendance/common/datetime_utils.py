from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Iterator, Optional

from ..core.constants import ISO_DATE_FORMAT


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, ISO_DATE_FORMAT).date()


def try_parse_iso_date(value: str) -> Optional[date]:
    try:
        return parse_iso_date(value.strip())
    except (AttributeError, ValueError):
        return None


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def today(now: Optional[datetime] = None) -> date:
    return (now or now_local()).date()


def to_day(value: date) -> date:
    """Strip the time part so comparisons happen at day granularity."""
    if isinstance(value, datetime):
        return value.date()
    return value


def format_iso(value: date) -> str:
    return to_day(value).strftime(ISO_DATE_FORMAT)


def is_weekend(value: date) -> bool:
    return to_day(value).weekday() >= 5


def iter_days(start: date, end: date) -> Iterator[date]:
    current = to_day(start)
    last = to_day(end)
    while current <= last:
        yield current
        current += timedelta(days=1)


def days_since(value: date, now: Optional[datetime] = None) -> int:
    """Whole days between value and today; negative for future dates."""
    return (today(now) - to_day(value)).days


def get_month_bounds(year: int, month: int) -> tuple[date, date]:
    """First and last day of a calendar month (``month`` is 1-12)."""
    first_day = date(year, month, 1)
    if month == 12:
        next_month = date(year + 1, 1, 1)
    else:
        next_month = date(year, month + 1, 1)
    return first_day, next_month - timedelta(days=1)
