"""Working-day calendar for cohorts.

A working day is any Monday to Friday. The list of working days between two
dates is the expected attendance calendar every other feature compares
recorded attendance against.
"""
from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import is_weekend, iter_days, to_day, today


def calculate_working_days(start_date: date, end_date: date) -> int:
    """Count weekdays in ``[start_date, end_date]``; 0 when start is after end."""
    return sum(1 for day in iter_days(start_date, end_date) if not is_weekend(day))


def get_working_days_between(start_date: date, end_date: date) -> list[date]:
    return [day for day in iter_days(start_date, end_date) if not is_weekend(day)]


def get_all_days_between(start_date: date, end_date: date) -> list[date]:
    return list(iter_days(start_date, end_date))


def resolve_cohort_end(cohort_end_date: Optional[date], *, now: Optional[datetime] = None) -> date:
    """Cohort end date, defaulting to today and never later than today."""
    current = today(now)
    if cohort_end_date is None:
        return current
    return min(to_day(cohort_end_date), current)


def calculate_cohort_working_days(
    cohort_start_date: date,
    cohort_end_date: Optional[date] = None,
    *,
    now: Optional[datetime] = None,
) -> int:
    return calculate_working_days(cohort_start_date, resolve_cohort_end(cohort_end_date, now=now))


def is_valid_attendance_date(
    value: date,
    cohort_start_date: date,
    cohort_end_date: Optional[date] = None,
    *,
    now: Optional[datetime] = None,
) -> bool:
    """Weekday, inside the cohort period and not in the future."""
    check_date = to_day(value)
    current = today(now)
    cohort_end = to_day(cohort_end_date) if cohort_end_date is not None else current

    if is_weekend(check_date):
        return False
    if check_date < to_day(cohort_start_date) or check_date > cohort_end:
        return False
    if check_date > current:
        return False
    return True


def is_date_disabled(value: date, *, now: Optional[datetime] = None) -> bool:
    """Date picker rule: weekends and future dates cannot be selected."""
    return is_weekend(value) or to_day(value) > today(now)
