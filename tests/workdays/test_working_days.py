from datetime import date, datetime, timedelta

import pytest

from src.cohort_attendance.cohort_attendance.workdays.calculator import (
    calculate_cohort_working_days,
    calculate_working_days,
    get_all_days_between,
    get_working_days_between,
    is_date_disabled,
    is_valid_attendance_date,
)


def test_two_full_weeks_have_ten_working_days():
    assert calculate_working_days(date(2024, 1, 1), date(2024, 1, 12)) == 10


def test_single_day_range():
    assert calculate_working_days(date(2024, 1, 3), date(2024, 1, 3)) == 1
    assert calculate_working_days(date(2024, 1, 6), date(2024, 1, 6)) == 0
    assert calculate_working_days(date(2024, 1, 7), date(2024, 1, 7)) == 0


def test_start_after_end_is_zero():
    assert calculate_working_days(date(2024, 1, 12), date(2024, 1, 1)) == 0
    assert get_working_days_between(date(2024, 1, 12), date(2024, 1, 1)) == []


@pytest.mark.parametrize("split", range(0, 40))
def test_adjacent_ranges_add_up(split):
    start = date(2024, 1, 1)
    end = date(2024, 2, 9)
    middle = start + timedelta(days=split)

    left = calculate_working_days(start, middle)
    right = calculate_working_days(middle + timedelta(days=1), end)

    assert left + right == calculate_working_days(start, end)


def test_working_days_between_skips_weekend():
    assert get_working_days_between(date(2024, 1, 5), date(2024, 1, 8)) == [date(2024, 1, 5), date(2024, 1, 8)]


def test_all_days_between_keeps_weekend():
    assert len(get_all_days_between(date(2024, 1, 5), date(2024, 1, 8))) == 4


def test_working_days_accept_datetimes():
    assert calculate_working_days(datetime(2024, 1, 1, 23, 0), datetime(2024, 1, 2, 1, 0)) == 2


def test_cohort_without_end_counts_until_now(fixed_now, cohort_start):
    assert calculate_cohort_working_days(cohort_start, None, now=fixed_now) == 10


def test_cohort_end_is_clamped_to_now(fixed_now, cohort_start):
    assert calculate_cohort_working_days(cohort_start, date(2024, 2, 1), now=fixed_now) == 10


def test_cohort_end_in_the_past(fixed_now, cohort_start):
    assert calculate_cohort_working_days(cohort_start, date(2024, 1, 5), now=fixed_now) == 5


def test_valid_attendance_date_rules(fixed_now):
    start = date(2024, 1, 2)

    assert is_valid_attendance_date(date(2024, 1, 10), start, now=fixed_now) is True
    assert is_valid_attendance_date(datetime(2024, 1, 12, 18, 30), start, now=fixed_now) is True
    # weekend
    assert is_valid_attendance_date(date(2024, 1, 6), start, now=fixed_now) is False
    # before cohort start
    assert is_valid_attendance_date(date(2024, 1, 1), start, now=fixed_now) is False
    # after cohort end
    assert is_valid_attendance_date(date(2024, 1, 8), start, date(2024, 1, 5), now=fixed_now) is False
    # future, even inside the cohort period
    assert is_valid_attendance_date(date(2024, 1, 15), start, date(2024, 1, 31), now=fixed_now) is False


def test_date_picker_disables_weekends_and_future(fixed_now):
    assert is_date_disabled(date(2024, 1, 6), now=fixed_now) is True
    assert is_date_disabled(date(2024, 1, 15), now=fixed_now) is True
    assert is_date_disabled(date(2024, 1, 12), now=fixed_now) is False
