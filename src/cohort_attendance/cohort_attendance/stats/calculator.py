"""Attendance statistics, trends, streaks and risk levels.

All functions are pure: they read the records they are given and return new
values. Records are sparse, a date without a record is missing data and never
breaks a streak.
"""
from __future__ import annotations

import logging
from collections import Counter
from dataclasses import asdict
from datetime import date
from typing import Iterable, Sequence

from ..common.datetime_utils import format_iso, get_month_bounds, to_day
from ..common.numbers import percentage, round_half_up
from ..core.constants import (
    DEFAULT_TREND_WINDOW,
    HIGH_RISK_ATTENDANCE_RATE,
    HIGH_RISK_UNEXCUSED_RATIO,
    MEDIUM_RISK_ATTENDANCE_RATE,
    MEDIUM_RISK_UNEXCUSED_RATIO,
    MIN_TREND_RECORDS,
    TREND_SIGNIFICANCE,
)
from ..core.enums import AttendanceStatus, AttendanceTrend, RiskLevel, StreakType
from ..workdays.calculator import calculate_working_days, get_working_days_between
from .model import (
    AttendanceRecord,
    AttendanceStatistics,
    AttendanceStreak,
    MonthlyAttendance,
    Student,
    StudentAttendanceData,
)

logger = logging.getLogger(__name__)


def _build_statistics(
    *,
    total_days: int,
    present_days: int,
    absent_sick_days: int,
    absent_excused_days: int,
    absent_unexcused_days: int,
    unrecorded_days: int,
) -> AttendanceStatistics:
    absent_days = absent_sick_days + absent_excused_days + absent_unexcused_days
    return AttendanceStatistics(
        total_days=total_days,
        present_days=present_days,
        absent_days=absent_days,
        absent_sick_days=absent_sick_days,
        absent_excused_days=absent_excused_days,
        absent_unexcused_days=absent_unexcused_days,
        unrecorded_days=unrecorded_days,
        attendance_rate=round_half_up(percentage(present_days, total_days)),
        absentee_rate=round_half_up(percentage(absent_days, total_days)),
    )


def calculate_student_attendance_statistics(
    records: Sequence[AttendanceRecord],
    total_working_days: int,
) -> AttendanceStatistics:
    """Partition records by status against the expected number of working days.

    Extra or duplicate records are not rejected here; ``unrecorded_days`` just
    never goes below zero.
    """
    counts = Counter(AttendanceStatus.coerce(r.status) for r in records)
    recorded = sum(counts[s] for s in AttendanceStatus)

    return _build_statistics(
        total_days=total_working_days,
        present_days=counts[AttendanceStatus.PRESENT],
        absent_sick_days=counts[AttendanceStatus.ABSENT_SICK],
        absent_excused_days=counts[AttendanceStatus.ABSENT_EXCUSED],
        absent_unexcused_days=counts[AttendanceStatus.ABSENT_UNEXCUSED],
        unrecorded_days=max(0, total_working_days - recorded),
    )


def calculate_cohort_attendance_statistics(
    student_statistics: Iterable[AttendanceStatistics],
) -> AttendanceStatistics:
    """Sum per-student statistics; rates come from the sums, not from averages."""
    items = list(student_statistics)
    if not items:
        return AttendanceStatistics()

    return _build_statistics(
        total_days=sum(s.total_days for s in items),
        present_days=sum(s.present_days for s in items),
        absent_sick_days=sum(s.absent_sick_days for s in items),
        absent_excused_days=sum(s.absent_excused_days for s in items),
        absent_unexcused_days=sum(s.absent_unexcused_days for s in items),
        unrecorded_days=sum(s.unrecorded_days for s in items),
    )


def _sorted_recent_first(records: Sequence[AttendanceRecord]) -> list[AttendanceRecord]:
    return sorted(records, key=lambda r: to_day(r.date), reverse=True)


def _present_fraction(records: Sequence[AttendanceRecord]) -> float:
    present = sum(1 for r in records if AttendanceStatus.coerce(r.status) is AttendanceStatus.PRESENT)
    return present / len(records)


def calculate_attendance_trend(
    records: Sequence[AttendanceRecord],
    recent_days: int = DEFAULT_TREND_WINDOW,
) -> AttendanceTrend:
    """Compare the present fraction of the latest records with the older ones.

    ``recent_days`` is a number of records, not calendar days: the newest
    ``recent_days`` records form the recent window, everything else the
    baseline.
    """
    if len(records) < MIN_TREND_RECORDS:
        return AttendanceTrend.STABLE

    ordered = _sorted_recent_first(records)
    recent = ordered[: min(recent_days, len(ordered))]
    older = ordered[len(recent):]
    if not recent or not older:
        return AttendanceTrend.STABLE

    difference = _present_fraction(recent) - _present_fraction(older)
    if difference > TREND_SIGNIFICANCE:
        return AttendanceTrend.IMPROVING
    if difference < -TREND_SIGNIFICANCE:
        return AttendanceTrend.DECLINING
    return AttendanceTrend.STABLE


def calculate_risk_level(statistics: AttendanceStatistics) -> RiskLevel:
    unexcused_ratio = (
        statistics.absent_unexcused_days / statistics.total_days if statistics.total_days > 0 else 0.0
    )

    if statistics.attendance_rate < HIGH_RISK_ATTENDANCE_RATE or unexcused_ratio > HIGH_RISK_UNEXCUSED_RATIO:
        return RiskLevel.HIGH
    if statistics.attendance_rate < MEDIUM_RISK_ATTENDANCE_RATE or unexcused_ratio > MEDIUM_RISK_UNEXCUSED_RATIO:
        return RiskLevel.MEDIUM
    return RiskLevel.LOW


def _streak_type(record: AttendanceRecord) -> StreakType:
    if AttendanceStatus.coerce(record.status) is AttendanceStatus.PRESENT:
        return StreakType.PRESENT
    return StreakType.ABSENT


def calculate_attendance_streak(records: Sequence[AttendanceRecord]) -> AttendanceStreak:
    """Current run from the newest record backwards, and the longest run seen.

    All three absence statuses count as the same ``absent`` run.
    """
    if not records:
        return AttendanceStreak(current_streak=0, longest_streak=0, type=StreakType.PRESENT)

    ordered = _sorted_recent_first(records)

    current_type = _streak_type(ordered[0])
    current_streak = 0
    for record in ordered:
        if _streak_type(record) is not current_type:
            break
        current_streak += 1

    longest_streak = 0
    run_length = 0
    run_type = None
    for record in ordered:
        record_type = _streak_type(record)
        if run_type is None or run_type is record_type:
            run_length += 1
        else:
            longest_streak = max(longest_streak, run_length)
            run_length = 1
        run_type = record_type
    longest_streak = max(longest_streak, run_length)

    return AttendanceStreak(current_streak=current_streak, longest_streak=longest_streak, type=current_type)


def calculate_monthly_attendance(
    records: Sequence[AttendanceRecord],
    year: int,
    month: int,
) -> MonthlyAttendance:
    """Statistics for one calendar month (``month`` is 1-12)."""
    first_day, last_day = get_month_bounds(year, month)
    month_records = [r for r in records if first_day <= to_day(r.date) <= last_day]
    working_days = calculate_working_days(first_day, last_day)

    statistics = calculate_student_attendance_statistics(month_records, working_days)
    return MonthlyAttendance(**asdict(statistics), month=month, year=year)


def get_missing_attendance_dates(
    records: Sequence[AttendanceRecord],
    start_date: date,
    end_date: date,
) -> list[date]:
    recorded = {format_iso(r.date) for r in records}
    return [day for day in get_working_days_between(start_date, end_date) if format_iso(day) not in recorded]


def build_student_attendance_data(
    student: Student,
    cohort_id: str,
    records: Sequence[AttendanceRecord],
    total_working_days: int,
) -> StudentAttendanceData:
    statistics = calculate_student_attendance_statistics(records, total_working_days)
    data = StudentAttendanceData(
        student_id=student.student_id,
        student_name=student.name,
        cohort_id=cohort_id,
        records=list(records),
        statistics=statistics,
        trend=calculate_attendance_trend(records),
        risk_level=calculate_risk_level(statistics),
    )
    logger.debug(
        "student %s: rate=%.2f trend=%s risk=%s",
        student.student_id,
        statistics.attendance_rate,
        data.trend.value,
        data.risk_level.value,
    )
    return data
