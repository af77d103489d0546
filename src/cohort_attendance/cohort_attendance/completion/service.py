"""Completion of attendance bookkeeping.

Compares the expected working-day calendar of a cohort with the records that
exist and produces backfill candidates for whatever is missing.
"""
from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Any, Mapping, Optional, Sequence

from ..bulk.model import BulkAttendanceRecord, BulkRecordMetadata
from ..common.datetime_utils import days_since, format_iso, to_day, today
from ..common.numbers import percentage, round_half_up
from ..core.constants import RECENT_MISSING_DAYS, STUDENT_COMPLETION_THRESHOLD, TARGET_COMPLETION_RATE
from ..core.enums import AttendanceStatus, RecordSource
from ..workdays.calculator import get_working_days_between
from .model import AttendanceCompletionReport, StudentCompletion

logger = logging.getLogger(__name__)

LOW_OVERALL_COMPLETION_MESSAGE = (
    "Overall attendance record completion is below 95%. "
    "Consider implementing daily attendance recording procedures."
)
LOW_STUDENT_COMPLETION_MESSAGE = (
    "{count} students have less than 90% attendance record completion. "
    "Focus on catching up these records."
)
RECENT_MISSING_MESSAGE = (
    "There are missing attendance records from the past week. "
    "Prioritize recording recent attendance data."
)


def _record_key(student_id: str, value: date) -> str:
    return f"{student_id}-{format_iso(value)}"


def generate_attendance_completion_report(
    student_ids: Sequence[str],
    cohort_start_date: date,
    cohort_end_date: Optional[date],
    existing_records: Sequence[Any],
    *,
    now: Optional[datetime] = None,
) -> AttendanceCompletionReport:
    """Find, per student, the working days that have no record.

    ``existing_records`` only needs ``student_id`` and ``date`` attributes.
    Without an end date the calendar runs up to today.
    """
    end_date = to_day(cohort_end_date) if cohort_end_date is not None else today(now)
    working_days = get_working_days_between(cohort_start_date, end_date)
    total_working_days = len(working_days)
    total_possible_records = total_working_days * len(student_ids)

    existing = {_record_key(r.student_id, r.date) for r in existing_records}

    missing_by_student: dict[str, StudentCompletion] = {}
    overall_missing: dict[str, date] = {}

    for student_id in student_ids:
        missing_dates = []
        for day in working_days:
            if _record_key(student_id, day) not in existing:
                missing_dates.append(day)
                overall_missing.setdefault(format_iso(day), day)

        recorded = total_working_days - len(missing_dates)
        missing_by_student[student_id] = StudentCompletion(
            student_id=student_id,
            missing_dates=missing_dates,
            completion_rate=round_half_up(percentage(recorded, total_working_days)),
        )

    total_existing_records = len(existing_records)
    completion_rate = percentage(total_existing_records, total_possible_records)

    recommendations: list[str] = []
    if completion_rate < TARGET_COMPLETION_RATE:
        recommendations.append(LOW_OVERALL_COMPLETION_MESSAGE)

    low_completion = [s for s in missing_by_student.values() if s.completion_rate < STUDENT_COMPLETION_THRESHOLD]
    if low_completion:
        recommendations.append(LOW_STUDENT_COMPLETION_MESSAGE.format(count=len(low_completion)))

    if any(days_since(day, now) <= RECENT_MISSING_DAYS for day in overall_missing.values()):
        recommendations.append(RECENT_MISSING_MESSAGE)

    logger.debug(
        "completion report: %d students, %d working days, %d missing dates",
        len(student_ids),
        total_working_days,
        len(overall_missing),
    )

    return AttendanceCompletionReport(
        total_working_days=total_working_days,
        total_possible_records=total_possible_records,
        total_existing_records=total_existing_records,
        completion_rate=round_half_up(completion_rate),
        missing_records_by_student=missing_by_student,
        overall_missing_dates=list(overall_missing.values()),
        recommendations=recommendations,
    )


def create_missing_attendance_template(
    missing_records_by_student: Mapping[str, StudentCompletion],
    default_status: AttendanceStatus = AttendanceStatus.PRESENT,
) -> list[BulkAttendanceRecord]:
    """Backfill candidates, ordered by date then student id."""
    records = [
        BulkAttendanceRecord(
            student_id=completion.student_id,
            date=day,
            status=default_status,
            metadata=BulkRecordMetadata(
                source=RecordSource.SYSTEM,
                notes="Auto-generated for missing attendance record",
                reason="Backfill missing data",
            ),
        )
        for completion in missing_records_by_student.values()
        for day in completion.missing_dates
    ]
    records.sort(key=lambda r: (to_day(r.date), r.student_id))
    return records
