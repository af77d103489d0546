from __future__ import annotations

import logging
from datetime import date, datetime
from typing import AbstractSet, Any, Optional, Sequence

from ..common.datetime_utils import days_since, format_iso, is_weekend, to_day, today
from ..core.constants import EDIT_WINDOW_DAYS
from ..core.enums import AttendanceStatus
from .model import BulkAttendanceRecord, BulkValidationResult, BulkValidationStatistics, ValidationIssue

logger = logging.getLogger(__name__)


def _is_text(value: Any) -> bool:
    return isinstance(value, str)


def _issue(index: int, field: str, value: Any, message: str) -> ValidationIssue:
    return ValidationIssue(record_index=index, field=field, value=value, message=message)


def validate_bulk_attendance_records(
    records: Sequence[BulkAttendanceRecord],
    cohort_start_date: date,
    cohort_end_date: Optional[date] = None,
    valid_student_ids: Optional[AbstractSet[str]] = None,
    *,
    now: Optional[datetime] = None,
) -> BulkValidationResult:
    """Check a proposed batch before it is written.

    Problems are reported, never raised. Weekend dates, dates older than the
    edit window and non-text metadata are warnings; everything else is an
    error. Duplicates are only detected inside this batch and only the second
    and later occurrences are flagged.
    """
    errors: list[ValidationIssue] = []
    warnings: list[ValidationIssue] = []
    duplicate_records = 0
    weekend_records = 0
    future_records = 0

    current = today(now)
    cohort_start = to_day(cohort_start_date)
    cohort_end = to_day(cohort_end_date) if cohort_end_date is not None else current
    seen: set[str] = set()

    for index, record in enumerate(records):
        student_id = record.student_id
        if not student_id or not _is_text(student_id):
            errors.append(_issue(index, "studentId", student_id, "Student ID is required and must be a string"))
        elif valid_student_ids is not None and student_id not in valid_student_ids:
            errors.append(_issue(index, "studentId", student_id, "Student ID does not exist in the cohort"))

        if not isinstance(record.date, date):
            errors.append(_issue(index, "date", record.date, "Date is required and must be a valid Date object"))
        else:
            record_date = to_day(record.date)
            iso = format_iso(record_date)

            if record_date < cohort_start:
                errors.append(_issue(index, "date", iso, "Date is before cohort start date"))
            if record_date > cohort_end:
                errors.append(_issue(index, "date", iso, "Date is after cohort end date"))
            if record_date > current:
                future_records += 1
                errors.append(_issue(index, "date", iso, "Cannot record attendance for future dates"))

            if is_weekend(record_date):
                weekend_records += 1
                warnings.append(_issue(index, "date", iso, "Date is a weekend"))

            key = f"{student_id}-{iso}"
            if key in seen:
                duplicate_records += 1
                errors.append(_issue(index, "duplicate", key, "Duplicate record found for same student and date"))
            seen.add(key)

            if days_since(record_date, now) > EDIT_WINDOW_DAYS:
                warnings.append(_issue(index, "date", iso, f"Date is more than {EDIT_WINDOW_DAYS} days old - may require admin privileges"))

        if AttendanceStatus.coerce(record.status) is None:
            errors.append(_issue(index, "status", record.status, "Invalid attendance status"))

        metadata = record.metadata
        if metadata is not None:
            if metadata.notes and not _is_text(metadata.notes):
                warnings.append(_issue(index, "metadata.notes", metadata.notes, "Notes should be a string"))
            if metadata.reason and not _is_text(metadata.reason):
                warnings.append(_issue(index, "metadata.reason", metadata.reason, "Reason should be a string"))

    # counts errors, not records; valid_records can go negative
    invalid_records = len(errors)
    result = BulkValidationResult(
        valid=not errors,
        errors=errors,
        warnings=warnings,
        statistics=BulkValidationStatistics(
            total_records=len(records),
            valid_records=len(records) - invalid_records,
            invalid_records=invalid_records,
            duplicate_records=duplicate_records,
            weekend_records=weekend_records,
            future_records=future_records,
        ),
    )
    logger.debug(
        "validated %d bulk records: %d errors, %d warnings",
        len(records),
        len(errors),
        len(warnings),
    )
    return result
