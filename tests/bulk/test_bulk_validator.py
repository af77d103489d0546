from __future__ import annotations

from datetime import date, datetime

from src.cohort_attendance.cohort_attendance.bulk.model import BulkAttendanceRecord, BulkRecordMetadata
from src.cohort_attendance.cohort_attendance.bulk.validator import validate_bulk_attendance_records
from src.cohort_attendance.cohort_attendance.core.enums import AttendanceStatus


def _bulk(student_id="s1", day=date(2024, 1, 10), status=AttendanceStatus.PRESENT, metadata=None):
    return BulkAttendanceRecord(student_id=student_id, date=day, status=status, metadata=metadata)


def _messages(issues):
    return [(i.record_index, i.field, i.message) for i in issues]


def test_clean_batch_is_valid(fixed_now, cohort_start):
    records = [_bulk("s1"), _bulk("s2"), _bulk("s1", date(2024, 1, 11))]

    result = validate_bulk_attendance_records(records, cohort_start, now=fixed_now)

    assert result.valid is True
    assert result.errors == []
    assert result.warnings == []
    assert result.statistics.total_records == 3
    assert result.statistics.valid_records == 3
    assert result.statistics.invalid_records == 0


def test_only_repeats_are_flagged_as_duplicates(fixed_now, cohort_start):
    records = [_bulk("s1"), _bulk("s1"), _bulk("s2"), _bulk("s1")]

    result = validate_bulk_attendance_records(records, cohort_start, now=fixed_now)

    assert result.valid is False
    assert [e.record_index for e in result.errors] == [1, 3]
    assert all(e.field == "duplicate" for e in result.errors)
    assert result.errors[0].value == "s1-2024-01-10"
    assert result.errors[0].message == "Duplicate record found for same student and date"
    assert result.statistics.duplicate_records == 2
    assert result.statistics.invalid_records == 2
    assert result.statistics.valid_records == 2


def test_weekend_is_only_a_warning(fixed_now, cohort_start):
    result = validate_bulk_attendance_records([_bulk(day=date(2024, 1, 6))], cohort_start, now=fixed_now)

    assert result.valid is True
    assert _messages(result.warnings) == [(0, "date", "Date is a weekend")]
    assert result.statistics.weekend_records == 1


def test_future_date_is_an_error(fixed_now, cohort_start):
    result = validate_bulk_attendance_records([_bulk(day=date(2024, 1, 15))], cohort_start, now=fixed_now)

    assert result.valid is False
    assert _messages(result.errors) == [
        (0, "date", "Date is after cohort end date"),
        (0, "date", "Cannot record attendance for future dates"),
    ]
    assert result.statistics.future_records == 1
    assert result.statistics.invalid_records == 2
    assert result.statistics.valid_records == -1


def test_future_date_inside_cohort_period(fixed_now, cohort_start):
    result = validate_bulk_attendance_records(
        [_bulk(day=date(2024, 1, 15))], cohort_start, date(2024, 3, 1), now=fixed_now
    )

    assert _messages(result.errors) == [(0, "date", "Cannot record attendance for future dates")]


def test_date_before_cohort_start(fixed_now, cohort_start):
    result = validate_bulk_attendance_records([_bulk(day=date(2023, 12, 29))], cohort_start, now=fixed_now)

    assert _messages(result.errors) == [(0, "date", "Date is before cohort start date")]


def test_old_dates_warn_about_edit_window(fixed_now):
    records = [_bulk(day=date(2023, 12, 1)), _bulk(day=date(2023, 12, 13))]

    result = validate_bulk_attendance_records(records, date(2023, 11, 1), now=fixed_now)

    assert result.valid is True
    assert _messages(result.warnings) == [
        (0, "date", "Date is more than 30 days old - may require admin privileges"),
    ]


def test_student_id_checks(fixed_now, cohort_start):
    records = [_bulk(None), _bulk(123), _bulk("ghost"), _bulk("s1")]

    result = validate_bulk_attendance_records(records, cohort_start, None, {"s1"}, now=fixed_now)

    assert _messages(result.errors) == [
        (0, "studentId", "Student ID is required and must be a string"),
        (1, "studentId", "Student ID is required and must be a string"),
        (2, "studentId", "Student ID does not exist in the cohort"),
    ]


def test_date_must_be_a_date(fixed_now, cohort_start):
    result = validate_bulk_attendance_records([_bulk(day="2024-01-10"), _bulk(day=None)], cohort_start, now=fixed_now)

    assert _messages(result.errors) == [
        (0, "date", "Date is required and must be a valid Date object"),
        (1, "date", "Date is required and must be a valid Date object"),
    ]


def test_datetime_values_are_compared_by_day(fixed_now, cohort_start):
    result = validate_bulk_attendance_records([_bulk(day=datetime(2024, 1, 12, 23, 59))], cohort_start, now=fixed_now)

    assert result.valid is True


def test_status_must_be_known(fixed_now, cohort_start):
    records = [_bulk(status="LATE"), _bulk("s2", status=None), _bulk("s3", status="ABSENT_SICK")]

    result = validate_bulk_attendance_records(records, cohort_start, now=fixed_now)

    assert _messages(result.errors) == [
        (0, "status", "Invalid attendance status"),
        (1, "status", "Invalid attendance status"),
    ]


def test_metadata_types_are_warnings(fixed_now, cohort_start):
    record = _bulk(metadata=BulkRecordMetadata(notes=5, reason=["late bus"]))

    result = validate_bulk_attendance_records([record], cohort_start, now=fixed_now)

    assert result.valid is True
    assert _messages(result.warnings) == [
        (0, "metadata.notes", "Notes should be a string"),
        (0, "metadata.reason", "Reason should be a string"),
    ]


def test_duplicates_only_within_batch(fixed_now, cohort_start):
    first = validate_bulk_attendance_records([_bulk()], cohort_start, now=fixed_now)
    second = validate_bulk_attendance_records([_bulk()], cohort_start, now=fixed_now)

    assert first.valid and second.valid


def test_statistics_count_errors_not_records(fixed_now, cohort_start):
    records = [_bulk(None, status="BOGUS"), _bulk("s2")]

    result = validate_bulk_attendance_records(records, cohort_start, now=fixed_now)

    assert len(result.errors) == 2
    assert result.statistics.total_records == 2
    assert result.statistics.invalid_records == 2
    assert result.statistics.valid_records == 0
