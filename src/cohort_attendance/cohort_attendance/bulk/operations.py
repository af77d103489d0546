from __future__ import annotations

import math
from datetime import date
from typing import Sequence, TypeVar

from ..common.numbers import round_half_up
from ..core.constants import DEFAULT_BATCH_SIZE, DEFAULT_RECORDS_PER_SECOND
from ..core.enums import AttendanceStatus, RecordSource
from ..core.exceptions import ValidationError
from ..workdays.calculator import get_all_days_between, get_working_days_between
from .model import (
    BulkAttendanceRecord,
    BulkOperationResult,
    BulkOperationSummary,
    BulkRecordMetadata,
    PerformanceEstimate,
    PreparedAttendanceRow,
)

T = TypeVar("T")


def prepare_bulk_attendance_data(
    records: Sequence[BulkAttendanceRecord],
    cohort_id: str,
    user_id: str,
) -> list[PreparedAttendanceRow]:
    """Map validated records to persistence rows. No validation happens here."""
    rows = []
    for record in records:
        metadata = record.metadata or BulkRecordMetadata()
        rows.append(
            PreparedAttendanceRow(
                date=record.date,
                status=record.status,
                student_id=record.student_id,
                cohort_id=cohort_id,
                metadata=BulkRecordMetadata(
                    reason=metadata.reason,
                    notes=metadata.notes,
                    created_by=user_id,
                    source=metadata.source or RecordSource.MANUAL,
                ),
            )
        )
    return rows


def generate_bulk_attendance_template(
    student_ids: Sequence[str],
    start_date: date,
    end_date: date,
    default_status: AttendanceStatus = AttendanceStatus.PRESENT,
    exclude_weekends: bool = True,
) -> list[BulkAttendanceRecord]:
    """One record per student and day, students in the given order."""
    if exclude_weekends:
        days = get_working_days_between(start_date, end_date)
    else:
        days = get_all_days_between(start_date, end_date)

    return [
        BulkAttendanceRecord(
            student_id=student_id,
            date=day,
            status=default_status,
            metadata=BulkRecordMetadata(source=RecordSource.SYSTEM, notes="Generated template record"),
        )
        for student_id in student_ids
        for day in days
    ]


def create_attendance_batches(records: Sequence[T], batch_size: int = DEFAULT_BATCH_SIZE) -> list[list[T]]:
    if batch_size < 1:
        raise ValidationError("batch_size must be at least 1")
    return [list(records[i:i + batch_size]) for i in range(0, len(records), batch_size)]


def merge_bulk_operation_results(results: Sequence[BulkOperationResult]) -> BulkOperationResult:
    """Combine per-batch results.

    Batches may run concurrently, so the merged duration is the longest batch
    duration rather than the sum.
    """
    if not results:
        return BulkOperationResult()

    processed = sum(r.processed_records for r in results)
    duration = max(r.summary.duration for r in results)
    records_per_second = processed / (duration / 1000) if duration > 0 else 0

    return BulkOperationResult(
        success=all(r.success for r in results),
        total_records=sum(r.total_records for r in results),
        processed_records=processed,
        created_records=sum(r.created_records for r in results),
        updated_records=sum(r.updated_records for r in results),
        skipped_records=sum(r.skipped_records for r in results),
        failed_records=sum(r.failed_records for r in results),
        errors=[e for r in results for e in r.errors],
        warnings=[w for r in results for w in r.warnings],
        summary=BulkOperationSummary(duration=duration, records_per_second=records_per_second),
    )


def estimate_bulk_operation_performance(
    record_count: int,
    batch_size: int = DEFAULT_BATCH_SIZE,
    estimated_records_per_second: float = DEFAULT_RECORDS_PER_SECOND,
) -> PerformanceEstimate:
    """Rough sizing for a bulk job.

    The recommended batch size only depends on ``record_count``; the
    ``batch_size`` argument does not influence it.
    """
    if estimated_records_per_second > 0:
        estimated_duration = record_count / estimated_records_per_second
    else:
        estimated_duration = 0.0

    if record_count > 10000:
        recommended_batch_size = 200
    elif record_count > 1000:
        recommended_batch_size = 100
    else:
        recommended_batch_size = 50

    # ~1KB per record
    estimated_memory_usage = record_count / 1024

    return PerformanceEstimate(
        estimated_duration=round_half_up(estimated_duration),
        recommended_batch_size=recommended_batch_size,
        total_batches=math.ceil(record_count / recommended_batch_size),
        estimated_memory_usage=round_half_up(estimated_memory_usage),
    )
