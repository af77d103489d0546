from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date, datetime
from typing import AbstractSet, Optional, Sequence

from ..common.datetime_utils import format_iso, parse_iso_date
from ..core.constants import DEFAULT_BATCH_SIZE, DEFAULT_RECORDS_PER_SECOND
from ..core.enums import RecordSource
from ..core.exceptions import ValidationError
from ..export.importer import parse_csv_attendance_data, validate_import_data
from ..stats.model import Cohort
from .model import (
    BulkAttendanceRecord,
    BulkImportResult,
    BulkOperationResult,
    BulkRecordMetadata,
    OperationIssue,
    PerformanceEstimate,
    ValidationIssue,
)
from .operations import (
    create_attendance_batches,
    estimate_bulk_operation_performance,
    merge_bulk_operation_results,
    prepare_bulk_attendance_data,
)
from .repository import AttendanceBatchWriter
from .validator import validate_bulk_attendance_records

logger = logging.getLogger(__name__)


def _to_operation_issue(issue: ValidationIssue, records: Sequence[BulkAttendanceRecord]) -> OperationIssue:
    record = records[issue.record_index]
    student_id = record.student_id if isinstance(record.student_id, str) else ""
    record_date = format_iso(record.date) if isinstance(record.date, date) else ""
    return OperationIssue(
        record_index=issue.record_index,
        student_id=student_id,
        date=record_date,
        message=f"{issue.field}: {issue.message}",
    )


class BulkAttendanceService:
    """Validate, batch and hand attendance writes to the persistence layer.

    Failed batches are merged into the result as reported by the writer; there
    are no retries here.
    """

    def __init__(
        self,
        writer: AttendanceBatchWriter,
        *,
        batch_size: int = DEFAULT_BATCH_SIZE,
        records_per_second: float = DEFAULT_RECORDS_PER_SECOND,
    ):
        if int(batch_size) < 1:
            raise ValidationError("batch_size must be at least 1")
        self._writer = writer
        self._batch_size = int(batch_size)
        self._records_per_second = float(records_per_second)

    def estimate(self, record_count: int) -> PerformanceEstimate:
        return estimate_bulk_operation_performance(record_count, self._batch_size, self._records_per_second)

    def apply(
        self,
        records: Sequence[BulkAttendanceRecord],
        *,
        cohort: Cohort,
        user_id: str,
        valid_student_ids: Optional[AbstractSet[str]] = None,
        now: Optional[datetime] = None,
    ) -> BulkOperationResult:
        validation = validate_bulk_attendance_records(
            records,
            cohort.start_date,
            cohort.end_date,
            valid_student_ids,
            now=now,
        )
        warnings = [_to_operation_issue(w, records) for w in validation.warnings]

        if not validation.valid:
            failed = len({e.record_index for e in validation.errors})
            logger.info(
                "bulk attendance rejected cohort=%s records=%d errors=%d",
                cohort.cohort_id,
                len(records),
                len(validation.errors),
            )
            return BulkOperationResult(
                success=False,
                total_records=len(records),
                failed_records=failed,
                skipped_records=len(records) - failed,
                errors=[_to_operation_issue(e, records) for e in validation.errors],
                warnings=warnings,
            )

        rows = prepare_bulk_attendance_data(records, cohort.cohort_id, user_id)
        batches = create_attendance_batches(rows, self._batch_size)
        results = [self._writer.write_batch(batch) for batch in batches]
        merged = merge_bulk_operation_results(results)

        logger.info(
            "bulk attendance written cohort=%s batches=%d created=%d updated=%d failed=%d",
            cohort.cohort_id,
            len(batches),
            merged.created_records,
            merged.updated_records,
            merged.failed_records,
        )
        return replace(merged, warnings=warnings + merged.warnings)

    def import_csv(
        self,
        csv_content: str,
        *,
        cohort: Cohort,
        user_id: str,
        valid_student_ids: Optional[AbstractSet[str]] = None,
        now: Optional[datetime] = None,
    ) -> BulkImportResult:
        parsed = parse_csv_attendance_data(csv_content)
        if not parsed.success:
            return BulkImportResult(parse_errors=list(parsed.errors or []))

        rows = parsed.data or []
        checked = validate_import_data(rows, cohort.start_date, cohort.end_date, now=now)
        if not checked.valid:
            return BulkImportResult(import_errors=checked.errors, import_warnings=checked.warnings)

        records = [
            BulkAttendanceRecord(
                student_id=row.student_id,
                date=parse_iso_date(row.date),
                status=row.status,
                metadata=BulkRecordMetadata(source=RecordSource.IMPORT),
            )
            for row in rows
        ]
        operation = self.apply(
            records,
            cohort=cohort,
            user_id=user_id,
            valid_student_ids=valid_student_ids,
            now=now,
        )
        return BulkImportResult(import_warnings=checked.warnings, operation=operation)
