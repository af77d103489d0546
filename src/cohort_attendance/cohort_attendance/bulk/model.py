from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Optional

from ..core.enums import AttendanceStatus, RecordSource


@dataclass(frozen=True)
class BulkRecordMetadata:
    reason: Optional[str] = None
    notes: Optional[str] = None
    created_by: Optional[str] = None
    source: Optional[RecordSource] = None


@dataclass(frozen=True)
class BulkAttendanceRecord:
    """Proposed write for one student and date.

    Fields are not type-checked on construction; ``validate_bulk_attendance_records``
    reports whatever is wrong with them.
    """

    student_id: Any
    date: Any
    status: Any
    metadata: Optional[BulkRecordMetadata] = None


@dataclass(frozen=True)
class ValidationIssue:
    record_index: int
    field: str
    value: Any
    message: str


@dataclass(frozen=True)
class BulkValidationStatistics:
    total_records: int = 0
    valid_records: int = 0
    invalid_records: int = 0
    duplicate_records: int = 0
    weekend_records: int = 0
    future_records: int = 0


@dataclass(frozen=True)
class BulkValidationResult:
    valid: bool
    errors: list[ValidationIssue]
    warnings: list[ValidationIssue]
    statistics: BulkValidationStatistics


@dataclass(frozen=True)
class OperationIssue:
    record_index: int
    student_id: str
    date: str
    message: str


@dataclass(frozen=True)
class BulkOperationSummary:
    duration: float = 0  # milliseconds
    records_per_second: float = 0


@dataclass(frozen=True)
class BulkOperationResult:
    success: bool = True
    total_records: int = 0
    processed_records: int = 0
    created_records: int = 0
    updated_records: int = 0
    skipped_records: int = 0
    failed_records: int = 0
    errors: list[OperationIssue] = field(default_factory=list)
    warnings: list[OperationIssue] = field(default_factory=list)
    summary: BulkOperationSummary = field(default_factory=BulkOperationSummary)


@dataclass(frozen=True)
class PreparedAttendanceRow:
    """Persistence-ready row handed to the batch writer."""

    date: date
    status: AttendanceStatus
    student_id: str
    cohort_id: str
    metadata: BulkRecordMetadata


@dataclass(frozen=True)
class PerformanceEstimate:
    estimated_duration: float  # seconds
    recommended_batch_size: int
    total_batches: int
    estimated_memory_usage: float  # MB


@dataclass(frozen=True)
class BulkImportResult:
    """Outcome of a CSV import: each stage is only present if it was reached."""

    parse_errors: list[str] = field(default_factory=list)
    import_errors: list[str] = field(default_factory=list)
    import_warnings: list[str] = field(default_factory=list)
    operation: Optional[BulkOperationResult] = None

    @property
    def success(self) -> bool:
        return self.operation is not None and self.operation.success
