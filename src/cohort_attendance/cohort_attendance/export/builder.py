from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ..common.datetime_utils import format_iso, now_local, to_day
from ..core.constants import EXPORT_TIMESTAMP_FORMAT
from ..core.enums import AttendanceStatus
from ..stats.model import CohortAttendanceData, StudentAttendanceData
from .labels import get_attendance_status_label
from .model import AttendanceExportData, ExportedRecord, ExportedStudent, ExportMetadata, ExportOptions


def prepare_attendance_export_data(
    cohort_data: CohortAttendanceData,
    student_data: Sequence[StudentAttendanceData],
    options: ExportOptions,
    *,
    now: Optional[datetime] = None,
) -> AttendanceExportData:
    """Build the export envelope.

    The date range is the explicit one from ``options`` or else the cohort's own
    period (open-ended cohorts end today). Records outside it are dropped and the
    rest are sorted by date.
    """
    now = now or now_local()
    if options.date_range is not None:
        start_date = to_day(options.date_range.start_date)
        end_date = to_day(options.date_range.end_date)
    else:
        start_date = to_day(cohort_data.start_date)
        end_date = to_day(cohort_data.end_date) if cohort_data.end_date is not None else now.date()

    students = []
    for student in student_data:
        records = [
            ExportedRecord(
                date=format_iso(r.date),
                status=AttendanceStatus(r.status),
                status_label=get_attendance_status_label(r.status),
            )
            for r in student.records
            if start_date <= to_day(r.date) <= end_date
        ]
        records.sort(key=lambda r: r.date)
        students.append(
            ExportedStudent(
                student_id=student.student_id,
                student_name=student.student_name,
                statistics=student.statistics,
                records=records,
            )
        )

    metadata = None
    if options.include_metadata:
        metadata = ExportMetadata(
            export_date=now.strftime(EXPORT_TIMESTAMP_FORMAT),
            cohort_name=cohort_data.cohort_name,
            cohort_id=cohort_data.cohort_id,
            start_date=format_iso(start_date),
            end_date=format_iso(end_date),
            total_students=len(student_data),
            total_working_days=cohort_data.statistics.total_days,
        )

    return AttendanceExportData(
        metadata=metadata,
        students=students,
        cohort_statistics=cohort_data.statistics if options.include_statistics else None,
    )
