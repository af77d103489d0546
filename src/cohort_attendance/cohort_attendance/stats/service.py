from __future__ import annotations

import logging
import time
from collections import defaultdict
from datetime import datetime
from typing import Optional, Union

from ..common.datetime_utils import now_local, to_day
from ..completion.model import AttendanceCompletionReport
from ..completion.service import generate_attendance_completion_report
from ..core.enums import ExportFormat
from ..core.exceptions import CohortNotFoundError
from ..export.builder import prepare_attendance_export_data
from ..export.csv_export import generate_csv_export
from ..export.excel_export import generate_excel_export
from ..export.json_export import generate_json_export
from ..export.model import ExportOptions
from ..export.summary_report import generate_attendance_summary_report
from ..workdays.calculator import calculate_cohort_working_days
from .calculator import build_student_attendance_data, calculate_cohort_attendance_statistics
from .model import AttendanceRecord, Cohort, CohortAttendanceData, CohortOverview
from .repository import AttendanceDataSource

logger = logging.getLogger(__name__)


class AttendanceAnalyticsService:
    def __init__(self, source: AttendanceDataSource):
        self._source = source

    def _require_cohort(self, cohort_id: str) -> Cohort:
        cohort = self._source.get_cohort(cohort_id)
        if not cohort:
            raise CohortNotFoundError(f"Cohort {cohort_id} not found")
        return cohort

    def _cohort_records(self, cohort: Cohort, now: datetime) -> list[AttendanceRecord]:
        end_date = to_day(cohort.end_date) if cohort.end_date else now.date()
        return list(
            self._source.list_records(cohort.cohort_id, start_date=to_day(cohort.start_date), end_date=end_date)
        )

    def get_cohort_overview(self, cohort_id: str, *, now: Optional[datetime] = None) -> CohortOverview:
        now = now or now_local()
        started = time.perf_counter()

        cohort = self._require_cohort(cohort_id)
        students = list(self._source.list_active_students(cohort_id))
        records = self._cohort_records(cohort, now)
        working_days = calculate_cohort_working_days(cohort.start_date, cohort.end_date, now=now)

        by_student: dict[str, list[AttendanceRecord]] = defaultdict(list)
        for record in records:
            by_student[record.student_id].append(record)

        student_data = [
            build_student_attendance_data(s, cohort.cohort_id, by_student.get(s.student_id, []), working_days)
            for s in students
        ]
        cohort_data = CohortAttendanceData(
            cohort_id=cohort.cohort_id,
            cohort_name=cohort.name,
            total_students=len(students),
            active_students=len(students),
            start_date=cohort.start_date,
            end_date=cohort.end_date,
            statistics=calculate_cohort_attendance_statistics(s.statistics for s in student_data),
        )

        logger.info(
            "attendance overview cohort=%s students=%d records=%d rate=%.2f duration_ms=%.1f",
            cohort_id,
            len(students),
            len(records),
            cohort_data.statistics.attendance_rate,
            (time.perf_counter() - started) * 1000,
        )
        return CohortOverview(cohort=cohort_data, students=student_data)

    def export_cohort(
        self,
        cohort_id: str,
        options: ExportOptions,
        *,
        now: Optional[datetime] = None,
    ) -> Union[str, bytes]:
        now = now or now_local()
        overview = self.get_cohort_overview(cohort_id, now=now)
        data = prepare_attendance_export_data(overview.cohort, overview.students, options, now=now)

        export_format = ExportFormat(options.format)
        logger.info("attendance export cohort=%s format=%s", cohort_id, export_format.value)
        if export_format is ExportFormat.JSON:
            return generate_json_export(data)
        if export_format is ExportFormat.XLSX:
            return generate_excel_export(data)
        return generate_csv_export(data)

    def get_summary_report(self, cohort_id: str, *, now: Optional[datetime] = None) -> str:
        now = now or now_local()
        overview = self.get_cohort_overview(cohort_id, now=now)
        return generate_attendance_summary_report(overview.cohort, overview.students, now=now)

    def get_completion_report(self, cohort_id: str, *, now: Optional[datetime] = None) -> AttendanceCompletionReport:
        now = now or now_local()
        cohort = self._require_cohort(cohort_id)
        students = self._source.list_active_students(cohort_id)
        records = self._cohort_records(cohort, now)

        report = generate_attendance_completion_report(
            [s.student_id for s in students],
            cohort.start_date,
            cohort.end_date,
            records,
            now=now,
        )
        logger.info(
            "attendance completion cohort=%s completion=%.2f recommendations=%d",
            cohort_id,
            report.completion_rate,
            len(report.recommendations),
        )
        return report
