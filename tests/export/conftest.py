from __future__ import annotations

import pytest

from src.cohort_attendance.cohort_attendance.core.enums import AttendanceStatus
from src.cohort_attendance.cohort_attendance.export.model import (
    AttendanceExportData,
    ExportedRecord,
    ExportedStudent,
    ExportMetadata,
)
from src.cohort_attendance.cohort_attendance.stats.model import AttendanceStatistics


@pytest.fixture
def student_statistics() -> AttendanceStatistics:
    return AttendanceStatistics(
        total_days=10,
        present_days=8,
        absent_days=2,
        absent_sick_days=2,
        attendance_rate=80.0,
        absentee_rate=20.0,
    )


@pytest.fixture
def export_data(student_statistics) -> AttendanceExportData:
    return AttendanceExportData(
        metadata=ExportMetadata(
            export_date="2024-01-12 10:00:00",
            cohort_name="Spring Cohort",
            cohort_id="c1",
            start_date="2024-01-01",
            end_date="2024-01-12",
            total_students=1,
            total_working_days=10,
        ),
        students=[
            ExportedStudent(
                student_id="s1",
                student_name="Ada Lovelace",
                statistics=student_statistics,
                records=[
                    ExportedRecord("2024-01-02", AttendanceStatus.PRESENT, "Present"),
                    ExportedRecord("2024-01-03", AttendanceStatus.ABSENT_SICK, "Absent - Sick"),
                ],
            )
        ],
    )
