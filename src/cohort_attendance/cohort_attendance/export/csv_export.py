"""CSV-like text export.

Layout (consumers parse it, keep headers and column order stable):

    # metadata comment block        (when metadata is present)
    # Student Statistics Summary    one row per student
    # Daily Attendance Records      one row per record
    # Cohort Statistics             Metric,Value rows (optional)

Text fields are double-quoted, numbers are not.
"""
from __future__ import annotations

from ..stats.model import AttendanceStatistics
from .labels import get_attendance_status_code, summary_risk_label
from .model import AttendanceExportData

SUMMARY_SECTION = "Student Statistics Summary"
RECORDS_SECTION = "Daily Attendance Records"
COHORT_SECTION = "Cohort Statistics"
METADATA_SECTION = "Attendance Export Metadata"

SUMMARY_HEADER = "Student ID,Student Name,Total Days,Present Days,Absent Days,Attendance Rate %,Risk Level"
RECORDS_HEADER = "Student ID,Student Name,Date,Status,Status Code"


def _quote(value: str) -> str:
    return f'"{value}"'


def _cohort_rows(stats: AttendanceStatistics) -> list[str]:
    return [
        f"Total Days,{stats.total_days}",
        f"Present Days,{stats.present_days}",
        f"Absent Days,{stats.absent_days}",
        f"Sick Days,{stats.absent_sick_days}",
        f"Excused Absent Days,{stats.absent_excused_days}",
        f"Unexcused Absent Days,{stats.absent_unexcused_days}",
        f"Unrecorded Days,{stats.unrecorded_days}",
        f"Attendance Rate %,{stats.attendance_rate:.2f}",
        f"Absentee Rate %,{stats.absentee_rate:.2f}",
    ]


def generate_csv_export(data: AttendanceExportData) -> str:
    lines: list[str] = []

    meta = data.metadata
    if meta is not None:
        lines.extend(
            [
                f"# {METADATA_SECTION}",
                f"# Export Date: {meta.export_date}",
                f"# Cohort: {meta.cohort_name} ({meta.cohort_id})",
                f"# Date Range: {meta.start_date} to {meta.end_date}",
                f"# Total Students: {meta.total_students}",
                f"# Total Working Days: {meta.total_working_days}",
                "",
            ]
        )

    lines.append(f"# {SUMMARY_SECTION}")
    lines.append(SUMMARY_HEADER)
    for student in data.students:
        stats = student.statistics
        lines.append(
            ",".join(
                [
                    student.student_id,
                    _quote(student.student_name),
                    str(stats.total_days),
                    str(stats.present_days),
                    str(stats.absent_days),
                    f"{stats.attendance_rate:.2f}",
                    summary_risk_label(stats.attendance_rate),
                ]
            )
        )
    lines.append("")

    lines.append(f"# {RECORDS_SECTION}")
    lines.append(RECORDS_HEADER)
    for student in data.students:
        for record in student.records:
            lines.append(
                ",".join(
                    [
                        student.student_id,
                        _quote(student.student_name),
                        record.date,
                        _quote(record.status_label),
                        get_attendance_status_code(record.status),
                    ]
                )
            )

    if data.cohort_statistics is not None:
        lines.append("")
        lines.append(f"# {COHORT_SECTION}")
        lines.append("Metric,Value")
        lines.extend(_cohort_rows(data.cohort_statistics))

    return "\n".join(lines)
