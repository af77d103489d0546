from __future__ import annotations

import io
import logging

import pandas as pd

from .labels import get_attendance_status_code, summary_risk_label
from .model import AttendanceExportData

logger = logging.getLogger(__name__)

SUMMARY_SHEET = "Summary"
RECORDS_SHEET = "Records"
COHORT_SHEET = "Cohort Statistics"

SUMMARY_COLUMNS = [
    "Student ID",
    "Student Name",
    "Total Days",
    "Present Days",
    "Absent Days",
    "Attendance Rate %",
    "Risk Level",
]
RECORDS_COLUMNS = ["Student ID", "Student Name", "Date", "Status", "Status Code"]


def generate_excel_export(data: AttendanceExportData) -> bytes:
    """Workbook with the same tables as the CSV export, one sheet each."""
    summary = pd.DataFrame(
        [
            [
                s.student_id,
                s.student_name,
                s.statistics.total_days,
                s.statistics.present_days,
                s.statistics.absent_days,
                s.statistics.attendance_rate,
                summary_risk_label(s.statistics.attendance_rate),
            ]
            for s in data.students
        ],
        columns=SUMMARY_COLUMNS,
    )
    records = pd.DataFrame(
        [
            [s.student_id, s.student_name, r.date, r.status_label, get_attendance_status_code(r.status)]
            for s in data.students
            for r in s.records
        ],
        columns=RECORDS_COLUMNS,
    )

    # Write into memory, callers decide where the bytes go
    output = io.BytesIO()
    with pd.ExcelWriter(output, engine="openpyxl") as writer:
        summary.to_excel(writer, index=False, sheet_name=SUMMARY_SHEET)
        records.to_excel(writer, index=False, sheet_name=RECORDS_SHEET)
        if data.cohort_statistics is not None:
            stats = data.cohort_statistics
            cohort = pd.DataFrame(
                [
                    ["Total Days", stats.total_days],
                    ["Present Days", stats.present_days],
                    ["Absent Days", stats.absent_days],
                    ["Sick Days", stats.absent_sick_days],
                    ["Excused Absent Days", stats.absent_excused_days],
                    ["Unexcused Absent Days", stats.absent_unexcused_days],
                    ["Unrecorded Days", stats.unrecorded_days],
                    ["Attendance Rate %", stats.attendance_rate],
                    ["Absentee Rate %", stats.absentee_rate],
                ],
                columns=["Metric", "Value"],
            )
            cohort.to_excel(writer, index=False, sheet_name=COHORT_SHEET)

    logger.debug("xlsx export: %d students, %d records", len(summary), len(records))
    return output.getvalue()
