"""Plain-text attendance summary for mentors.

Section order and wording are fixed; people read and compare these reports.
"""
from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Sequence

from ..common.datetime_utils import now_local
from ..common.numbers import round_half_up
from ..core.constants import ATTENTION_ATTENDANCE_RATE, TARGET_ATTENDANCE_RATE, TOP_PERFORMERS_LIMIT
from ..core.enums import AttendanceTrend, RiskLevel
from ..stats.model import CohortAttendanceData, StudentAttendanceData


def _long_date(value: date) -> str:
    return f"{value:%B} {value.day}, {value.year}"


def _short_date(value: date) -> str:
    return f"{value:%b} {value.day}, {value.year}"


def _one_decimal(value: float) -> str:
    return f"{round_half_up(value, 1):.1f}"


def _share(count: int, total: int) -> str:
    return _one_decimal(count / total * 100 if total else 0.0)


def generate_attendance_summary_report(
    cohort_data: CohortAttendanceData,
    student_data: Sequence[StudentAttendanceData],
    *,
    now: Optional[datetime] = None,
) -> str:
    now = now or now_local()
    lines: list[str] = []

    period_end = _short_date(cohort_data.end_date) if cohort_data.end_date else "Present"
    lines += [
        "ATTENDANCE SUMMARY REPORT",
        "========================",
        "",
        f"Cohort: {cohort_data.cohort_name}",
        f"Report Date: {_long_date(now)}",
        f"Period: {_short_date(cohort_data.start_date)} - {period_end}",
        "",
    ]

    lines += [
        "COHORT OVERVIEW",
        "---------------",
        f"Total Students: {cohort_data.total_students}",
        f"Active Students: {cohort_data.active_students}",
        f"Total Working Days: {cohort_data.statistics.total_days}",
        f"Overall Attendance Rate: {_one_decimal(cohort_data.statistics.attendance_rate)}%",
        "",
    ]

    total = len(student_data)
    high = sum(1 for s in student_data if s.risk_level == RiskLevel.HIGH)
    medium = sum(1 for s in student_data if s.risk_level == RiskLevel.MEDIUM)
    low = sum(1 for s in student_data if s.risk_level == RiskLevel.LOW)
    lines += [
        "RISK ANALYSIS",
        "-------------",
        f"High Risk Students: {high} ({_share(high, total)}%)",
        f"Medium Risk Students: {medium} ({_share(medium, total)}%)",
        f"Low Risk Students: {low} ({_share(low, total)}%)",
        "",
    ]

    top_performers = sorted(student_data, key=lambda s: s.statistics.attendance_rate, reverse=True)
    lines += ["TOP PERFORMERS", "--------------"]
    for position, student in enumerate(top_performers[:TOP_PERFORMERS_LIMIT], start=1):
        lines.append(f"{position}. {student.student_name}: {_one_decimal(student.statistics.attendance_rate)}%")
    lines.append("")

    needing_attention = sorted(
        (
            s
            for s in student_data
            if s.risk_level == RiskLevel.HIGH or s.statistics.attendance_rate < ATTENTION_ATTENDANCE_RATE
        ),
        key=lambda s: s.statistics.attendance_rate,
    )
    if needing_attention:
        lines += ["STUDENTS NEEDING ATTENTION", "--------------------------"]
        for student in needing_attention:
            lines += [
                f"• {student.student_name}: {_one_decimal(student.statistics.attendance_rate)}% ({RiskLevel(student.risk_level).value} risk)",
                f"  - Unexcused absences: {student.statistics.absent_unexcused_days}",
                f"  - Trend: {AttendanceTrend(student.trend).value}",
            ]
        lines.append("")

    lines += ["RECOMMENDATIONS", "---------------"]
    if cohort_data.statistics.attendance_rate < TARGET_ATTENDANCE_RATE:
        lines += [
            "• Overall cohort attendance is below target (85%). Consider:",
            "  - Reviewing attendance policies",
            "  - Implementing attendance incentives",
            "  - Identifying common absence patterns",
        ]
    if high > 0:
        lines += [
            f"• {high} students are at high risk. Recommend:",
            "  - Individual meetings with at-risk students",
            "  - Academic support interventions",
            "  - Monitoring attendance trends closely",
        ]
    if any(s.trend == AttendanceTrend.DECLINING for s in needing_attention):
        lines += [
            "• Some students show declining attendance trends. Consider:",
            "  - Early intervention strategies",
            "  - Peer support programs",
            "  - Regular check-ins",
        ]

    return "\n".join(lines)
