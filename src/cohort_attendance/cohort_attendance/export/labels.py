from __future__ import annotations

from typing import Optional

from ..common.numbers import round_half_up
from ..core.enums import AttendanceStatus, RiskLevel

STATUS_LABELS = {
    AttendanceStatus.PRESENT: "Present",
    AttendanceStatus.ABSENT_SICK: "Absent - Sick",
    AttendanceStatus.ABSENT_EXCUSED: "Absent - Excused",
    AttendanceStatus.ABSENT_UNEXCUSED: "Absent - Unexcused",
}

STATUS_CODES = {
    AttendanceStatus.PRESENT: "P",
    AttendanceStatus.ABSENT_SICK: "S",
    AttendanceStatus.ABSENT_EXCUSED: "E",
    AttendanceStatus.ABSENT_UNEXCUSED: "U",
}

RISK_LABELS = {
    RiskLevel.LOW: "Low Risk",
    RiskLevel.MEDIUM: "Medium Risk",
    RiskLevel.HIGH: "High Risk",
}


def get_attendance_status_label(status) -> str:
    return STATUS_LABELS.get(AttendanceStatus.coerce(status), "Unknown")


def get_attendance_status_code(status) -> str:
    return STATUS_CODES.get(AttendanceStatus.coerce(status), "?")


def status_from_code(code: str) -> Optional[AttendanceStatus]:
    """Inverse of ``get_attendance_status_code``, case-insensitive."""
    wanted = code.strip().upper()
    for status, status_code in STATUS_CODES.items():
        if status_code == wanted:
            return status
    return None


def get_risk_level_label(risk_level: RiskLevel) -> str:
    return RISK_LABELS[RiskLevel(risk_level)]


def format_attendance_rate(rate: float) -> str:
    """85.0 -> '85%', 85.25 -> '85.3%'."""
    return f"{round_half_up(rate, 1):g}%"


def summary_risk_label(rate: float) -> str:
    """Rate-only risk column of the tabular exports."""
    if rate >= 85:
        return "Low"
    if rate >= 75:
        return "Medium"
    return "High"
