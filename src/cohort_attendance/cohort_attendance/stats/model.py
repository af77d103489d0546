from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from ..core.enums import AttendanceStatus, AttendanceTrend, RiskLevel, StreakType


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one student's attendance on one calendar date."""

    id: str
    date: date
    status: AttendanceStatus
    student_id: str


@dataclass(frozen=True)
class Cohort:
    cohort_id: str
    name: str
    start_date: date
    end_date: Optional[date] = None


@dataclass(frozen=True)
class Student:
    student_id: str
    name: str
    email: Optional[str] = None


@dataclass(frozen=True)
class AttendanceStatistics:
    """Aggregate computed from a record set; never stored."""

    total_days: int = 0
    present_days: int = 0
    absent_days: int = 0
    absent_sick_days: int = 0
    absent_excused_days: int = 0
    absent_unexcused_days: int = 0
    unrecorded_days: int = 0
    attendance_rate: float = 0.0
    absentee_rate: float = 0.0

    def to_dict(self) -> dict:
        return {
            "totalDays": self.total_days,
            "presentDays": self.present_days,
            "absentDays": self.absent_days,
            "absentSickDays": self.absent_sick_days,
            "absentExcusedDays": self.absent_excused_days,
            "absentUnexcusedDays": self.absent_unexcused_days,
            "unrecordedDays": self.unrecorded_days,
            "attendanceRate": self.attendance_rate,
            "absenteeRate": self.absentee_rate,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "AttendanceStatistics":
        return cls(
            total_days=int(data["totalDays"]),
            present_days=int(data["presentDays"]),
            absent_days=int(data["absentDays"]),
            absent_sick_days=int(data["absentSickDays"]),
            absent_excused_days=int(data["absentExcusedDays"]),
            absent_unexcused_days=int(data["absentUnexcusedDays"]),
            unrecorded_days=int(data["unrecordedDays"]),
            attendance_rate=data["attendanceRate"],
            absentee_rate=data["absenteeRate"],
        )


@dataclass(frozen=True)
class MonthlyAttendance(AttendanceStatistics):
    month: int = 1
    year: int = 1970

    def to_dict(self) -> dict:
        return {**super().to_dict(), "month": self.month, "year": self.year}


@dataclass(frozen=True)
class AttendanceStreak:
    current_streak: int
    longest_streak: int
    type: StreakType


@dataclass(frozen=True)
class StudentAttendanceData:
    """Read-model for one student of a cohort."""

    student_id: str
    student_name: str
    cohort_id: str
    records: list[AttendanceRecord]
    statistics: AttendanceStatistics
    trend: AttendanceTrend
    risk_level: RiskLevel


@dataclass(frozen=True)
class CohortAttendanceData:
    """Read-model for a whole cohort."""

    cohort_id: str
    cohort_name: str
    total_students: int
    active_students: int
    start_date: date
    end_date: Optional[date]
    statistics: AttendanceStatistics


@dataclass(frozen=True)
class CohortOverview:
    cohort: CohortAttendanceData
    students: list[StudentAttendanceData] = field(default_factory=list)
