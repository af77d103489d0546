from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date


@dataclass(frozen=True)
class StudentCompletion:
    student_id: str
    missing_dates: list[date]
    completion_rate: float


@dataclass(frozen=True)
class AttendanceCompletionReport:
    total_working_days: int
    total_possible_records: int
    total_existing_records: int
    completion_rate: float
    missing_records_by_student: dict[str, StudentCompletion]
    overall_missing_dates: list[date]
    recommendations: list[str] = field(default_factory=list)
