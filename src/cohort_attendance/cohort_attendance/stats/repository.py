from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import AttendanceRecord, Cohort, Student


class AttendanceDataSource(Protocol):
    """Read side of the persistence layer (already fetched, already validated data)."""

    def get_cohort(self, cohort_id: str) -> Optional[Cohort]:
        raise NotImplementedError

    def list_active_students(self, cohort_id: str) -> Sequence[Student]:
        raise NotImplementedError

    def list_records(self, cohort_id: str, *, start_date: date, end_date: date) -> Sequence[AttendanceRecord]:
        raise NotImplementedError
