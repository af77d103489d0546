from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from ..core.enums import AttendanceStatus, ExportFormat
from ..stats.model import AttendanceStatistics


@dataclass(frozen=True)
class DateRange:
    start_date: date
    end_date: date


@dataclass(frozen=True)
class ExportOptions:
    format: ExportFormat = ExportFormat.CSV
    include_statistics: bool = False
    date_range: Optional[DateRange] = None
    include_metadata: bool = True


@dataclass(frozen=True)
class ExportMetadata:
    export_date: str
    cohort_name: str
    cohort_id: str
    start_date: str
    end_date: str
    total_students: int
    total_working_days: int

    def to_dict(self) -> dict:
        return {
            "exportDate": self.export_date,
            "cohortName": self.cohort_name,
            "cohortId": self.cohort_id,
            "dateRange": {"startDate": self.start_date, "endDate": self.end_date},
            "totalStudents": self.total_students,
            "totalWorkingDays": self.total_working_days,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ExportMetadata":
        return cls(
            export_date=data["exportDate"],
            cohort_name=data["cohortName"],
            cohort_id=data["cohortId"],
            start_date=data["dateRange"]["startDate"],
            end_date=data["dateRange"]["endDate"],
            total_students=int(data["totalStudents"]),
            total_working_days=int(data["totalWorkingDays"]),
        )


@dataclass(frozen=True)
class ExportedRecord:
    date: str
    status: AttendanceStatus
    status_label: str

    def to_dict(self) -> dict:
        return {"date": self.date, "status": self.status.value, "statusLabel": self.status_label}

    @classmethod
    def from_dict(cls, data: dict) -> "ExportedRecord":
        return cls(date=data["date"], status=AttendanceStatus(data["status"]), status_label=data["statusLabel"])


@dataclass(frozen=True)
class ExportedStudent:
    student_id: str
    student_name: str
    statistics: AttendanceStatistics
    records: list[ExportedRecord] = field(default_factory=list)
    email: Optional[str] = None

    def to_dict(self) -> dict:
        data = {"studentId": self.student_id, "studentName": self.student_name}
        if self.email is not None:
            data["email"] = self.email
        data["statistics"] = self.statistics.to_dict()
        data["records"] = [r.to_dict() for r in self.records]
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "ExportedStudent":
        return cls(
            student_id=data["studentId"],
            student_name=data["studentName"],
            email=data.get("email"),
            statistics=AttendanceStatistics.from_dict(data["statistics"]),
            records=[ExportedRecord.from_dict(r) for r in data["records"]],
        )


@dataclass(frozen=True)
class AttendanceExportData:
    """Export envelope shared by the CSV, JSON and XLSX writers."""

    metadata: Optional[ExportMetadata]
    students: list[ExportedStudent]
    cohort_statistics: Optional[AttendanceStatistics] = None

    def to_dict(self) -> dict:
        data: dict = {}
        if self.metadata is not None:
            data["metadata"] = self.metadata.to_dict()
        data["students"] = [s.to_dict() for s in self.students]
        if self.cohort_statistics is not None:
            data["cohortStatistics"] = self.cohort_statistics.to_dict()
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "AttendanceExportData":
        metadata = data.get("metadata")
        cohort_statistics = data.get("cohortStatistics")
        return cls(
            metadata=ExportMetadata.from_dict(metadata) if metadata else None,
            students=[ExportedStudent.from_dict(s) for s in data["students"]],
            cohort_statistics=AttendanceStatistics.from_dict(cohort_statistics) if cohort_statistics else None,
        )


@dataclass(frozen=True)
class ImportedAttendanceRow:
    """Detail row recovered from a CSV file; ``date`` stays an ISO string."""

    student_id: str
    date: str
    status: AttendanceStatus


@dataclass(frozen=True)
class CsvParseResult:
    success: bool
    data: Optional[list[ImportedAttendanceRow]] = None
    errors: Optional[list[str]] = None


@dataclass(frozen=True)
class ImportValidationResult:
    valid: bool
    errors: list[str]
    warnings: list[str]
