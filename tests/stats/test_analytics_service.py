from __future__ import annotations

import json
from datetime import date

import pytest

from src.cohort_attendance.cohort_attendance.common.datetime_utils import iter_days
from src.cohort_attendance.cohort_attendance.core.enums import AttendanceStatus, ExportFormat, RiskLevel
from src.cohort_attendance.cohort_attendance.core.exceptions import CohortNotFoundError
from src.cohort_attendance.cohort_attendance.export.model import ExportOptions
from src.cohort_attendance.cohort_attendance.stats.model import AttendanceRecord, Cohort, Student
from src.cohort_attendance.cohort_attendance.stats.service import AttendanceAnalyticsService


class InMemorySource:
    def __init__(self, cohorts, students, records):
        self.cohorts = {c.cohort_id: c for c in cohorts}
        self.students = students
        self.records = records
        self.queries = []

    def get_cohort(self, cohort_id):
        return self.cohorts.get(cohort_id)

    def list_active_students(self, cohort_id):
        return self.students.get(cohort_id, [])

    def list_records(self, cohort_id, *, start_date, end_date):
        self.queries.append((cohort_id, start_date, end_date))
        return [r for r in self.records if start_date <= r.date <= end_date]


def _days(student_id, start, end, status=AttendanceStatus.PRESENT):
    return [
        AttendanceRecord(id=f"{student_id}-{d}", date=d, status=status, student_id=student_id)
        for d in iter_days(start, end)
        if d.weekday() < 5
    ]


@pytest.fixture
def source(cohort_start):
    records = (
        _days("a", cohort_start, date(2024, 1, 12))
        + _days("b", cohort_start, date(2024, 1, 5))
        + _days("b", date(2024, 1, 8), date(2024, 1, 9), AttendanceStatus.ABSENT_UNEXCUSED)
    )
    return InMemorySource(
        cohorts=[Cohort(cohort_id="c1", name="Spring Cohort", start_date=cohort_start)],
        students={"c1": [Student("a", "Ada"), Student("b", "Bob")]},
        records=records,
    )


@pytest.fixture
def service(source):
    return AttendanceAnalyticsService(source)


def test_overview(service, source, fixed_now):
    overview = service.get_cohort_overview("c1", now=fixed_now)

    assert source.queries == [("c1", date(2024, 1, 1), date(2024, 1, 12))]
    cohort = overview.cohort
    assert cohort.total_students == 2
    assert cohort.statistics.total_days == 20
    assert cohort.statistics.present_days == 15
    assert cohort.statistics.absent_unexcused_days == 2
    assert cohort.statistics.unrecorded_days == 3
    assert cohort.statistics.attendance_rate == 75.0
    assert cohort.statistics.absentee_rate == 10.0

    ada, bob = overview.students
    assert ada.statistics.attendance_rate == 100.0
    assert ada.risk_level is RiskLevel.LOW
    assert bob.statistics.attendance_rate == 50.0
    assert bob.risk_level is RiskLevel.HIGH


def test_unknown_cohort(service, fixed_now):
    with pytest.raises(CohortNotFoundError):
        service.get_cohort_overview("missing", now=fixed_now)


def test_student_without_records(source, fixed_now):
    source.students["c1"].append(Student("c", "Cy"))

    overview = AttendanceAnalyticsService(source).get_cohort_overview("c1", now=fixed_now)

    cy = overview.students[-1]
    assert cy.records == []
    assert cy.statistics.unrecorded_days == 10
    assert cy.risk_level is RiskLevel.HIGH


def test_csv_export(service, fixed_now):
    text = service.export_cohort("c1", ExportOptions(), now=fixed_now)

    lines = text.splitlines()
    assert lines[0] == "# Attendance Export Metadata"
    assert "# Total Working Days: 20" in lines
    assert 'a,"Ada",10,10,0,100.00,Low' in lines
    assert 'b,"Bob",10,5,2,50.00,High' in lines
    assert 'b,"Bob",2024-01-09,"Absent - Unexcused",U' in lines


def test_json_export_with_statistics(service, fixed_now):
    options = ExportOptions(format=ExportFormat.JSON, include_statistics=True)

    payload = json.loads(service.export_cohort("c1", options, now=fixed_now))

    assert payload["metadata"]["totalStudents"] == 2
    assert payload["cohortStatistics"]["attendanceRate"] == 75.0
    assert len(payload["students"][1]["records"]) == 7


def test_xlsx_export(service, fixed_now):
    content = service.export_cohort("c1", ExportOptions(format=ExportFormat.XLSX), now=fixed_now)

    assert isinstance(content, bytes)
    assert content[:2] == b"PK"


def test_summary_report(service, fixed_now):
    report = service.get_summary_report("c1", now=fixed_now)

    assert "Overall Attendance Rate: 75.0%" in report
    assert "• Bob: 50.0% (high risk)" in report


def test_completion_report(service, fixed_now):
    report = service.get_completion_report("c1", now=fixed_now)

    assert report.total_possible_records == 20
    assert report.total_existing_records == 17
    assert report.completion_rate == 85.0
    assert report.missing_records_by_student["b"].missing_dates == [date(2024, 1, d) for d in (10, 11, 12)]
    assert len(report.recommendations) == 3
