from __future__ import annotations

import json
from dataclasses import replace

from src.cohort_attendance.cohort_attendance.export.json_export import generate_json_export
from src.cohort_attendance.cohort_attendance.export.model import AttendanceExportData


def test_json_uses_camel_case_keys(export_data):
    payload = json.loads(generate_json_export(export_data))

    assert payload["metadata"]["cohortName"] == "Spring Cohort"
    assert payload["metadata"]["dateRange"] == {"startDate": "2024-01-01", "endDate": "2024-01-12"}
    assert payload["metadata"]["totalWorkingDays"] == 10
    student = payload["students"][0]
    assert student["studentId"] == "s1"
    assert "email" not in student
    assert student["statistics"]["attendanceRate"] == 80.0
    assert student["records"][1] == {"date": "2024-01-03", "status": "ABSENT_SICK", "statusLabel": "Absent - Sick"}
    assert "cohortStatistics" not in payload


def test_json_is_pretty_printed(export_data):
    text = generate_json_export(export_data)

    assert text.startswith('{\n  "metadata": {')


def test_json_restores_export(export_data, student_statistics):
    data = replace(export_data, cohort_statistics=student_statistics)

    restored = AttendanceExportData.from_dict(json.loads(generate_json_export(data)))

    assert restored == data


def test_json_without_metadata(export_data):
    payload = json.loads(generate_json_export(replace(export_data, metadata=None)))

    assert list(payload) == ["students"]
