"""Read attendance back from CSV text and check it against cohort rules."""
from __future__ import annotations

import csv
import logging
from datetime import date, datetime
from typing import Optional, Sequence

from ..common.datetime_utils import days_since, is_weekend, to_day, today, try_parse_iso_date
from ..core.constants import EDIT_WINDOW_DAYS
from .csv_export import COHORT_SECTION, METADATA_SECTION, RECORDS_HEADER, RECORDS_SECTION, SUMMARY_SECTION
from .labels import status_from_code
from .model import CsvParseResult, ImportedAttendanceRow, ImportValidationResult

logger = logging.getLogger(__name__)

# Sections of a full export that do not hold detail rows.
SKIPPED_SECTIONS = {SUMMARY_SECTION, COHORT_SECTION}
DETAIL_SECTIONS = {METADATA_SECTION, RECORDS_SECTION}
DETAIL_HEADER_PREFIX = ",".join(RECORDS_HEADER.split(",")[:3])


def _data_lines(csv_content: str) -> list[str]:
    """Detail lines of a file: comments, blank lines, headers and summary sections removed."""
    lines = []
    skipping = False
    for raw in csv_content.strip().split("\n"):
        line = raw.rstrip("\r")
        if line.startswith("#"):
            section = line[1:].strip()
            if section in SKIPPED_SECTIONS:
                skipping = True
            elif section in DETAIL_SECTIONS:
                skipping = False
            continue
        if not line.strip():
            continue
        if skipping or line.startswith(DETAIL_HEADER_PREFIX):
            continue
        lines.append(line)
    return lines


def parse_csv_attendance_data(csv_content: str) -> CsvParseResult:
    """Parse the detail rows of ``generate_csv_export`` output (or a plain detail table).

    Expected columns: student id, student name, date, status label, status code.
    Bad lines are reported one by one and parsing goes on; ``data`` is only set
    when no line failed.
    """
    errors: list[str] = []
    data: list[ImportedAttendanceRow] = []

    try:
        lines = _data_lines(csv_content)
        for number, line in enumerate(lines, start=1):
            # each line is its own row
            parts = next(csv.reader([line]))
            if len(parts) < 4:
                errors.append(f"Line {number}: Invalid format - expected at least 4 columns")
                continue

            student_id = parts[0].strip()
            date_text = parts[2].strip()
            status_code = parts[4].strip() if len(parts) > 4 else ""

            if not student_id:
                errors.append(f"Line {number}: Missing student ID")
                continue

            if try_parse_iso_date(date_text) is None:
                errors.append(f"Line {number}: Invalid date format - {date_text}")
                continue

            status = status_from_code(status_code)
            if status is None:
                errors.append(f"Line {number}: Invalid status code - {status_code}")
                continue

            data.append(ImportedAttendanceRow(student_id=student_id, date=date_text, status=status))
    except (AttributeError, TypeError, csv.Error) as e:
        logger.warning("CSV attendance import failed: %s", e)
        return CsvParseResult(success=False, errors=[f"Parse error: {e}"])

    if errors:
        logger.info("CSV attendance import rejected: %d bad lines", len(errors))
        return CsvParseResult(success=False, errors=errors)
    return CsvParseResult(success=True, data=data)


def validate_import_data(
    import_data: Sequence[ImportedAttendanceRow],
    cohort_start_date: date,
    cohort_end_date: Optional[date] = None,
    *,
    now: Optional[datetime] = None,
) -> ImportValidationResult:
    errors: list[str] = []
    warnings: list[str] = []

    current = today(now)
    cohort_start = to_day(cohort_start_date)
    cohort_end = to_day(cohort_end_date) if cohort_end_date is not None else current

    for record in import_data:
        record_date = try_parse_iso_date(record.date)
        if record_date is None:
            errors.append(f"Date {record.date} is not a valid date")
            continue

        if record_date < cohort_start:
            errors.append(f"Date {record.date} is before cohort start date")
        if record_date > cohort_end:
            errors.append(f"Date {record.date} is after cohort end date")
        if record_date > current:
            errors.append(f"Date {record.date} is in the future")

        if is_weekend(record_date):
            warnings.append(f"Date {record.date} is a weekend")
        if days_since(record_date, now) > EDIT_WINDOW_DAYS:
            warnings.append(f"Date {record.date} is more than {EDIT_WINDOW_DAYS} days old")

    seen: set[str] = set()
    for record in import_data:
        key = f"{record.student_id}-{record.date}"
        if key in seen:
            errors.append(f"Duplicate record found for student {record.student_id} on {record.date}")
        seen.add(key)

    return ImportValidationResult(valid=not errors, errors=errors, warnings=warnings)
