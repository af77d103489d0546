from __future__ import annotations

from enum import Enum
from typing import Any, Optional


class AttendanceStatus(str, Enum):
    """Daily attendance status as stored by the persistence layer."""

    PRESENT = "PRESENT"
    ABSENT_SICK = "ABSENT_SICK"
    ABSENT_EXCUSED = "ABSENT_EXCUSED"
    ABSENT_UNEXCUSED = "ABSENT_UNEXCUSED"

    @classmethod
    def coerce(cls, value: Any) -> Optional["AttendanceStatus"]:
        """Return the member for a member or its raw value, otherwise None."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            return cls._value2member_map_.get(value)
        return None

    @property
    def is_absence(self) -> bool:
        return self is not AttendanceStatus.PRESENT


class AttendanceTrend(str, Enum):
    IMPROVING = "improving"
    DECLINING = "declining"
    STABLE = "stable"


class RiskLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class StreakType(str, Enum):
    PRESENT = "present"
    ABSENT = "absent"


class RecordSource(str, Enum):
    """Where a bulk record came from."""

    MANUAL = "manual"
    IMPORT = "import"
    SYSTEM = "system"


class ExportFormat(str, Enum):
    CSV = "csv"
    JSON = "json"
    XLSX = "xlsx"
