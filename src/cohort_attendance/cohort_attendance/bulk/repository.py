from __future__ import annotations

from typing import Protocol, Sequence

from .model import BulkOperationResult, PreparedAttendanceRow


class AttendanceBatchWriter(Protocol):
    """Write side of the persistence layer; one call per batch (one transaction)."""

    def write_batch(self, rows: Sequence[PreparedAttendanceRow]) -> BulkOperationResult:
        raise NotImplementedError
