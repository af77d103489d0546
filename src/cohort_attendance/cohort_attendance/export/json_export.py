from __future__ import annotations

import json

from .model import AttendanceExportData


def generate_json_export(data: AttendanceExportData) -> str:
    """Pretty-printed JSON; ``AttendanceExportData.from_dict(json.loads(...))`` restores it."""
    return json.dumps(data.to_dict(), indent=2, ensure_ascii=False)
