from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .bulk.repository import AttendanceBatchWriter
from .bulk.service import BulkAttendanceService
from .settings import AnalyticsSettings, configure_logging, load_settings
from .stats.repository import AttendanceDataSource
from .stats.service import AttendanceAnalyticsService


@dataclass(frozen=True)
class Container:
    settings: AnalyticsSettings

    source: AttendanceDataSource
    writer: AttendanceBatchWriter

    analytics_service: AttendanceAnalyticsService
    bulk_service: BulkAttendanceService


def build_container(
    *,
    source: AttendanceDataSource,
    writer: AttendanceBatchWriter,
    settings: Optional[AnalyticsSettings] = None,
) -> Container:
    if settings is None:
        settings = load_settings()
        configure_logging(settings)

    analytics_service = AttendanceAnalyticsService(source)
    bulk_service = BulkAttendanceService(
        writer,
        batch_size=settings.default_batch_size,
        records_per_second=settings.estimated_records_per_second,
    )

    return Container(
        settings=settings,
        source=source,
        writer=writer,
        analytics_service=analytics_service,
        bulk_service=bulk_service,
    )
