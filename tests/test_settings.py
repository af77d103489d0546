from __future__ import annotations

import logging

from config import get_settings_module
from src.cohort_attendance.cohort_attendance.container import build_container
from src.cohort_attendance.cohort_attendance.settings import AnalyticsSettings, configure_logging, load_settings
from src.cohort_attendance.cohort_attendance.stats.service import AttendanceAnalyticsService


class NullSource:
    def get_cohort(self, cohort_id):
        return None

    def list_active_students(self, cohort_id):
        return []

    def list_records(self, cohort_id, *, start_date, end_date):
        return []


class NullWriter:
    def write_batch(self, rows):
        raise AssertionError("nothing should be written")


def test_settings_module_follows_app_env(monkeypatch):
    monkeypatch.setenv("APP_ENV", "prod")
    assert get_settings_module() == "config.production"

    monkeypatch.setenv("APP_ENV", "Testing")
    assert get_settings_module() == "config.testing"

    monkeypatch.setenv("APP_ENV", "staging")
    assert get_settings_module() == "config.development"


def test_settings_module_ignores_surrounding_whitespace(monkeypatch):
    monkeypatch.setenv("APP_ENV", " Production\n")
    assert get_settings_module() == "config.production"

    monkeypatch.delenv("APP_ENV")
    assert get_settings_module() == "config.development"


def test_load_testing_settings(monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")

    settings = load_settings()

    assert settings.module == "config.testing"
    assert settings.debug is False
    assert settings.log_level == "WARNING"
    assert settings.default_batch_size == 10
    assert settings.estimated_records_per_second == 50


def test_configure_logging_sets_package_level():
    configure_logging(AnalyticsSettings(module="config.testing", log_level="ERROR"))

    logger = logging.getLogger("src.cohort_attendance.cohort_attendance")
    assert logger.level == logging.ERROR


def test_container_uses_settings():
    settings = AnalyticsSettings(module="config.testing", default_batch_size=10, estimated_records_per_second=25)

    container = build_container(source=NullSource(), writer=NullWriter(), settings=settings)

    assert container.settings is settings
    assert container.bulk_service.estimate(100).estimated_duration == 4.0
    assert isinstance(container.analytics_service, AttendanceAnalyticsService)
