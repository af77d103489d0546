"""Settings modules for the attendance engine.

APP_ENV picks the module (development by default). The modules themselves read
LOG_LEVEL, ATTENDANCE_BATCH_SIZE and ATTENDANCE_RECORDS_PER_SECOND; a .env
file is loaded first by ``cohort_attendance.settings.load_settings``.
"""
import os

SETTINGS_MODULES = {
    "prod": "config.production",
    "production": "config.production",
    "test": "config.testing",
    "testing": "config.testing",
    "dev": "config.development",
    "development": "config.development",
}
DEFAULT_SETTINGS_MODULE = "config.development"


def get_settings_module() -> str:
    env = os.getenv("APP_ENV", "development").strip().lower()
    return SETTINGS_MODULES.get(env, DEFAULT_SETTINGS_MODULE)
