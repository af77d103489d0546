from __future__ import annotations

import importlib
import logging.config
from dataclasses import dataclass

from dotenv import load_dotenv

from config import get_settings_module

from .core.constants import DEFAULT_BATCH_SIZE, DEFAULT_RECORDS_PER_SECOND

LOG_FORMAT = "{asctime} {levelname} [{name}:{lineno}] {message}"


@dataclass(frozen=True)
class AnalyticsSettings:
    module: str
    debug: bool = False
    log_level: str = "INFO"
    default_batch_size: int = DEFAULT_BATCH_SIZE
    estimated_records_per_second: float = DEFAULT_RECORDS_PER_SECOND


def load_settings() -> AnalyticsSettings:
    """Read the settings module selected by APP_ENV (a .env file is honoured)."""
    load_dotenv(override=False)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    return AnalyticsSettings(
        module=settings_module,
        debug=bool(getattr(settings, "DEBUG", False)),
        log_level=str(getattr(settings, "LOG_LEVEL", "INFO")).upper(),
        default_batch_size=int(getattr(settings, "DEFAULT_BATCH_SIZE", DEFAULT_BATCH_SIZE)),
        estimated_records_per_second=float(
            getattr(settings, "ESTIMATED_RECORDS_PER_SECOND", DEFAULT_RECORDS_PER_SECOND)
        ),
    )


def configure_logging(settings: AnalyticsSettings) -> None:
    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "detailed": {"format": LOG_FORMAT, "style": "{"},
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "formatter": "detailed",
                },
            },
            "loggers": {
                __package__: {
                    "handlers": ["console"],
                    "level": settings.log_level,
                    "propagate": False,
                },
            },
        }
    )
