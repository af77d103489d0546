from __future__ import annotations

from datetime import date, datetime

import pytest


@pytest.fixture
def fixed_now() -> datetime:
    # Friday of the second cohort week
    return datetime(2024, 1, 12, 10, 0, 0)


@pytest.fixture
def cohort_start() -> date:
    # Monday
    return date(2024, 1, 1)
