from __future__ import annotations

import math


def round_half_up(value: float, digits: int = 2) -> float:
    """Round half up (0.125 -> 0.13), the rounding used by every exported rate."""
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


def percentage(part: float, whole: float) -> float:
    if whole <= 0:
        return 0.0
    return part / whole * 100
