"""Defensive arithmetic shared by every scoring stage.

Scores are integers produced by round-half-up followed by bounding, so a
malformed input yields a suspicious but defined score, never an exception.
"""

from __future__ import annotations

import math
import sys
from typing import Any

__all__ = ["clamp", "coerce_number", "round_half_up", "round_to", "saturate"]


def coerce_number(value: Any) -> float:
    """Coerce *value* to a finite float; anything unusable becomes ``0.0``.

    >>> coerce_number("42.5")
    42.5
    >>> coerce_number(None)
    0.0
    >>> coerce_number(float("nan"))
    0.0
    """
    if value is None:
        return 0.0
    if isinstance(value, bool):
        return 1.0 if value else 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(number):
        return 0.0
    return number


def round_half_up(value: float) -> int:
    """Round to the nearest integer, ties toward positive infinity."""
    return math.floor(value + 0.5)


def round_to(value: float, decimals: int) -> float:
    """Round half-up to *decimals* places (used for ratios)."""
    factor = 10**decimals
    scaled = value * factor
    if not math.isfinite(scaled):
        return value
    return round_half_up(scaled) / factor


def clamp(value: float, lo: int = 0, hi: int = 100) -> int:
    """Round half-up, then bound to ``[lo, hi]``.

    NaN maps to *lo*; infinities map to the matching bound.
    """
    if math.isnan(value):
        return lo
    if math.isinf(value):
        return hi if value > 0 else lo
    return max(lo, min(hi, round_half_up(value)))


def saturate(value: float) -> float:
    """Pin an overflowed amount to the largest finite float of its sign.

    Money arithmetic on huge but finite inputs can overflow to infinity;
    saturating keeps every later ratio and rounding step defined.  NaN
    becomes ``0.0``.
    """
    if math.isnan(value):
        return 0.0
    if math.isinf(value):
        return sys.float_info.max if value > 0 else -sys.float_info.max
    return value
