"""Numeric helpers for bounded score terms.

Every scoring term is a ratio pushed through a cap; these helpers keep that
shape consistent across the scorers.
"""

from __future__ import annotations

import math
from collections.abc import Iterable


def clamp(value: float, low: float, high: float) -> float:
    """Clamp ``value`` into the closed interval [low, high]."""

    return max(low, min(value, high))


def capped(value: float, cap: float) -> float:
    """Upper-bound ``value`` at ``cap``."""

    return min(value, cap)


def scaled_share(value: float, target: float, points: float) -> float:
    """Award ``points`` once ``value`` reaches ``target``, linearly below it.

    ``scaled_share(0.075, 0.15, 10)`` -> 5.0
    """

    return min(value / target, 1.0) * points


def floored_total(values: Iterable[float]) -> float:
    """Sum a denominator and floor it at 1 so ratios degrade to 0 instead of failing."""

    return max(sum(values), 1)


def rounded_percentage(part: float, whole: float) -> int:
    """``part / whole`` as a whole percentage, halves rounded up; 0 when ``whole`` is 0.

    ``rounded_percentage(1, 8)`` -> 13
    """

    if whole <= 0:
        return 0
    return math.floor(part / whole * 100 + 0.5)
