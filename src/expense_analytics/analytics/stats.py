from __future__ import annotations

from statistics import pstdev
from typing import Sequence

# A zero denominator yields 0.0.


def safe_div(num: float, den: float) -> float:
    if den == 0:
        return 0.0
    return num / den


def percent_of(part: float, whole: float) -> float:
    if whole <= 0:
        return 0.0
    return (part / whole) * 100.0


def pct_change(current: float, prev: float) -> float:
    if prev == 0:
        return 0.0
    return ((current - prev) / prev) * 100.0


def mean(values: Sequence[float]) -> float:
    if not values:
        return 0.0
    return sum(values) / len(values)


def deltas(values: Sequence[float]) -> list[float]:
    return [values[i] - values[i - 1] for i in range(1, len(values))]


def normalized_volatility(values: Sequence[float], center: float) -> float:
    """
    Population std of values around center, divided by |center|.

    Falls back to the raw std when center is 0.
    """
    if not values:
        return 0.0
    std = pstdev(values, mu=center)
    if center == 0:
        return std
    return std / abs(center)
