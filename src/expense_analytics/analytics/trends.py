from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, Literal, Mapping

from .models import TransactionRecord
from .monthly import available_months
from .months import month_name, next_month
from .stats import deltas, mean, normalized_volatility

logger = logging.getLogger(__name__)

Direction = Literal["upward", "downward", "stable"]
Confidence = Literal["low", "medium", "high"]

HIGH_CONFIDENCE_MAX_VOLATILITY = 0.3
MEDIUM_CONFIDENCE_MAX_VOLATILITY = 0.7


@dataclass(frozen=True)
class TrendPoint:
    month: int
    month_name: str
    year: int
    total_amount: float
    transaction_count: int


@dataclass(frozen=True)
class Forecast:
    month: int
    month_name: str
    year: int
    projected_total: float
    confidence: Confidence
    normalized_volatility: float | None
    rationale: str


@dataclass(frozen=True)
class RollingTrend:
    window_size: int
    average_change: float
    direction: Direction
    trend: list[TrendPoint] = field(default_factory=list)
    forecast: Forecast | None = None


def classify_direction(average_change: float) -> Direction:
    if average_change > 0:
        return "upward"
    if average_change < 0:
        return "downward"
    return "stable"


def estimate_confidence(changes: list[float], average_change: float) -> tuple[Confidence, float | None]:
    """
    Inverse proxy of volatility in month-over-month changes.

    One change is too little to judge dispersion, so it is "medium".
    """
    if not changes:
        return "low", None
    if len(changes) == 1:
        return "medium", None

    vol = normalized_volatility(changes, average_change)
    if vol <= HIGH_CONFIDENCE_MAX_VOLATILITY:
        return "high", vol
    if vol <= MEDIUM_CONFIDENCE_MAX_VOLATILITY:
        return "medium", vol
    return "low", vol


def rolling_trend(
    records: Iterable[TransactionRecord | Mapping[str, Any]],
    window_size: int = 3,
) -> RollingTrend:
    if window_size < 1:
        raise ValueError("window_size must be >= 1")

    months = available_months(records)
    if not months:
        return RollingTrend(window_size=window_size, average_change=0.0, direction="stable")

    selected = list(reversed(months[:window_size]))
    trend = [
        TrendPoint(
            month=m.month,
            month_name=m.month_name,
            year=m.year,
            total_amount=m.total_amount,
            transaction_count=m.transaction_count,
        )
        for m in selected
    ]

    changes = deltas([p.total_amount for p in trend])
    average_change = mean(changes)
    direction = classify_direction(average_change)
    confidence, vol = estimate_confidence(changes, average_change)

    latest = months[0]
    ny, nm = next_month(latest.year, latest.month)
    projected = max(0.0, trend[-1].total_amount + average_change)
    movement = "a stable pattern" if direction == "stable" else f"{direction} movement"

    forecast = Forecast(
        month=nm,
        month_name=month_name(nm),
        year=ny,
        projected_total=projected,
        confidence=confidence,
        normalized_volatility=vol,
        rationale=f"Based on {len(trend)} month trend showing {movement}.",
    )
    logger.debug(
        "rolling_trend: points=%d avg_change=%.2f direction=%s confidence=%s",
        len(trend),
        average_change,
        direction,
        confidence,
    )

    return RollingTrend(
        window_size=window_size,
        average_change=average_change,
        direction=direction,
        trend=trend,
        forecast=forecast,
    )
