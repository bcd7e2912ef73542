from __future__ import annotations

import datetime as dt
import logging
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Any, Iterable, Literal, Mapping

from .models import TransactionRecord, ensure_records
from .months import month_bounds, previous_month
from .stats import pct_change, percent_of, safe_div

logger = logging.getLogger(__name__)

MonthlyDirection = Literal["increasing", "decreasing", "stable"]

TOP_CATEGORIES_LIMIT = 5
STABLE_BAND_PCT = 10.0
SHARP_INCREASE_PCT = 20.0
DOMINANT_CATEGORY_PCT = 40.0
WEEKEND_RATIO = 0.4
FEW_RECORDS = 10

EMPTY_RECOMMENDATION = "Start tracking your expenses to get personalized insights!"


@dataclass(frozen=True)
class CategoryTotal:
    category: str
    amount: float
    percentage: float


@dataclass(frozen=True)
class SpendingInsights:
    """
    Snapshot-wide observations relative to the month containing `as_of`.

    `monthly_trend` compares that month to the one before it with a
    plus/minus 10% band; `spending_patterns` and `recommendations` are short
    sentences for the text-generation hand-off.
    """

    as_of: dt.date
    total_expenses: float
    current_month_total: float
    previous_month_total: float
    monthly_trend: MonthlyDirection
    average_daily_spending: float
    current_month_daily_average: float
    top_categories: list[CategoryTotal] = field(default_factory=list)
    current_month_top_categories: list[CategoryTotal] = field(default_factory=list)
    spending_patterns: list[str] = field(default_factory=list)
    recommendations: list[str] = field(default_factory=list)


def _in_month(rows: list[TransactionRecord], year: int, month: int) -> list[TransactionRecord]:
    start, end = month_bounds(year, month)
    return [r for r in rows if start <= r.date <= end]


def _ranked_totals(rows: list[TransactionRecord], whole: float, limit: int) -> list[CategoryTotal]:
    amounts: dict[str, float] = defaultdict(float)
    for r in rows:
        amounts[r.category] += r.amount
    ranked = sorted(amounts.items(), key=lambda kv: kv[1], reverse=True)
    return [
        CategoryTotal(category=cat, amount=amt, percentage=percent_of(amt, whole))
        for cat, amt in ranked[:limit]
    ]


def classify_monthly_trend(current: float, previous: float) -> MonthlyDirection:
    if previous <= 0:
        return "stable"
    if current > previous * (1 + STABLE_BAND_PCT / 100):
        return "increasing"
    if current < previous * (1 - STABLE_BAND_PCT / 100):
        return "decreasing"
    return "stable"


def spending_patterns(
    rows: list[TransactionRecord],
    top: list[CategoryTotal],
    current: float,
    previous: float,
) -> list[str]:
    out: list[str] = []

    if top:
        out.append(
            f"Your highest spending category is {top[0].category} "
            f"({top[0].percentage:.1f}% of total expenses)"
        )

    if previous > 0:
        change = pct_change(current, previous)
        if change > STABLE_BAND_PCT:
            out.append(f"This month's spending is {change:.1f}% higher than last month")
        elif change < -STABLE_BAND_PCT:
            out.append(f"This month's spending is {abs(change):.1f}% lower than last month")
        else:
            out.append("Your monthly spending is relatively stable compared to last month")

    # Saturday=5, Sunday=6
    weekend = sum(r.amount for r in rows if r.date.weekday() >= 5)
    weekday = sum(r.amount for r in rows) - weekend
    if weekend > weekday * WEEKEND_RATIO:
        out.append("You tend to spend more on weekends")

    return out


def recommendations(
    rows: list[TransactionRecord],
    top: list[CategoryTotal],
    trend: MonthlyDirection,
    current: float,
    previous: float,
) -> list[str]:
    out: list[str] = []

    if trend == "increasing":
        out.append("Consider reviewing your spending habits as expenses are trending upward")
    elif trend == "decreasing":
        out.append("Great job! Your spending has decreased compared to last month")

    if top and top[0].percentage > DOMINANT_CATEGORY_PCT:
        out.append(
            f"Consider diversifying your spending - {top[0].category} "
            "represents a large portion of your expenses"
        )

    if len(rows) < FEW_RECORDS:
        out.append("Track more expenses to get better insights and recommendations")

    if current > 0 and previous > 0 and pct_change(current, previous) > SHARP_INCREASE_PCT:
        out.append(
            "Your spending has increased significantly this month - consider reviewing your budget"
        )

    return out


def analyze_spending(
    records: Iterable[TransactionRecord | Mapping[str, Any]],
    as_of: dt.date,
    *,
    top_n: int = TOP_CATEGORIES_LIMIT,
) -> SpendingInsights:
    rows = ensure_records(records)
    if not rows:
        return SpendingInsights(
            as_of=as_of,
            total_expenses=0.0,
            current_month_total=0.0,
            previous_month_total=0.0,
            monthly_trend="stable",
            average_daily_spending=0.0,
            current_month_daily_average=0.0,
            recommendations=[EMPTY_RECOMMENDATION],
        )

    total = sum(r.amount for r in rows)
    current_rows = _in_month(rows, as_of.year, as_of.month)
    current = sum(r.amount for r in current_rows)
    previous = sum(r.amount for r in _in_month(rows, *previous_month(as_of.year, as_of.month)))

    top = _ranked_totals(rows, total, top_n)
    trend = classify_monthly_trend(current, previous)
    active_days = len({r.date for r in rows})

    insights = SpendingInsights(
        as_of=as_of,
        total_expenses=total,
        current_month_total=current,
        previous_month_total=previous,
        monthly_trend=trend,
        average_daily_spending=safe_div(total, active_days),
        # days elapsed in the current month, as_of included
        current_month_daily_average=safe_div(current, as_of.day),
        top_categories=top,
        current_month_top_categories=_ranked_totals(current_rows, current, top_n),
        spending_patterns=spending_patterns(rows, top, current, previous),
        recommendations=recommendations(rows, top, trend, current, previous),
    )
    logger.debug(
        "analyze_spending: as_of=%s current=%.2f previous=%.2f trend=%s",
        as_of,
        current,
        previous,
        trend,
    )
    return insights
