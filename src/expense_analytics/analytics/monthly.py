from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping

from .models import (
    CategoryShare,
    DailyTotal,
    ExpenseItem,
    ResultStatus,
    TransactionRecord,
    ensure_records,
    expense_item,
)
from .months import month_bounds, month_label, month_name
from .stats import percent_of, safe_div

logger = logging.getLogger(__name__)

TOP_EXPENSES_LIMIT = 5
MIN_YEAR = 2000
MAX_YEAR = 2100


@dataclass(frozen=True)
class MonthlyAggregate:
    month: int
    month_name: str
    year: int
    total_amount: float
    transaction_count: int
    categories: list[CategoryShare] = field(default_factory=list)
    daily_breakdown: list[DailyTotal] = field(default_factory=list)
    top_expenses: list[ExpenseItem] = field(default_factory=list)

    @property
    def average_transaction(self) -> float:
        return safe_div(self.total_amount, self.transaction_count)

    @property
    def peak_day(self) -> DailyTotal | None:
        # earliest day wins a tie
        best: DailyTotal | None = None
        for d in self.daily_breakdown:
            if best is None or d.amount > best.amount:
                best = d
        return best

    @property
    def top_category(self) -> CategoryShare | None:
        return self.categories[0] if self.categories else None


@dataclass(frozen=True)
class MonthlyResult:
    requested_month: int
    requested_year: int
    status: ResultStatus
    message: str
    data: MonthlyAggregate | None = None

    @property
    def found(self) -> bool:
        return self.status == "ok"

    @property
    def label(self) -> str:
        return month_label(self.requested_month, self.requested_year)


@dataclass(frozen=True)
class MonthSummary:
    year: int
    month: int
    month_name: str
    transaction_count: int
    total_amount: float


def validate_month_year(
    month: int, year: int, min_year: int = MIN_YEAR, max_year: int = MAX_YEAR
) -> str | None:
    if month < 1 or month > 12:
        return f"Invalid month: {month}. Please provide a month between 1-12."
    if year < min_year or year > max_year:
        return f"Invalid year: {year}. Please provide a year between {min_year}-{max_year}."
    return None


def month_records(
    records: Iterable[TransactionRecord | Mapping[str, Any]], month: int, year: int
) -> list[TransactionRecord]:
    start, end = month_bounds(year, month)
    return [r for r in ensure_records(records) if start <= r.date <= end]


def group_by_category(rows: list[TransactionRecord], total: float) -> list[CategoryShare]:
    amounts: dict[str, float] = defaultdict(float)
    counts: dict[str, int] = defaultdict(int)
    for r in rows:
        amounts[r.category] += r.amount
        counts[r.category] += 1

    shares = [
        CategoryShare(
            category=cat,
            amount=amt,
            transaction_count=counts[cat],
            percentage=percent_of(amt, total),
        )
        for cat, amt in amounts.items()
    ]
    return sorted(shares, key=lambda x: x.amount, reverse=True)


def group_by_day(rows: list[TransactionRecord]) -> list[DailyTotal]:
    amounts: dict[str, float] = defaultdict(float)
    counts: dict[str, int] = defaultdict(int)
    for r in rows:
        amounts[r.day] += r.amount
        counts[r.day] += 1

    return [
        DailyTotal(date=day, amount=amounts[day], transaction_count=counts[day])
        for day in sorted(amounts.keys())
    ]


def top_expenses(rows: list[TransactionRecord], limit: int = TOP_EXPENSES_LIMIT) -> list[ExpenseItem]:
    # sorted() is stable: equal amounts keep snapshot order
    ranked = sorted(rows, key=lambda r: r.amount, reverse=True)
    return [expense_item(r) for r in ranked[:limit]]


def aggregate_month(
    records: Iterable[TransactionRecord | Mapping[str, Any]],
    month: int,
    year: int,
    *,
    top_n: int = TOP_EXPENSES_LIMIT,
    min_year: int = MIN_YEAR,
    max_year: int = MAX_YEAR,
) -> MonthlyResult:
    invalid = validate_month_year(month, year, min_year=min_year, max_year=max_year)
    if invalid is not None:
        return MonthlyResult(
            requested_month=month,
            requested_year=year,
            status="invalid_parameter",
            message=invalid,
        )

    rows = month_records(records, month, year)
    label = month_label(month, year)

    if not rows:
        logger.debug("aggregate_month: no rows for %s", label)
        return MonthlyResult(
            requested_month=month,
            requested_year=year,
            status="not_found",
            message=f"No expenses found for {label}.",
        )

    total = sum(r.amount for r in rows)

    data = MonthlyAggregate(
        month=month,
        month_name=month_name(month),
        year=year,
        total_amount=total,
        transaction_count=len(rows),
        categories=group_by_category(rows, total),
        daily_breakdown=group_by_day(rows),
        top_expenses=top_expenses(rows, top_n),
    )
    logger.debug("aggregate_month: %s rows=%d total=%.2f", label, len(rows), total)

    return MonthlyResult(
        requested_month=month,
        requested_year=year,
        status="ok",
        message=f"Successfully analyzed {len(rows)} expenses for {label}.",
        data=data,
    )


def available_months(
    records: Iterable[TransactionRecord | Mapping[str, Any]],
) -> list[MonthSummary]:
    """Every (year, month) with at least one record, newest first."""
    counts: dict[tuple[int, int], int] = defaultdict(int)
    totals: dict[tuple[int, int], float] = defaultdict(float)

    for r in ensure_records(records):
        key = (r.date.year, r.date.month)
        counts[key] += 1
        totals[key] += r.amount

    return [
        MonthSummary(
            year=y,
            month=m,
            month_name=month_name(m),
            transaction_count=counts[(y, m)],
            total_amount=totals[(y, m)],
        )
        for (y, m) in sorted(counts.keys(), reverse=True)
    ]
