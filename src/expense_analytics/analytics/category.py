from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping

from .models import (
    DailyTotal,
    ExpenseItem,
    ResultStatus,
    TransactionRecord,
    ensure_records,
    same_category,
)
from .monthly import (
    MAX_YEAR,
    MIN_YEAR,
    TOP_EXPENSES_LIMIT,
    aggregate_month,
    group_by_day,
    month_records,
    top_expenses,
)
from .months import month_label, month_name
from .stats import percent_of, safe_div

logger = logging.getLogger(__name__)

BLANK_CATEGORY_MESSAGE = "Please provide a valid category name to analyze."


@dataclass(frozen=True)
class CategoryMonthAggregate:
    category: str
    month: int
    month_name: str
    year: int
    total_amount: float
    percentage_of_month: float
    month_total: float
    transaction_count: int
    average_transaction: float
    daily_breakdown: list[DailyTotal] = field(default_factory=list)
    top_expenses: list[ExpenseItem] = field(default_factory=list)


@dataclass(frozen=True)
class CategoryMonthResult:
    requested_month: int
    requested_year: int
    category: str
    status: ResultStatus
    message: str
    data: CategoryMonthAggregate | None = None

    @property
    def found(self) -> bool:
        return self.status == "ok"

    @property
    def label(self) -> str:
        return month_label(self.requested_month, self.requested_year)


@dataclass(frozen=True)
class CategoryMonthShare:
    year: int
    month: int
    month_name: str
    total_amount: float
    transaction_count: int
    percentage_of_category: float


@dataclass(frozen=True)
class CategoryHistory:
    category: str
    total_amount: float
    transaction_count: int
    overall_share: float
    average_transaction: float
    months_covered: int
    monthly_breakdown: list[CategoryMonthShare] = field(default_factory=list)

    def top_months(self, limit: int = 3) -> list[CategoryMonthShare]:
        ranked = sorted(self.monthly_breakdown, key=lambda x: x.total_amount, reverse=True)
        return ranked[:limit]


@dataclass(frozen=True)
class CategoryHistoryResult:
    category: str
    status: ResultStatus
    message: str
    data: CategoryHistory | None = None

    @property
    def found(self) -> bool:
        return self.status == "ok"


def aggregate_category_in_month(
    records: Iterable[TransactionRecord | Mapping[str, Any]],
    month: int,
    year: int,
    category: str,
    *,
    top_n: int = TOP_EXPENSES_LIMIT,
    min_year: int = MIN_YEAR,
    max_year: int = MAX_YEAR,
) -> CategoryMonthResult:
    if not (category or "").strip():
        return CategoryMonthResult(
            requested_month=month,
            requested_year=year,
            category=category,
            status="invalid_parameter",
            message=BLANK_CATEGORY_MESSAGE,
        )

    rows = ensure_records(records)
    base = aggregate_month(rows, month, year, top_n=top_n, min_year=min_year, max_year=max_year)
    if not base.found or base.data is None:
        return CategoryMonthResult(
            requested_month=month,
            requested_year=year,
            category=category,
            status=base.status,
            message=base.message,
        )

    label = month_label(month, year)
    matched = [r for r in month_records(rows, month, year) if same_category(r.category, category)]
    if not matched:
        logger.debug("aggregate_category_in_month: %r absent in %s", category, label)
        return CategoryMonthResult(
            requested_month=month,
            requested_year=year,
            category=category,
            status="not_found",
            message=f"No expenses found for {category} in {label}.",
        )

    actual = next(
        (c.category for c in base.data.categories if same_category(c.category, category)),
        matched[0].category,
    )
    total = sum(r.amount for r in matched)

    data = CategoryMonthAggregate(
        category=actual,
        month=month,
        month_name=month_name(month),
        year=year,
        total_amount=total,
        percentage_of_month=percent_of(total, base.data.total_amount),
        month_total=base.data.total_amount,
        transaction_count=len(matched),
        average_transaction=safe_div(total, len(matched)),
        daily_breakdown=group_by_day(matched),
        top_expenses=top_expenses(matched, top_n),
    )

    return CategoryMonthResult(
        requested_month=month,
        requested_year=year,
        category=actual,
        status="ok",
        message=f"Analyzed {len(matched)} {actual} expenses for {label}.",
        data=data,
    )


def aggregate_category_all_months(
    records: Iterable[TransactionRecord | Mapping[str, Any]],
    category: str,
) -> CategoryHistoryResult:
    if not (category or "").strip():
        return CategoryHistoryResult(
            category=category,
            status="invalid_parameter",
            message=BLANK_CATEGORY_MESSAGE,
        )

    rows = ensure_records(records)
    matched = [r for r in rows if same_category(r.category, category)]
    if not matched:
        return CategoryHistoryResult(
            category=category,
            status="not_found",
            message=f"No expenses found for category {category}.",
        )

    actual = matched[0].category
    total = sum(r.amount for r in matched)
    overall_total = sum(r.amount for r in rows)

    by_month_amount: dict[tuple[int, int], float] = defaultdict(float)
    by_month_count: dict[tuple[int, int], int] = defaultdict(int)
    for r in matched:
        key = (r.date.year, r.date.month)
        by_month_amount[key] += r.amount
        by_month_count[key] += 1

    breakdown = [
        CategoryMonthShare(
            year=y,
            month=m,
            month_name=month_name(m),
            total_amount=by_month_amount[(y, m)],
            transaction_count=by_month_count[(y, m)],
            percentage_of_category=percent_of(by_month_amount[(y, m)], total),
        )
        for (y, m) in sorted(by_month_amount.keys(), reverse=True)
    ]

    data = CategoryHistory(
        category=actual,
        total_amount=total,
        transaction_count=len(matched),
        overall_share=percent_of(total, overall_total),
        average_transaction=safe_div(total, len(matched)),
        months_covered=len(breakdown),
        monthly_breakdown=breakdown,
    )
    logger.debug(
        "aggregate_category_all_months: %s rows=%d months=%d", actual, len(matched), len(breakdown)
    )

    return CategoryHistoryResult(
        category=actual,
        status="ok",
        message=f"Analyzed {len(matched)} {actual} transactions across {len(breakdown)} months.",
        data=data,
    )
