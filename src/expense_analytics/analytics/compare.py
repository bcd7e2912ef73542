from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping

from .models import ResultStatus, TransactionRecord, ensure_records
from .monthly import (
    MAX_YEAR,
    MIN_YEAR,
    TOP_EXPENSES_LIMIT,
    MonthlyAggregate,
    MonthlyResult,
    aggregate_month,
)
from .months import month_label, month_name
from .stats import pct_change

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MonthRef:
    month: int
    month_name: str
    year: int
    data: MonthlyAggregate | None = None

    @property
    def label(self) -> str:
        return month_label(self.month, self.year)


@dataclass(frozen=True)
class CategoryDelta:
    category: str
    month1_amount: float
    month2_amount: float
    difference: float
    percentage_change: float


@dataclass(frozen=True)
class ComparisonResult:
    month1: MonthRef
    month2: MonthRef
    status: ResultStatus
    message: str
    total_difference: float = 0.0
    percentage_change: float = 0.0
    category_comparisons: list[CategoryDelta] = field(default_factory=list)
    transaction_count_difference: int = 0
    average_transaction_difference: float = 0.0
    missing: list[str] = field(default_factory=list)

    @property
    def found(self) -> bool:
        return self.status == "ok"


def compare_categories(first: MonthlyAggregate, second: MonthlyAggregate) -> list[CategoryDelta]:
    amounts1 = {c.category: c.amount for c in first.categories}
    amounts2 = {c.category: c.amount for c in second.categories}

    labels = list(amounts1.keys())
    labels.extend(k for k in amounts2.keys() if k not in amounts1)

    out: list[CategoryDelta] = []
    for cat in labels:
        a1 = float(amounts1.get(cat, 0.0))
        a2 = float(amounts2.get(cat, 0.0))
        out.append(
            CategoryDelta(
                category=cat,
                month1_amount=a1,
                month2_amount=a2,
                difference=a2 - a1,
                percentage_change=pct_change(a2, a1),
            )
        )
    return sorted(out, key=lambda x: abs(x.difference), reverse=True)


def _ref(result: MonthlyResult) -> MonthRef:
    return MonthRef(
        month=result.requested_month,
        month_name=month_name(result.requested_month),
        year=result.requested_year,
        data=result.data,
    )


def _failed(first: MonthlyResult, second: MonthlyResult) -> ComparisonResult:
    failing = [r for r in (first, second) if not r.found]
    invalid = [r for r in failing if r.status == "invalid_parameter"]

    if invalid:
        status: ResultStatus = "invalid_parameter"
        message = f"Cannot compare: {' '.join(r.message for r in invalid)}"
    else:
        status = "not_found"
        message = f"Cannot compare: No data found for {' and '.join(r.label for r in failing)}."

    return ComparisonResult(
        month1=_ref(first),
        month2=_ref(second),
        status=status,
        message=message,
        missing=[r.label for r in failing],
    )


def compare_months(
    records: Iterable[TransactionRecord | Mapping[str, Any]],
    month1: int,
    year1: int,
    month2: int,
    year2: int,
    *,
    top_n: int = TOP_EXPENSES_LIMIT,
    min_year: int = MIN_YEAR,
    max_year: int = MAX_YEAR,
) -> ComparisonResult:
    rows = ensure_records(records)
    opts = {"top_n": top_n, "min_year": min_year, "max_year": max_year}
    first = aggregate_month(rows, month1, year1, **opts)
    second = aggregate_month(rows, month2, year2, **opts)

    if not first.found or not second.found or first.data is None or second.data is None:
        result = _failed(first, second)
        logger.debug("compare_months: %s", result.message)
        return result

    d1 = first.data
    d2 = second.data
    total_difference = d2.total_amount - d1.total_amount

    return ComparisonResult(
        month1=_ref(first),
        month2=_ref(second),
        status="ok",
        message=f"Successfully compared {first.label} and {second.label}.",
        total_difference=total_difference,
        percentage_change=pct_change(d2.total_amount, d1.total_amount),
        category_comparisons=compare_categories(d1, d2),
        transaction_count_difference=d2.transaction_count - d1.transaction_count,
        average_transaction_difference=d2.average_transaction - d1.average_transaction,
    )
