from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, field
from typing import Any, Literal

from expense_analytics.analytics.models import TransactionRecord

IntentName = Literal[
    "compare_months",
    "category_all_months",
    "rolling_trend",
    "month_total",
    "month_analysis",
    "category_month_total",
    "category_month_analysis",
]


@dataclass(frozen=True)
class MonthYearParse:
    success: bool
    message: str
    month: int | None = None
    year: int | None = None
    missing: Literal["year", "month"] | None = None


@dataclass(frozen=True)
class ComparisonParse:
    success: bool
    message: str
    month1: int | None = None
    year1: int | None = None
    month2: int | None = None
    year2: int | None = None
    missing: Literal["keyword", "year", "months"] | None = None
    months_found: int = 0


@dataclass(frozen=True)
class NLQRequest:
    text: str
    records: list[TransactionRecord] = field(default_factory=list)
    as_of: dt.date | None = None


@dataclass(frozen=True)
class NLQIntent:
    name: IntentName
    slots: dict[str, Any]


@dataclass(frozen=True)
class NLQClarification:
    kind: Literal["period", "comparison", "category"]
    prompt: str
    missing: str | None = None


@dataclass(frozen=True)
class NLQResult:
    text: str
    meta: dict[str, Any] | None = None


@dataclass(frozen=True)
class NLQResponse:
    result: NLQResult | None = None
    clarification: NLQClarification | None = None
