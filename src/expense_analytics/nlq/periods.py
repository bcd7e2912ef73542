from __future__ import annotations

import re
from typing import Callable

from expense_analytics.analytics.months import month_label
from expense_analytics.nlq.types import ComparisonParse, MonthYearParse

_FULL_MONTHS = {
    "january": 1,
    "february": 2,
    "march": 3,
    "april": 4,
    "may": 5,
    "june": 6,
    "july": 7,
    "august": 8,
    "september": 9,
    "october": 10,
    "november": 11,
    "december": 12,
}

_ABBR_MONTHS = {
    "jan": 1,
    "feb": 2,
    "mar": 3,
    "apr": 4,
    "may": 5,
    "jun": 6,
    "jul": 7,
    "aug": 8,
    "sep": 9,
    "sept": 9,
    "oct": 10,
    "nov": 11,
    "dec": 12,
}


def _alternation(names) -> str:
    # longest first so "sept" is tried before "sep"
    return "|".join(re.escape(n) for n in sorted(names, key=len, reverse=True))


def _names_for(month: int) -> list[str]:
    return [n for n, m in {**_FULL_MONTHS, **_ABBR_MONTHS}.items() if m == month]


_YEAR_RE = re.compile(r"\b(20\d{2})\b")
_NUMERIC_RE = re.compile(r"\b(0?[1-9]|1[0-2])\b")

# One pattern per month, January first; a hit on an earlier month wins
# regardless of where it sits in the text.
_NAMED_CHAIN: list[tuple[re.Pattern, int]] = [
    (re.compile(rf"\b({_alternation(_names_for(month))})\b"), month) for month in range(1, 13)
]

COMPARISON_KEYWORDS = ("compare", "comparison", "vs", "versus", "between", "and")
_COMPARISON_RE = re.compile(rf"\b({_alternation(COMPARISON_KEYWORDS)})\b")

MonthExtractor = Callable[[re.Match], "int | None"]

# Priority order; the first pattern that matches decides the month.
_MONTH_CHAIN: list[tuple[re.Pattern, MonthExtractor]] = [
    *((pattern, lambda m, month=month: month) for pattern, month in _NAMED_CHAIN),
    (_NUMERIC_RE, lambda m: int(m.group(1))),
]

NO_YEAR_MESSAGE = "Could not find a valid year (2000-2099) in your request."
NO_YEARS_MESSAGE = "Could not find valid years (2000-2099) in your request."
NO_KEYWORD_MESSAGE = (
    "Could not identify this as a comparison query. "
    "Please use words like 'compare', 'vs', or 'between'."
)


def _prepare(text: str) -> str:
    return (text or "").strip().casefold()


def find_years(text: str) -> list[int]:
    return [int(m.group(1)) for m in _YEAR_RE.finditer(_prepare(text))]


def find_month(text: str) -> int | None:
    s = _prepare(text)
    for pattern, extract in _MONTH_CHAIN:
        m = pattern.search(s)
        if m is None:
            continue
        month = extract(m)
        if month is not None and 1 <= month <= 12:
            return month
    return None


def find_named_months(text: str) -> list[int]:
    """Months mentioned by name or abbreviation, in calendar order."""
    s = _prepare(text)
    return [month for pattern, month in _NAMED_CHAIN if pattern.search(s)]


def has_comparison_keyword(text: str) -> bool:
    return _COMPARISON_RE.search(_prepare(text)) is not None


def parse_month_year(text: str) -> MonthYearParse:
    years = find_years(text)
    if not years:
        return MonthYearParse(success=False, message=NO_YEAR_MESSAGE, missing="year")

    year = years[0]
    month = find_month(text)
    if month is None:
        return MonthYearParse(
            success=False,
            message=(
                f"Found year {year} but could not identify the month. "
                "Please specify the month name or number (1-12)."
            ),
            year=year,
            missing="month",
        )

    return MonthYearParse(
        success=True,
        message=f"Parsed: {month_label(month, year)}",
        month=month,
        year=year,
    )


def parse_comparison_query(text: str) -> ComparisonParse:
    if not has_comparison_keyword(text):
        return ComparisonParse(success=False, message=NO_KEYWORD_MESSAGE, missing="keyword")

    years = find_years(text)
    if not years:
        return ComparisonParse(success=False, message=NO_YEARS_MESSAGE, missing="year")

    year1 = years[0]
    year2 = years[1] if len(years) > 1 else year1

    months = find_named_months(text)
    if len(months) < 2:
        return ComparisonParse(
            success=False,
            message=(
                f"Found {len(months)} month(s) but need 2 months for comparison. "
                "Please specify both months clearly."
            ),
            missing="months",
            months_found=len(months),
        )

    month1, month2 = months[0], months[1]
    return ComparisonParse(
        success=True,
        message=(
            f"Parsed comparison: {month_label(month1, year1)} vs {month_label(month2, year2)}"
        ),
        month1=month1,
        year1=year1,
        month2=month2,
        year2=year2,
        months_found=len(months),
    )
