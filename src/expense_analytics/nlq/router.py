from __future__ import annotations

import logging
import re
from typing import Any, Iterable

from expense_analytics.nlq.categories import detect_category
from expense_analytics.nlq.periods import find_years, parse_comparison_query, parse_month_year
from expense_analytics.nlq.types import NLQClarification, NLQIntent

logger = logging.getLogger(__name__)

# without "and": a bare "and" never switches to comparison
_COMPARE_RE = re.compile(r"\b(compare|comparison|vs|versus|between)\b", re.IGNORECASE)
_ALL_MONTHS_RE = re.compile(
    r"\b(overall|across\s+all\s+months|all\s+months|entire\s+period|all[-\s]time|lifetime)\b",
    re.IGNORECASE,
)
_TREND_RE = re.compile(r"\b(trends?|forecast|projection|next\s+month)\b", re.IGNORECASE)
_CALC_RE = re.compile(r"\b(how\s+much|total|spent|calculate)\b", re.IGNORECASE)


def parse_query(text: str, categories: Iterable[str] = ()) -> dict[str, Any]:
    """
    Decide what is being asked. Returns a flat dict:

      intent: IntentName | "clarify" | "unsupported"
      + the slots that intent needs (month/year/category/...)
      + for "clarify": kind, prompt, missing
    """
    t = (text or "").strip()
    if not t:
        return {"intent": "unsupported"}

    vocabulary = list(categories)

    if _COMPARE_RE.search(t):
        cmp = parse_comparison_query(t)
        if not cmp.success:
            return {
                "intent": "clarify",
                "kind": "comparison",
                "prompt": cmp.message,
                "missing": cmp.missing,
            }
        return {
            "intent": "compare_months",
            "month1": cmp.month1,
            "year1": cmp.year1,
            "month2": cmp.month2,
            "year2": cmp.year2,
        }

    if _ALL_MONTHS_RE.search(t):
        category = detect_category(t, vocabulary)
        if category is not None:
            return {"intent": "category_all_months", "category": category}

    if _TREND_RE.search(t):
        return {"intent": "rolling_trend"}

    if find_years(t):
        parsed = parse_month_year(t)
        if not parsed.success:
            return {
                "intent": "clarify",
                "kind": "period",
                "prompt": parsed.message,
                "missing": parsed.missing,
            }

        category = detect_category(t, vocabulary)
        wants_total = _CALC_RE.search(t) is not None
        if category is not None:
            intent = "category_month_total" if wants_total else "category_month_analysis"
        else:
            intent = "month_total" if wants_total else "month_analysis"

        return {
            "intent": intent,
            "month": parsed.month,
            "year": parsed.year,
            "category": category,
        }

    return {"intent": "unsupported"}


def route(text: str, categories: Iterable[str] = ()) -> NLQIntent | NLQClarification | None:
    parsed = parse_query(text, categories)
    intent = parsed.get("intent")
    logger.debug("route: %r -> %s", text, intent)

    if intent in (None, "unsupported"):
        return None

    if intent == "clarify":
        return NLQClarification(
            kind=parsed["kind"],
            prompt=parsed["prompt"],
            missing=parsed.get("missing"),
        )

    slots = {k: v for k, v in parsed.items() if k != "intent"}
    slots["text"] = text
    return NLQIntent(name=intent, slots=slots)
