from __future__ import annotations

import datetime as dt
import logging
from typing import Any, Iterable, Mapping

from expense_analytics.analytics.category import (
    aggregate_category_all_months,
    aggregate_category_in_month,
)
from expense_analytics.analytics.compare import compare_months
from expense_analytics.analytics.insights import SpendingInsights, analyze_spending
from expense_analytics.analytics.models import TransactionRecord, ensure_records
from expense_analytics.analytics.monthly import aggregate_month
from expense_analytics.analytics.months import month_label
from expense_analytics.analytics.trends import rolling_trend
from expense_analytics.config import Settings, load_settings
from expense_analytics.nlq.types import NLQIntent, NLQResult
from expense_analytics.render import narrative
from expense_analytics.render.prompts import compose_prompt, instruction_for
from expense_analytics.render.templates import join_blocks

logger = logging.getLogger(__name__)


def _result(
    intent: NLQIntent,
    blocks: list[str],
    *,
    status: str,
    result: Any,
    instruction: str | None = None,
    insights: SpendingInsights | None = None,
) -> NLQResult:
    text = join_blocks(blocks)
    prompt = None
    if instruction is not None:
        prompt = compose_prompt(blocks, str(intent.slots.get("text") or ""), instruction)
    return NLQResult(
        text=text,
        meta={
            "intent": intent.name,
            "status": status,
            "result": result,
            "instruction": instruction,
            "prompt": prompt,
            "insights": insights,
        },
    )


def execute_intent(
    records: Iterable[TransactionRecord | Mapping[str, Any]],
    intent: NLQIntent,
    settings: Settings | None = None,
    as_of: dt.date | None = None,
) -> NLQResult:
    cfg = settings or load_settings()
    today = as_of or dt.date.today()
    rows = ensure_records(records)
    slots = intent.slots
    currency = cfg.currency_symbol
    month_opts = {
        "top_n": cfg.top_expenses_limit,
        "min_year": cfg.min_year,
        "max_year": cfg.max_year,
    }

    logger.debug("execute_intent: %s slots=%s rows=%d", intent.name, slots, len(rows))

    def trend_block() -> str:
        return narrative.format_trend(rolling_trend(rows, cfg.trend_window), currency=currency)

    def with_insights(blocks: list[str]) -> SpendingInsights:
        ins = analyze_spending(rows, today)
        blocks.append(narrative.format_insights(ins, currency=currency))
        return ins

    if intent.name == "compare_months":
        cmp = compare_months(
            rows, slots["month1"], slots["year1"], slots["month2"], slots["year2"], **month_opts
        )
        blocks = [
            narrative.format_comparison(
                cmp, currency=currency, category_limit=cfg.comparison_category_limit
            )
        ]
        instruction = None
        insights = None
        if cmp.found:
            blocks.append(trend_block())
            insights = with_insights(blocks)
            instruction = instruction_for(
                intent.name, period=f"{cmp.month1.label} and {cmp.month2.label}"
            )
        return _result(
            intent, blocks, status=cmp.status, result=cmp, instruction=instruction, insights=insights
        )

    if intent.name == "category_all_months":
        hist = aggregate_category_all_months(rows, slots["category"])
        blocks = [
            narrative.format_category_history(
                hist, currency=currency, month_limit=cfg.monthly_breakdown_limit
            )
        ]
        instruction = None
        insights = None
        if hist.found:
            blocks.append(trend_block())
            insights = with_insights(blocks)
            instruction = instruction_for(intent.name, category=hist.category)
        return _result(
            intent,
            blocks,
            status=hist.status,
            result=hist,
            instruction=instruction,
            insights=insights,
        )

    if intent.name == "rolling_trend":
        trend = rolling_trend(rows, cfg.trend_window)
        blocks = [narrative.format_trend(trend, currency=currency)]
        return _result(
            intent, blocks, status="ok", result=trend, instruction=instruction_for(intent.name)
        )

    month = int(slots["month"])
    year = int(slots["year"])
    period = month_label(month, year)

    if intent.name == "month_total":
        res = aggregate_month(rows, month, year, **month_opts)
        return _result(
            intent, [narrative.format_month_total(res, currency=currency)], status=res.status, result=res
        )

    if intent.name == "category_month_total":
        cres = aggregate_category_in_month(rows, month, year, slots["category"], **month_opts)
        return _result(
            intent,
            [narrative.format_category_month_total(cres, currency=currency)],
            status=cres.status,
            result=cres,
        )

    if intent.name == "month_analysis":
        res = aggregate_month(rows, month, year, **month_opts)
        if not res.found:
            blocks = [narrative.format_parse_failure(res.message, heading=f"{period} Analysis")]
            return _result(intent, blocks, status=res.status, result=res)
        blocks = [
            narrative.format_month(res, currency=currency, daily_limit=cfg.daily_breakdown_limit),
            trend_block(),
        ]
        return _result(
            intent,
            blocks,
            status=res.status,
            result=res,
            instruction=instruction_for(intent.name, period=period),
        )

    if intent.name == "category_month_analysis":
        res = aggregate_month(rows, month, year, **month_opts)
        if not res.found:
            blocks = [narrative.format_parse_failure(res.message, heading=f"{period} Analysis")]
            return _result(intent, blocks, status=res.status, result=res)

        cres = aggregate_category_in_month(rows, month, year, slots["category"], **month_opts)
        category_block = narrative.format_category_month(
            res, cres, currency=currency, daily_limit=cfg.daily_breakdown_limit
        )
        if not cres.found:
            return _result(intent, [category_block], status=cres.status, result=cres)

        blocks = [
            narrative.format_month(res, currency=currency, daily_limit=cfg.daily_breakdown_limit),
            category_block,
            trend_block(),
        ]
        return _result(
            intent,
            blocks,
            status=cres.status,
            result=cres,
            instruction=instruction_for(intent.name, category=cres.category, period=period),
        )

    raise ValueError(f"Unsupported intent: {intent.name}")
