"""
Fixed-layout text blocks for the text-generation hand-off.

Nothing here computes anything new: every number comes from the structured
results. Truncation limits are explicit keyword arguments.
"""

from __future__ import annotations

from expense_analytics.analytics.category import CategoryHistoryResult, CategoryMonthResult
from expense_analytics.analytics.compare import ComparisonResult
from expense_analytics.analytics.insights import CategoryTotal, SpendingInsights
from expense_analytics.analytics.models import DailyTotal, ExpenseItem
from expense_analytics.analytics.months import month_label, previous_month
from expense_analytics.analytics.monthly import MonthlyResult
from expense_analytics.analytics.trends import RollingTrend

from .templates import (
    DEFAULT_CURRENCY,
    bullets,
    capitalize,
    fmt_money,
    fmt_pct,
    fmt_signed_int,
    more_trailer,
    report_layout,
    section,
    sub_bullets,
    title,
)

DAILY_BREAKDOWN_LIMIT = 10
MONTHLY_BREAKDOWN_LIMIT = 12
COMPARISON_CATEGORY_LIMIT = 8
TOP_MONTHS_LIMIT = 3

UP = "📈"
DOWN = "📉"
FLAT = "➡️"


def _trend_icon(v: float) -> str:
    if v > 0:
        return UP
    if v < 0:
        return DOWN
    return FLAT


def _daily_lines(days: list[DailyTotal], limit: int, currency: str) -> str:
    shown = days[:limit]
    lines = sub_bullets(
        f"{d.date}: {fmt_money(d.amount, currency)} ({d.transaction_count} transactions)"
        for d in shown
    )
    trailer = more_trailer(len(days), len(shown), "days")
    return "\n".join(x for x in (lines, trailer) if x)


def _expense_line(e: ExpenseItem, currency: str, *, with_category: bool = True) -> str:
    desc = f" ({e.description})" if e.description else ""
    if with_category:
        return f"{e.date}: {e.category} - {fmt_money(e.amount, currency)}{desc}"
    return f"{e.date} - {fmt_money(e.amount, currency)}{desc}"


def format_parse_failure(message: str, heading: str = "Unable to parse your request") -> str:
    return f"{title(heading)}\n\n{message}"


def format_month(
    result: MonthlyResult,
    *,
    currency: str = DEFAULT_CURRENCY,
    daily_limit: int = DAILY_BREAKDOWN_LIMIT,
) -> str:
    if not result.found or result.data is None:
        return result.message

    data = result.data
    summary = section(
        "Summary",
        [
            bullets(
                [
                    f"Total Amount: {fmt_money(data.total_amount, currency)}",
                    f"Total Transactions: {data.transaction_count}",
                    f"Average per Transaction: {fmt_money(data.average_transaction, currency)}",
                ]
            )
        ],
    )
    categories = section(
        "Category Breakdown",
        [
            sub_bullets(
                f"{c.category}: {fmt_money(c.amount, currency)} "
                f"({fmt_pct(c.percentage)}, {c.transaction_count} transactions)"
                for c in data.categories
            )
        ],
    )
    top = section(
        f"Top {len(data.top_expenses)} Largest Expenses",
        [sub_bullets(_expense_line(e, currency) for e in data.top_expenses)],
    )
    daily = None
    if data.daily_breakdown:
        daily = section("Daily Breakdown", [_daily_lines(data.daily_breakdown, daily_limit, currency)])

    peak = data.peak_day
    top_cat = data.top_category
    notes = section(
        "Analysis Notes",
        [
            bullets(
                [
                    f"This represents {len(data.categories)} different expense categories",
                    f"Most active spending day: {peak.date if peak else 'N/A'}",
                    (
                        f"Highest spending category: {top_cat.category} "
                        f"({fmt_pct(top_cat.percentage)} of total)"
                        if top_cat
                        else "Highest spending category: N/A"
                    ),
                ]
            )
        ],
    )

    return report_layout(
        f"{data.month_name} {data.year} Expense Analysis:", summary, categories, top, daily, notes
    )


def format_month_total(result: MonthlyResult, *, currency: str = DEFAULT_CURRENCY) -> str:
    if not result.found or result.data is None:
        return f"{title(result.label)}\n\n{result.message}"

    data = result.data
    return (
        f"{title(result.label)}\n\n"
        f"Total expenses for {result.label}: {fmt_money(data.total_amount, currency)} "
        f"({data.transaction_count} transactions)"
    )


def format_category_month(
    month_result: MonthlyResult,
    category_result: CategoryMonthResult,
    *,
    currency: str = DEFAULT_CURRENCY,
    daily_limit: int = DAILY_BREAKDOWN_LIMIT,
) -> str:
    if not month_result.found or month_result.data is None:
        return month_result.message

    if not category_result.found or category_result.data is None:
        heading = f"{category_result.category} in {category_result.label}:"
        return f"{title(heading)}\n\n{category_result.message}"

    month = month_result.data
    cat = category_result.data
    top_cat = month.top_category

    summary = section(
        "Category Summary",
        [
            bullets(
                [
                    f"Total Spent: {fmt_money(cat.total_amount, currency)}",
                    f"Share of Monthly Spend: {fmt_pct(cat.percentage_of_month)}",
                    f"Transactions: {cat.transaction_count}",
                    f"Average Transaction: {fmt_money(cat.average_transaction, currency)}",
                ]
            )
        ],
    )
    context = section(
        "Month Context",
        [
            bullets(
                [
                    f"Monthly Total: {fmt_money(month.total_amount, currency)}",
                    f"Overall Transactions: {month.transaction_count}",
                    (
                        f"Top Category Overall: {top_cat.category} ({fmt_pct(top_cat.percentage)})"
                        if top_cat
                        else "Top Category Overall: N/A"
                    ),
                ]
            )
        ],
    )
    daily = None
    if cat.daily_breakdown:
        daily = section(
            f"{cat.category} Daily Activity",
            [_daily_lines(cat.daily_breakdown, daily_limit, currency)],
        )
    top = None
    if cat.top_expenses:
        top = section(
            f"Highest {cat.category} Expenses",
            [sub_bullets(_expense_line(e, currency, with_category=False) for e in cat.top_expenses)],
        )

    return report_layout(
        f"{month.month_name} {month.year} - {cat.category} Focus:", summary, context, daily, top
    )


def format_category_month_total(
    result: CategoryMonthResult, *, currency: str = DEFAULT_CURRENCY
) -> str:
    heading = f"{result.category} Spend - {result.label}"
    if not result.found or result.data is None:
        return f"{title(heading)}\n\n{result.message}"

    data = result.data
    lines = bullets(
        [
            f"Total: {fmt_money(data.total_amount, currency)}",
            f"Transactions: {data.transaction_count}",
            f"Share of Month: {fmt_pct(data.percentage_of_month)}",
            f"Average Transaction: {fmt_money(data.average_transaction, currency)}",
        ]
    )
    return f"{title(heading)}\n\n{lines}"


def format_category_history(
    result: CategoryHistoryResult,
    *,
    currency: str = DEFAULT_CURRENCY,
    month_limit: int = MONTHLY_BREAKDOWN_LIMIT,
    top_months_limit: int = TOP_MONTHS_LIMIT,
) -> str:
    heading = f"{result.category} - All Months Overview"
    if not result.found or result.data is None:
        return f"{title(heading)}\n\n{result.message}"

    data = result.data
    summary = section(
        "Category Summary",
        [
            bullets(
                [
                    f"Total Spent: {fmt_money(data.total_amount, currency)}",
                    f"Transactions: {data.transaction_count}",
                    f"Share of All Expenses: {fmt_pct(data.overall_share)}",
                    f"Average Transaction: {fmt_money(data.average_transaction, currency)}",
                    f"Months with Activity: {data.months_covered}",
                ]
            )
        ],
    )

    top_lines = sub_bullets(
        f"{m.month_name} {m.year}: {fmt_money(m.total_amount, currency)} "
        f"({fmt_pct(m.percentage_of_category)})"
        for m in data.top_months(top_months_limit)
    )
    top = section(
        "Top Months by Spend",
        [top_lines or "  • Not enough data to highlight top months"],
    )

    shown = data.monthly_breakdown[:month_limit]
    breakdown_lines = sub_bullets(
        f"{m.month_name} {m.year}: {fmt_money(m.total_amount, currency)} "
        f"({m.transaction_count} transactions, {fmt_pct(m.percentage_of_category)} of category total)"
        for m in shown
    )
    trailer = more_trailer(len(data.monthly_breakdown), len(shown), "month(s)")
    breakdown = section("Monthly Breakdown", [breakdown_lines, trailer])

    return report_layout(heading, summary, top, breakdown)


def format_comparison(
    result: ComparisonResult,
    *,
    currency: str = DEFAULT_CURRENCY,
    category_limit: int = COMPARISON_CATEGORY_LIMIT,
) -> str:
    if not result.found or result.month1.data is None or result.month2.data is None:
        return format_parse_failure(result.message, heading="Comparison Failed")

    m1 = result.month1
    m2 = result.month2
    d1 = m1.data
    d2 = m2.data
    pct = result.percentage_change
    direction = "increased" if pct > 0 else "decreased"

    overall = section(
        "Overall Summary",
        [
            f"{_trend_icon(pct)} **Total Spending**: "
            f"{fmt_money(d1.total_amount, currency)} → {fmt_money(d2.total_amount, currency)}",
            bullets(
                [
                    f"**Change**: {fmt_money(result.total_difference, currency)} "
                    f"({direction} by {abs(pct):.1f}%)",
                    f"**Transactions**: {d1.transaction_count} → {d2.transaction_count} "
                    f"({fmt_signed_int(result.transaction_count_difference)})",
                    f"**Average per Transaction**: {fmt_money(d1.average_transaction, currency)} → "
                    f"{fmt_money(d2.average_transaction, currency)}",
                ]
            ),
        ],
    )

    def _month_block(label: str, data) -> str:
        top_cat = data.top_category
        return section(
            label,
            [
                bullets(
                    [
                        f"Total: {fmt_money(data.total_amount, currency)}",
                        f"Transactions: {data.transaction_count}",
                        (
                            f"Top Category: {top_cat.category} ({fmt_pct(top_cat.percentage)})"
                            if top_cat
                            else "Top Category: N/A"
                        ),
                    ]
                )
            ],
        )

    changes = [c for c in result.category_comparisons if c.month1_amount > 0 or c.month2_amount > 0]
    change_lines = []
    for c in changes[:category_limit]:
        if c.percentage_change > 0:
            verb = "increased"
        elif c.percentage_change < 0:
            verb = "decreased"
        else:
            verb = "unchanged"
        change_lines.append(
            f"  {_trend_icon(c.percentage_change)} **{c.category}**: "
            f"{fmt_money(c.month1_amount, currency)} → {fmt_money(c.month2_amount, currency)} "
            f"({verb} by {abs(c.percentage_change):.1f}%)"
        )
    category_changes = section("Category Changes", change_lines)

    if pct > 0:
        spend_note = "Spending increased"
    elif pct < 0:
        spend_note = "Spending decreased"
    else:
        spend_note = "Spending remained stable"

    if result.transaction_count_difference > 0:
        count_note = "More transactions"
    elif result.transaction_count_difference < 0:
        count_note = "Fewer transactions"
    else:
        count_note = "Same number of transactions"

    if result.average_transaction_difference > 0:
        avg_note = "Higher average transaction value"
    elif result.average_transaction_difference < 0:
        avg_note = "Lower average transaction value"
    else:
        avg_note = "Similar average transaction value"

    insights = section(
        "Key Insights",
        [
            bullets(
                [
                    f"{spend_note} between the two months",
                    f"{count_note} in {m2.month_name}",
                    f"{avg_note} in {m2.month_name}",
                ]
            )
        ],
    )

    return report_layout(
        f"{m1.label} vs {m2.label} Comparison",
        overall,
        _month_block(m1.label, d1),
        _month_block(m2.label, d2),
        category_changes,
        insights,
    )


def format_trend(trend: RollingTrend, *, currency: str = DEFAULT_CURRENCY) -> str:
    heading = f"Rolling {trend.window_size}-Month Trend"
    if not trend.trend:
        return section(heading, [bullets(["Not enough historical data to compute a trend yet."])])

    lines = [
        f"{p.month_name} {p.year}: {fmt_money(p.total_amount, currency)} "
        f"({p.transaction_count} transactions)"
        for p in trend.trend
    ]
    lines.append(f"Average Change: {fmt_money(trend.average_change, currency, decimals=0)}")
    lines.append(f"Direction: {capitalize(trend.direction)}")
    block = section(heading, [bullets(lines)])

    fc = trend.forecast
    if fc is None:
        return block

    forecast = section(
        "Forecast",
        [
            bullets(
                [
                    f"Next Month ({fc.month_name} {fc.year}) Projection: "
                    f"{fmt_money(fc.projected_total, currency, decimals=0)}",
                    f"Confidence: {capitalize(fc.confidence)}",
                    f"Notes: {fc.rationale}",
                ]
            )
        ],
    )
    return f"{block}\n\n{forecast}"


def _category_totals(items: list[CategoryTotal], currency: str) -> str:
    return sub_bullets(
        f"{c.category}: {fmt_money(c.amount, currency)} ({fmt_pct(c.percentage)})" for c in items
    )


def format_recommendations(insights: SpendingInsights) -> str:
    if not insights.recommendations:
        return section("Recommendations", ["• No personalized recommendations available yet."])
    return section("Recommendations", [bullets(insights.recommendations)])


def format_insights(insights: SpendingInsights, *, currency: str = DEFAULT_CURRENCY) -> str:
    as_of = insights.as_of
    current_label = month_label(as_of.month, as_of.year)
    prev_year, prev_month = previous_month(as_of.year, as_of.month)
    previous_label = month_label(prev_month, prev_year)

    monthly = section(
        "Monthly Expenses",
        [
            bullets(
                [
                    f"Current Month ({current_label}): "
                    f"{fmt_money(insights.current_month_total, currency)}",
                    f"Previous Month ({previous_label}): "
                    f"{fmt_money(insights.previous_month_total, currency)}",
                    f"Monthly Trend: {capitalize(insights.monthly_trend)}",
                    f"Current Month Daily Average: "
                    f"{fmt_money(insights.current_month_daily_average, currency)}",
                ]
            )
        ],
    )
    overall = section(
        "Overall Statistics",
        [
            bullets(
                [
                    f"Total Expenses (All Time): {fmt_money(insights.total_expenses, currency)}",
                    f"Average Daily Spending: {fmt_money(insights.average_daily_spending, currency)}",
                ]
            )
        ],
    )
    current_top = None
    if insights.current_month_top_categories:
        current_top = section(
            "Current Month Top Categories",
            [_category_totals(insights.current_month_top_categories, currency)],
        )
    all_time_top = None
    if insights.top_categories:
        all_time_top = section(
            "All-Time Top Categories", [_category_totals(insights.top_categories, currency)]
        )
    patterns = None
    if insights.spending_patterns:
        patterns = section("Spending Patterns", [bullets(insights.spending_patterns)])

    return report_layout(
        f"Spending Insights (as of {as_of.isoformat()})",
        monthly,
        overall,
        current_top,
        all_time_top,
        patterns,
        format_recommendations(insights),
    )
