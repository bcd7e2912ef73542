from __future__ import annotations

from typing import Iterable

_INSTRUCTIONS: dict[str, str] = {
    "month_analysis": (
        "Please provide a detailed analysis of the expenses for {period}. Include:\n"
        "1. **Spending Overview**: Total spend, transaction count and average.\n"
        "2. **Category Breakdown**: Where the money went, with percentages.\n"
        "3. **Notable Expenses**: Comment on the largest transactions.\n"
        "4. **Daily Patterns**: Point out busy days.\n"
        "5. **Trends & Forecast**: Reference the rolling trend data when relevant."
    ),
    "category_month_analysis": (
        "Please provide a detailed analysis focusing on the {category} spending for {period}. Include:\n"
        "1. **Category Behaviour**: Describe how this category behaved within the month.\n"
        "2. **Month Context**: Link the category performance back to the full-month picture.\n"
        "3. **Trends & Forecast**: Reference the rolling trend data when relevant.\n"
        "4. **Next Steps**: Suggest what the user could monitor next month."
    ),
    "category_all_months": (
        "Please provide an overview of the {category} spending across all months. Include:\n"
        "1. **Long-Term Trends**: Highlight how this category evolved over the months.\n"
        "2. **Peak Months**: Explain the months with the highest spend.\n"
        "3. **Share of Spending**: Put the category in the context of all expenses."
    ),
    "compare_months": (
        "Please compare the expenses for {period}. Include:\n"
        "1. **Overall Change**: Total difference and percentage change.\n"
        "2. **Spending Trends**: Identify trends and patterns between the months.\n"
        "3. **Category Changes**: Explain the categories that moved the most.\n"
        "4. **Insights**: Summarize what changed in transaction count and size."
    ),
    "rolling_trend": (
        "Please explain the recent spending trend and the forecast for next month. "
        "Mention the confidence level and what it is based on."
    ),
}


def instruction_for(intent_name: str, **context: str) -> str | None:
    """Task-specific suffix for the text-generation step, or None for direct answers."""
    template = _INSTRUCTIONS.get(intent_name)
    if template is None:
        return None
    values = {"period": "", "category": ""}
    values.update(context)
    return template.format(**values)


def compose_prompt(blocks: Iterable[str | None], question: str, instruction: str | None) -> str:
    parts = [b.strip() for b in blocks if b and b.strip()]
    if question and question.strip():
        parts.append(f"User's Question: {question.strip()}")
    if instruction:
        parts.append(instruction)
    return "\n\n".join(parts)
