from .category import aggregate_category_all_months, aggregate_category_in_month
from .compare import compare_months
from .insights import analyze_spending
from .models import TransactionRecord, ensure_records, records_from_dicts
from .monthly import aggregate_month, available_months, month_records
from .trends import rolling_trend

__all__ = [
    "TransactionRecord",
    "ensure_records",
    "records_from_dicts",
    "aggregate_month",
    "available_months",
    "month_records",
    "aggregate_category_in_month",
    "aggregate_category_all_months",
    "compare_months",
    "rolling_trend",
    "analyze_spending",
]
