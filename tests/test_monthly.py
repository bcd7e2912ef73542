import pytest

from expense_analytics.analytics.models import TransactionRecord
from expense_analytics.analytics.monthly import aggregate_month, available_months, month_records


def _rec(id, category, amount, date, description=None):
    return TransactionRecord(
        id=str(id), category=category, amount=amount, date=date, description=description
    )


def test_january_two_categories(january_records):
    res = aggregate_month(january_records, 1, 2025)
    assert res.status == "ok"
    assert res.found
    assert res.message == "Successfully analyzed 2 expenses for January 2025."

    data = res.data
    assert data.month_name == "January"
    assert data.total_amount == 350
    assert data.transaction_count == 2
    assert data.average_transaction == 175

    assert [c.category for c in data.categories] == ["Travel", "Food"]
    assert data.categories[0].percentage == pytest.approx(57.142857, abs=1e-4)
    assert data.categories[1].percentage == pytest.approx(42.857142, abs=1e-4)

    assert [d.date for d in data.daily_breakdown] == ["2025-01-10", "2025-01-15"]
    assert [e.id for e in data.top_expenses] == ["2", "1"]
    assert data.top_category.category == "Travel"
    assert data.peak_day.date == "2025-01-15"


def test_sums_and_percentages_are_consistent(quarter_records):
    data = aggregate_month(quarter_records, 2, 2025).data
    assert sum(c.amount for c in data.categories) == pytest.approx(data.total_amount)
    assert sum(d.amount for d in data.daily_breakdown) == pytest.approx(data.total_amount)
    assert sum(c.transaction_count for c in data.categories) == data.transaction_count
    assert sum(c.percentage for c in data.categories) == pytest.approx(100.0)
    assert all(0 <= c.percentage <= 100 for c in data.categories)


def test_same_input_same_output(quarter_records):
    assert aggregate_month(quarter_records, 3, 2025) == aggregate_month(quarter_records, 3, 2025)


def test_month_boundaries_are_inclusive():
    rows = [
        _rec(1, "Food", 10, "2024-02-01"),
        _rec(2, "Food", 20, "2024-02-29"),
        _rec(3, "Food", 40, "2024-03-01"),
        _rec(4, "Food", 80, "2024-01-31"),
    ]
    assert [r.id for r in month_records(rows, 2, 2024)] == ["1", "2"]
    assert aggregate_month(rows, 2, 2024).data.total_amount == 30


def test_invalid_month_and_year():
    res = aggregate_month([], 13, 2025)
    assert res.status == "invalid_parameter"
    assert res.message == "Invalid month: 13. Please provide a month between 1-12."
    assert res.data is None

    res = aggregate_month([], 0, 2025)
    assert res.status == "invalid_parameter"

    res = aggregate_month([], 5, 1999)
    assert res.status == "invalid_parameter"
    assert res.message == "Invalid year: 1999. Please provide a year between 2000-2100."

    res = aggregate_month([], 5, 2101)
    assert res.status == "invalid_parameter"


def test_year_range_is_configurable():
    res = aggregate_month([], 5, 2030, min_year=2000, max_year=2026)
    assert res.status == "invalid_parameter"
    assert "2000-2026" in res.message


def test_month_without_records(january_records):
    res = aggregate_month(january_records, 2, 2025)
    assert res.status == "not_found"
    assert not res.found
    assert res.message == "No expenses found for February 2025."
    assert res.data is None


def test_top_expenses_limit_and_tie_order():
    rows = [_rec(i, "Food", 100, f"2025-04-{i:02d}") for i in range(1, 8)]
    rows.append(_rec(99, "Bills", 500, "2025-04-20"))

    data = aggregate_month(rows, 4, 2025).data
    assert len(data.top_expenses) == 5
    assert [e.id for e in data.top_expenses] == ["99", "1", "2", "3", "4"]

    data = aggregate_month(rows, 4, 2025, top_n=2).data
    assert [e.id for e in data.top_expenses] == ["99", "1"]


def test_peak_day_tie_goes_to_earliest():
    rows = [
        _rec(1, "Food", 50, "2025-05-03"),
        _rec(2, "Food", 50, "2025-05-01"),
    ]
    data = aggregate_month(rows, 5, 2025).data
    assert data.peak_day.date == "2025-05-01"


def test_accepts_plain_dicts():
    rows = [{"id": 1, "category": "Food", "amount": 10, "date": "2025-06-01"}]
    res = aggregate_month(rows, 6, 2025)
    assert res.found
    assert res.data.top_expenses[0].id == "1"


def test_available_months_newest_first(quarter_records):
    months = available_months(quarter_records)
    assert [(m.year, m.month) for m in months] == [(2025, 3), (2025, 2), (2025, 1), (2024, 12)]
    assert months[0].total_amount == 750
    assert months[0].transaction_count == 2
    assert months[-1].month_name == "December"
    assert available_months([]) == []


def test_same_category_records_are_summed():
    rows = [
        _rec(1, "Food", 100, "2025-01-05"),
        _rec(2, "Food", 50, "2025-01-20"),
        _rec(3, "Travel", 200, "2025-01-12"),
    ]
    res = aggregate_month(rows, 1, 2025)
    data = res.data
    assert data.total_amount == 350
    assert data.transaction_count == 3
    assert res.message == "Successfully analyzed 3 expenses for January 2025."

    travel, food = data.categories
    assert (travel.category, travel.amount, travel.transaction_count) == ("Travel", 200, 1)
    assert (food.category, food.amount, food.transaction_count) == ("Food", 150, 2)
    assert round(travel.percentage, 2) == 57.14
    assert round(food.percentage, 2) == 42.86
