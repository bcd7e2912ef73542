import pytest

from expense_analytics.analytics.models import TransactionRecord
from expense_analytics.analytics.stats import normalized_volatility, pct_change, percent_of
from expense_analytics.analytics.trends import rolling_trend


def _rec(id, amount, date, category="Food"):
    return TransactionRecord(id=str(id), category=category, amount=amount, date=date)


def _monthly(*totals, year=2025):
    return [_rec(i, t, f"{year}-{i:02d}-15") for i, t in enumerate(totals, start=1)]


def test_two_month_upward_trend():
    trend = rolling_trend(_monthly(1000, 1500), 3)
    assert [p.total_amount for p in trend.trend] == [1000, 1500]
    assert trend.average_change == 500
    assert trend.direction == "upward"

    fc = trend.forecast
    assert fc.projected_total == 2000
    assert fc.confidence == "medium"
    assert (fc.month, fc.year) == (3, 2025)
    assert fc.month_name == "March"
    assert fc.rationale == "Based on 2 month trend showing upward movement."


def test_window_keeps_latest_months_in_order():
    trend = rolling_trend(_monthly(10, 20, 30, 40), 2)
    assert [(p.month, p.total_amount) for p in trend.trend] == [(3, 30), (4, 40)]
    assert trend.window_size == 2


def test_empty_records_give_stable_without_forecast():
    trend = rolling_trend([], 3)
    assert trend.direction == "stable"
    assert trend.average_change == 0
    assert trend.trend == []
    assert trend.forecast is None


def test_single_month_is_low_confidence():
    trend = rolling_trend(_monthly(400), 3)
    assert trend.direction == "stable"
    assert trend.forecast.confidence == "low"
    assert trend.forecast.projected_total == 400
    assert trend.forecast.rationale == "Based on 1 month trend showing a stable pattern."


def test_december_rolls_into_next_year():
    rows = [_rec(1, 100, "2024-11-10"), _rec(2, 200, "2024-12-10")]
    fc = rolling_trend(rows, 3).forecast
    assert (fc.month, fc.year) == (1, 2025)
    assert fc.month_name == "January"


def test_confidence_levels():
    assert rolling_trend(_monthly(100, 200, 300), 3).forecast.confidence == "high"
    assert rolling_trend(_monthly(100, 200, 400), 3).forecast.confidence == "medium"
    assert rolling_trend(_monthly(100, 1000, 100), 3).forecast.confidence == "low"


def test_projection_never_negative():
    trend = rolling_trend(_monthly(1000, 100), 3)
    assert trend.direction == "downward"
    assert trend.average_change == -900
    assert trend.forecast.projected_total == 0


def test_invalid_window():
    with pytest.raises(ValueError):
        rolling_trend(_monthly(100), 0)


def test_ratio_helpers_avoid_division_by_zero():
    assert pct_change(50, 0) == 0.0
    assert percent_of(10, 0) == 0.0
    assert normalized_volatility([], 0) == 0.0
    assert normalized_volatility([100, 200], 150) == pytest.approx(50 / 150)
