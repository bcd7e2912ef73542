import json

import pytest

from expense_analytics import __version__
from expense_analytics.cli import main
from expense_analytics.config import load_settings

ITEMS = [
    {"id": 1, "category": "Food", "amount": 150, "date": "2025-01-10", "description": "groceries"},
    {"id": 2, "category": "Travel", "amount": 200, "date": "2025-01-15"},
    {"id": 3, "category": "Food", "amount": 90, "date": "2025-02-03"},
]


@pytest.fixture
def snapshot(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("CURRENCY_SYMBOL", raising=False)
    monkeypatch.delenv("TREND_WINDOW", raising=False)
    load_settings.cache_clear()
    p = tmp_path / "records.json"
    p.write_text(json.dumps(ITEMS), encoding="utf-8")
    yield str(p)
    load_settings.cache_clear()


def test_version(capsys):
    assert main(["--version"]) == 0
    assert capsys.readouterr().out.strip() == __version__


def test_health(snapshot, capsys):
    assert main(["health"]) == 0
    assert capsys.readouterr().out.strip() == "ok"


def test_months(snapshot, capsys):
    assert main(["months", "--records", snapshot]) == 0
    out = capsys.readouterr().out.splitlines()
    assert out[0] == "February 2025: 90.00 (1 transactions)"
    assert out[1] == "January 2025: 350.00 (2 transactions)"


def test_month_narrative_and_json(snapshot, capsys):
    assert main(["month", "--records", snapshot, "--month", "1", "--year", "2025"]) == 0
    assert "January 2025 Expense Analysis:" in capsys.readouterr().out

    assert main(["month", "--records", snapshot, "--month", "1", "--year", "2025", "--json"]) == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["status"] == "ok"
    assert payload["data"]["total_amount"] == 350


def test_month_not_found_exit_code(snapshot, capsys):
    assert main(["month", "--records", snapshot, "--month", "5", "--year", "2025"]) == 1
    assert "No expenses found for May 2025." in capsys.readouterr().out


def test_category_and_compare(snapshot, capsys):
    assert main(["category", "--records", snapshot, "--category", "food"]) == 0
    assert "Food - All Months Overview" in capsys.readouterr().out

    args = ["category", "--records", snapshot, "--category", "travel", "--month", "2", "--year", "2025"]
    assert main(args) == 1
    assert "No expenses found for travel in February 2025." in capsys.readouterr().out

    args = ["compare", "--records", snapshot, "--month", "1", "--year", "2025", "--month2", "2"]
    assert main(args) == 0
    assert "January 2025 vs February 2025 Comparison" in capsys.readouterr().out


def test_trend_and_ask(snapshot, capsys):
    assert main(["trend", "--records", snapshot, "--json"]) == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["direction"] == "downward"
    assert payload["forecast"]["month"] == 3

    assert main(["ask", "--records", snapshot, "--text", "How much did I spend in January 2025?"]) == 0
    assert "₹350.00" in capsys.readouterr().out

    assert main(["ask", "--records", snapshot, "--text", "Show expenses for Jam 2025"]) == 1
    assert "could not identify the month" in capsys.readouterr().out


def test_missing_records_and_options(snapshot, tmp_path):
    with pytest.raises(SystemExit):
        main(["month"])
    with pytest.raises(SystemExit):
        main(["month", "--records", snapshot])
    assert main(["month", "--records", str(tmp_path / "nope.json"), "--month", "1", "--year", "2025"]) == 2


def test_months_json(snapshot, capsys):
    assert main(["months", "--records", snapshot, "--json"]) == 0
    payload = json.loads(capsys.readouterr().out)
    assert [(m["year"], m["month"]) for m in payload] == [(2025, 2), (2025, 1)]
    assert payload[1]["total_amount"] == 350


def test_zero_window_is_rejected(snapshot):
    with pytest.raises(SystemExit):
        main(["trend", "--records", snapshot, "--window", "0"])


def test_insights_command(snapshot, capsys):
    assert main(["insights", "--records", snapshot, "--as-of", "2025-02-10"]) == 0
    out = capsys.readouterr().out
    assert "Spending Insights (as of 2025-02-10)" in out
    assert "Current Month (February 2025): ₹90.00" in out
    assert "Monthly Trend: Decreasing" in out

    assert main(["insights", "--records", snapshot, "--as-of", "2025-02-10", "--json"]) == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["previous_month_total"] == 350
    assert payload["as_of"] == "2025-02-10"
