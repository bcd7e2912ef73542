from expense_analytics.nlq.categories import category_vocabulary, detect_category
from expense_analytics.nlq.router import parse_query, route
from expense_analytics.nlq.types import NLQClarification, NLQIntent

CATS = ["Food", "Travel", "Health Insurance", "Bills"]


def test_vocabulary_keeps_first_seen_order(quarter_records):
    assert category_vocabulary(quarter_records) == ["Food", "Travel", "Bills", "Shopping"]
    assert category_vocabulary([]) == []


def test_detect_category_whole_label_and_tokens():
    assert detect_category("how much on food in May 2025", CATS) == "Food"
    assert detect_category("my insurance costs", CATS) == "Health Insurance"
    assert detect_category("TRAVEL overall", CATS) == "Travel"
    assert detect_category("nothing relevant", CATS) is None
    assert detect_category("", CATS) is None


def test_detect_category_first_match_wins():
    assert detect_category("food and travel in March 2025", CATS) == "Food"
    assert detect_category("travel and food in March 2025", CATS) == "Food"


def test_short_tokens_do_not_match():
    assert detect_category("go out", ["Go Out"]) == "Go Out"
    assert detect_category("go home", ["Go Out"]) is None


def test_compare_route():
    r = route("Compare January and February 2025", CATS)
    assert isinstance(r, NLQIntent)
    assert r.name == "compare_months"
    assert r.slots["month1"] == 1
    assert r.slots["month2"] == 2
    assert r.slots["year1"] == r.slots["year2"] == 2025
    assert r.slots["text"] == "Compare January and February 2025"


def test_compare_without_second_month_asks_back():
    r = route("compare March 2025 vs something", CATS)
    assert isinstance(r, NLQClarification)
    assert r.kind == "comparison"
    assert r.missing == "months"


def test_plain_and_does_not_trigger_comparison():
    q = parse_query("food and travel in March 2025", CATS)
    assert q["intent"] == "category_month_analysis"
    assert q["category"] == "Food"


def test_all_months_for_category():
    q = parse_query("show my travel spending across all months", CATS)
    assert q == {"intent": "category_all_months", "category": "Travel"}


def test_all_months_without_category_falls_through():
    q = parse_query("overall trend please", CATS)
    assert q["intent"] == "rolling_trend"


def test_trend_route():
    assert parse_query("what is my spending forecast?", CATS)["intent"] == "rolling_trend"


def test_month_intents():
    assert parse_query("How much did I spend in March 2025?", CATS)["intent"] == "month_total"
    assert parse_query("Analyze March 2025", CATS)["intent"] == "month_analysis"

    q = parse_query("total on bills in 04/2025", CATS)
    assert q["intent"] == "category_month_total"
    assert (q["month"], q["year"], q["category"]) == (4, 2025, "Bills")

    q = parse_query("Break down food for Jan 2025", CATS)
    assert q["intent"] == "category_month_analysis"


def test_bad_month_asks_back():
    r = route("Show expenses for Jam 2025", CATS)
    assert isinstance(r, NLQClarification)
    assert r.kind == "period"
    assert r.missing == "month"
    assert "2025" in r.prompt


def test_unsupported():
    assert route("hello there", CATS) is None
    assert route("   ", CATS) is None


def test_underscored_labels_split_into_words():
    assert detect_category("spent on home stuff", ["Home_Improvement"]) == "Home_Improvement"
