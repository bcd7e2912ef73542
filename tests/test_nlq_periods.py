from expense_analytics.nlq.periods import (
    find_month,
    find_named_months,
    find_years,
    has_comparison_keyword,
    parse_comparison_query,
    parse_month_year,
)


def test_full_month_name():
    p = parse_month_year("Analyze my expenses for March 2025")
    assert p.success
    assert (p.month, p.year) == (3, 2025)
    assert p.message == "Parsed: March 2025"


def test_abbreviation_and_case():
    assert parse_month_year("spending in SEPT 2024").month == 9
    assert parse_month_year("spending in sep 2024").month == 9
    assert parse_month_year("what about Dec 2023?").month == 12


def test_numeric_month():
    p = parse_month_year("expenses for 03/2025")
    assert (p.month, p.year) == (3, 2025)
    assert parse_month_year("2025-11 summary").month == 11


def test_names_win_over_numbers():
    assert find_month("top 5 expenses in June 2025") == 6


def test_misspelled_month_reports_year():
    p = parse_month_year("Show expenses for Jam 2025")
    assert not p.success
    assert p.year == 2025
    assert p.missing == "month"
    assert p.message == (
        "Found year 2025 but could not identify the month. "
        "Please specify the month name or number (1-12)."
    )


def test_missing_year():
    p = parse_month_year("How much did I spend in March?")
    assert not p.success
    assert p.missing == "year"
    assert p.message == "Could not find a valid year (2000-2099) in your request."


def test_year_must_be_standalone():
    assert find_years("order 120255 and 2024") == [2024]
    assert find_years("1999 and 2100") == []


def test_month_words_are_not_substrings():
    assert find_month("marching band 2025") is None
    assert find_named_months("mayor of 2025") == []


def test_comparison_in_one_year():
    p = parse_comparison_query("Compare January and February 2025")
    assert p.success
    assert (p.month1, p.year1, p.month2, p.year2) == (1, 2025, 2, 2025)
    assert p.months_found == 2


def test_comparison_months_follow_calendar_order():
    p = parse_comparison_query("compare March vs January 2025")
    assert p.success
    assert (p.month1, p.month2) == (1, 3)
    assert p.year1 == p.year2 == 2025


def test_comparison_years_follow_text_order():
    p = parse_comparison_query("Dec 2024 vs January 2025")
    assert p.success
    assert (p.month1, p.year1, p.month2, p.year2) == (1, 2024, 12, 2025)


def test_comparison_needs_two_distinct_months():
    p = parse_comparison_query("compare March and March 2025")
    assert not p.success
    assert p.missing == "months"
    assert p.months_found == 1
    assert p.message.startswith("Found 1 month(s) but need 2 months for comparison.")


def test_comparison_needs_keyword_and_year():
    p = parse_comparison_query("January February 2025")
    assert not p.success
    assert p.missing == "keyword"

    p = parse_comparison_query("compare January and February")
    assert not p.success
    assert p.missing == "year"


def test_comparison_keyword_is_a_whole_word():
    assert has_comparison_keyword("march vs april 2025")
    assert not has_comparison_keyword("sandwich expenses")
    assert find_named_months("april versus march, then april") == [3, 4]


def test_earliest_calendar_month_wins():
    assert parse_month_year("March or January 2025").month == 1
    assert parse_month_year("dec and feb 2025").month == 2
    assert find_month("Sept then jan 2024") == 1
