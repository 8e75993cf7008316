from datetime import date

from sitebook.core.templates import format_date_filter, format_inr_filter, format_month_filter, group_indian


def test_group_indian():
    assert group_indian("999") == "999"
    assert group_indian("1234567") == "12,34,567"
    assert group_indian("123456789") == "12,34,56,789"


def test_format_inr():
    assert format_inr_filter(1234567.5) == "12,34,567.50"
    assert format_inr_filter(-59000) == "-59,000.00"
    assert format_inr_filter(None) == "0.00"
    assert format_inr_filter(500, 0) == "500"


def test_format_dates():
    assert format_date_filter("2024-01-07") == "07/01/2024"
    assert format_date_filter(date(2024, 1, 7), "%d %b") == "07 Jan"
    assert format_date_filter(None) == ""
    assert format_month_filter("2024-01") == "Jan/2024"
    assert format_month_filter("") == ""
