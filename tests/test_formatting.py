# tests/test_formatting.py

import datetime as dt

from core.formatting import currency_symbol, format_date_range, format_duration


def test_currency_symbols():
    assert currency_symbol("EUR") == "€"
    assert currency_symbol("inr") == "₹"
    assert currency_symbol("CHF") == "$"


def test_date_ranges():
    assert format_date_range(dt.date(2024, 6, 1), dt.date(2024, 6, 3)) == "Jun 1-3, 2024"
    assert format_date_range(dt.date(2024, 6, 28), dt.date(2024, 7, 2)) == "Jun 28 - Jul 2, 2024"
    assert format_date_range(dt.date(2024, 12, 30), dt.date(2025, 1, 2)) == "Dec 30, 2024 - Jan 2, 2025"


def test_duration():
    assert format_duration(360) == "6h 0m"
    assert format_duration(455) == "7h 35m"
