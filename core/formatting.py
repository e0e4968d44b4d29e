# core/formatting.py

import datetime as dt

CURRENCY_SYMBOLS = {
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
    "JPY": "¥",
    "AUD": "A$",
    "CAD": "C$",
    "INR": "₹",
    "CNY": "¥",
}


def currency_symbol(code: str) -> str:
    return CURRENCY_SYMBOLS.get((code or "").upper(), "$")


def format_date_range(start: dt.date, end: dt.date) -> str:
    """
    Compact human range:
    Jun 1-3, 2024 / Jun 28 - Jul 2, 2024 / Dec 30, 2024 - Jan 2, 2025
    """
    if start.year != end.year:
        return f"{start:%b} {start.day}, {start.year} - {end:%b} {end.day}, {end.year}"
    if start.month != end.month:
        return f"{start:%b} {start.day} - {end:%b} {end.day}, {start.year}"
    return f"{start:%b} {start.day}-{end.day}, {start.year}"


def format_duration(minutes: int) -> str:
    hours, mins = divmod(int(minutes or 0), 60)
    return f"{hours}h {mins}m"
