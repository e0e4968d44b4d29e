# core/validation.py

from __future__ import annotations

import datetime as dt
import re
from typing import Any, List, Mapping, Optional

from core.errors import ValidationError
from core.models import TripRequest

REQUIRED_FIELDS = ("source", "destination", "startDate", "endDate")
_LEADING_INT = re.compile(r"[+-]?\d+")


def normalize_request(payload: Mapping[str, Any]) -> TripRequest:
    """
    Turn a raw form payload (camelCase keys, string or numeric values) into
    a TripRequest. Raises ValidationError on anything the planner can't use.
    """
    missing = [name for name in REQUIRED_FIELDS if not _text(payload.get(name))]
    if missing:
        raise ValidationError(f"Missing required fields: {', '.join(missing)}")

    start = _parse_date(payload["startDate"], "startDate")
    end = _parse_date(payload["endDate"], "endDate")
    if start > end:
        raise ValidationError("startDate must be on or before endDate")

    currency = (_text(payload.get("currency")) or "USD").upper()
    if len(currency) != 3 or not currency.isalpha():
        raise ValidationError(f"Invalid currency code: {currency!r}")

    return TripRequest(
        source=_text(payload["source"]),
        destination=_text(payload["destination"]),
        start_date=start,
        end_date=end,
        budget=_positive_int(payload.get("budget"), "budget"),
        currency=currency,
        travelers=_positive_int(payload.get("travelers", 1), "travelers"),
        interests=_interests(payload.get("interests")),
        additional_notes=_text(payload.get("additionalNotes")) or None,
    )


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def _parse_date(value: Any, name: str) -> dt.date:
    if isinstance(value, dt.datetime):
        return value.date()
    if isinstance(value, dt.date):
        return value
    # ISO timestamps from JS clients ("2024-06-01T00:00:00.000Z") keep only the date
    raw = _text(value)[:10]
    try:
        return dt.date.fromisoformat(raw)
    except ValueError:
        raise ValidationError(f"{name} is not a valid YYYY-MM-DD date: {value!r}") from None


def _positive_int(value: Any, name: str) -> int:
    """
    Ints, whole floats and strings with a leading integer ("1500", "1500.00",
    "2 people") are accepted, the way parseInt reads form fields.
    """
    if isinstance(value, bool):
        raise ValidationError(f"{name} must be a positive integer")
    if isinstance(value, float):
        if not value.is_integer():
            raise ValidationError(f"{name} must be a whole number, got {value!r}")
        number = int(value)
    elif isinstance(value, int):
        number = value
    else:
        match = _LEADING_INT.match(_text(value))
        if match is None:
            raise ValidationError(f"{name} must be a positive integer, got {value!r}")
        number = int(match.group())
    if number <= 0:
        raise ValidationError(f"{name} must be a positive integer, got {value!r}")
    return number


def _interests(value: Any) -> List[str]:
    if isinstance(value, str):
        value = value.split(",")
    if not isinstance(value, (list, tuple, set)):
        raise ValidationError("interests must be a list of tags")
    seen: List[str] = []
    for item in value:
        tag = _text(item)
        if tag and tag not in seen:
            seen.append(tag)
    if not seen:
        raise ValidationError("Select at least one interest")
    return seen


def optional_text(value: Optional[str]) -> Optional[str]:
    """Blank query-string values count as absent."""
    text = _text(value)
    return text or None
