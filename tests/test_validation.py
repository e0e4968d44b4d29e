# tests/test_validation.py

import datetime

import pytest

from core.errors import ValidationError
from core.validation import normalize_request


def _payload(**overrides):
    base = {
        "source": "New York (JFK)",
        "destination": "Paris, France",
        "startDate": "2024-06-01",
        "endDate": "2024-06-03",
        "budget": "1500",
        "currency": "usd",
        "travelers": "2",
        "interests": ["culture", "food"],
    }
    base.update(overrides)
    return base


def test_normalizes_form_strings():
    req = normalize_request(_payload())
    assert req.source == "New York (JFK)"
    assert req.start_date == datetime.date(2024, 6, 1)
    assert req.end_date == datetime.date(2024, 6, 3)
    assert req.budget == 1500
    assert req.travelers == 2
    assert req.currency == "USD"
    assert req.interests == ["culture", "food"]
    assert req.additional_notes is None
    assert req.duration_days() == 3


@pytest.mark.parametrize("field", ["source", "destination", "startDate", "endDate"])
def test_missing_required_field(field):
    payload = _payload()
    del payload[field]
    with pytest.raises(ValidationError, match=field):
        normalize_request(payload)


@pytest.mark.parametrize("field", ["source", "destination", "startDate", "endDate"])
def test_blank_required_field(field):
    with pytest.raises(ValidationError):
        normalize_request(_payload(**{field: "   "}))


def test_start_after_end_rejected():
    with pytest.raises(ValidationError, match="before"):
        normalize_request(_payload(startDate="2024-06-05", endDate="2024-06-03"))


def test_single_day_trip_is_valid():
    req = normalize_request(_payload(startDate="2024-06-01", endDate="2024-06-01"))
    assert req.duration_days() == 1


def test_iso_timestamps_are_cut_to_dates():
    req = normalize_request(_payload(startDate="2024-06-01T00:00:00.000Z",
                                     endDate="2024-06-04T00:00:00.000Z"))
    assert req.duration_days() == 4


def test_bad_date_rejected():
    with pytest.raises(ValidationError, match="startDate"):
        normalize_request(_payload(startDate="June first"))


@pytest.mark.parametrize("budget", ["0", "-10", "abc", None, 1500.5, True])
def test_bad_budget_rejected(budget):
    with pytest.raises(ValidationError, match="budget"):
        normalize_request(_payload(budget=budget))


@pytest.mark.parametrize("budget, expected", [
    (1500, 1500),
    (1500.0, 1500),
    ("1500.00", 1500),
    (" 900 USD", 900),
])
def test_budget_reads_leading_integer(budget, expected):
    assert normalize_request(_payload(budget=budget)).budget == expected


def test_travelers_default_to_one():
    payload = _payload()
    del payload["travelers"]
    assert normalize_request(payload).travelers == 1


def test_interests_required_and_deduplicated():
    with pytest.raises(ValidationError):
        normalize_request(_payload(interests=[]))
    req = normalize_request(_payload(interests=["food", " food ", "art"]))
    assert req.interests == ["food", "art"]


def test_comma_separated_interests():
    assert normalize_request(_payload(interests="food, art")).interests == ["food", "art"]


def test_bad_currency_rejected():
    with pytest.raises(ValidationError, match="currency"):
        normalize_request(_payload(currency="dollars"))


def test_notes_are_stripped_and_blank_dropped():
    assert normalize_request(_payload(additionalNotes="  vegetarian ")).additional_notes == "vegetarian"
    assert normalize_request(_payload(additionalNotes="   ")).additional_notes is None
