"""
services/flights.py
-------------------
Flight recommendations through SerpApi's Google Flights engine.
- "City (CODE)" strings -> IATA code (or a 3-letter guess)
- One search per request, best + other results, top 3 kept
- Any failure (no key, network, odd payload) -> two demo flights
"""

from __future__ import annotations

import logging
import re
from typing import Any, Dict, List, Optional, TypedDict

import requests

from core.errors import FlightSearchError
from core.models import Airport, FlightOption, FlightRecommendations, FlightSegment, Layover

logger = logging.getLogger(__name__)

_BASE = "https://serpapi.com/search.json"
MAX_RESULTS = 3
DEMO_LOGO = (
    "https://upload.wikimedia.org/wikipedia/commons/thumb/c/c5/"
    "Airplane_silhouette.svg/1024px-Airplane_silhouette.svg.png"
)

_CODE_IN_PARENS = re.compile(r"\(([A-Z]{3})\)")


# ──────────────────────────────────────────────────────────────────────────────
# Raw SerpApi shapes (every key may be absent)
# ──────────────────────────────────────────────────────────────────────────────
class RawAirport(TypedDict, total=False):
    name: str
    id: str
    time: str


class RawSegment(TypedDict, total=False):
    airline: str
    airline_logo: str
    flight_number: str
    departure_airport: RawAirport
    arrival_airport: RawAirport
    duration: int
    travel_class: str


class RawLayover(TypedDict, total=False):
    duration: int
    name: str
    id: str
    overnight: bool


class RawFlight(TypedDict, total=False):
    price: float
    total_duration: int
    flights: List[RawSegment]
    layovers: List[RawLayover]


# ──────────────────────────────────────────────────────────────────────────────
# Airport codes
# ──────────────────────────────────────────────────────────────────────────────
def extract_airport_code(location: str) -> str:
    """
    "New York (JFK)" -> "JFK". Without a code in parentheses, the first word
    of the name cut to 3 letters: "Paris, France" -> "PAR".
    """
    location = location or ""
    match = _CODE_IN_PARENS.search(location)
    if match:
        return match.group(1)
    words = [w for w in re.split(r"[,\s]+", location) if w]
    if not words:
        return "XXX"
    return words[0][:3].upper()


# ──────────────────────────────────────────────────────────────────────────────
# Provider call
# ──────────────────────────────────────────────────────────────────────────────
def search_flights(
    source_code: str,
    destination_code: str,
    departure_date: str,
    return_date: Optional[str] = None,
    *,
    api_key: str,
) -> Dict[str, Any]:
    """One Google Flights search. Raises FlightSearchError on any failure."""
    if not api_key:
        raise FlightSearchError("SERPAPI_KEY is missing.")

    params = {
        "engine": "google_flights",
        "api_key": api_key,
        "departure_id": source_code,
        "arrival_id": destination_code,
        "outbound_date": departure_date,
        "hl": "en",
        "currency": "USD",
        "type": "1" if return_date else "2",  # 1 = round trip, 2 = one way
    }
    if return_date:
        params["return_date"] = return_date

    logger.debug("Searching flights %s -> %s on %s", source_code, destination_code, departure_date)
    try:
        r = requests.get(_BASE, params=params, timeout=10)
    except requests.RequestException as exc:
        raise FlightSearchError(f"SerpApi unreachable: {exc}") from exc

    if r.status_code >= 400:
        try:
            msg = r.json().get("error", r.text)
        except ValueError:
            msg = r.text
        raise FlightSearchError(f"SerpApi {r.status_code}: {msg}")

    try:
        data = r.json()
    except ValueError as exc:
        raise FlightSearchError("SerpApi returned non-JSON content") from exc
    if not isinstance(data, dict):
        raise FlightSearchError("SerpApi returned an unexpected payload")
    if data.get("error"):
        raise FlightSearchError(f"SerpApi error: {data['error']}")
    return data


# ──────────────────────────────────────────────────────────────────────────────
# Reshaping
# ──────────────────────────────────────────────────────────────────────────────
def _int(value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


def _to_airport(raw: Optional[RawAirport]) -> Airport:
    raw = raw if isinstance(raw, dict) else {}
    return Airport(
        name=str(raw.get("name", "")),
        code=str(raw.get("id", "")),
        local_time=str(raw.get("time", "")),
    )


def _to_segment(raw: RawSegment) -> FlightSegment:
    return FlightSegment(
        airline=str(raw.get("airline", "")),
        airline_logo_url=str(raw.get("airline_logo", "")),
        flight_number=str(raw.get("flight_number", "")),
        departure_airport=_to_airport(raw.get("departure_airport")),
        arrival_airport=_to_airport(raw.get("arrival_airport")),
        duration=_int(raw.get("duration")),
        travel_class=str(raw.get("travel_class", "")),
    )


def _to_layover(raw: RawLayover) -> Layover:
    return Layover(
        duration=_int(raw.get("duration")),
        airport=str(raw.get("name", "")),
        airport_code=str(raw.get("id", "")),
        overnight=bool(raw.get("overnight", False)),
    )


def _to_flight_option(raw: RawFlight) -> FlightOption:
    price = raw.get("price")
    return FlightOption(
        price=price if isinstance(price, (int, float)) else 0,
        total_duration=_int(raw.get("total_duration")),
        segments=[_to_segment(s) for s in raw.get("flights") or [] if isinstance(s, dict)],
        layovers=[_to_layover(l) for l in raw.get("layovers") or [] if isinstance(l, dict)],
    )


def _first_airport(data: Dict[str, Any], side: str) -> Optional[Dict[str, Any]]:
    airports = data.get("airports") or []
    if airports and isinstance(airports[0], dict):
        entries = airports[0].get(side) or []
        if entries and isinstance(entries[0], dict):
            return entries[0]
    return None


# ──────────────────────────────────────────────────────────────────────────────
# Public API
# ──────────────────────────────────────────────────────────────────────────────
def get_recommended_flights(
    source: str,
    destination: str,
    departure_date: str,
    return_date: Optional[str] = None,
    *,
    api_key: str = "",
) -> FlightRecommendations:
    """
    Top flights for a trip. Never raises: provider trouble of any kind
    yields the demo flights instead.
    """
    source_code = extract_airport_code(source)
    destination_code = extract_airport_code(destination)
    try:
        data = search_flights(
            source_code, destination_code, departure_date, return_date, api_key=api_key
        )
        raw_flights = list(data.get("best_flights") or []) + list(data.get("other_flights") or [])
        flights = [_to_flight_option(f) for f in raw_flights[:MAX_RESULTS] if isinstance(f, dict)]
        if not flights:
            raise FlightSearchError("no flights in SerpApi response")
        return FlightRecommendations(
            flights=flights,
            source=_first_airport(data, "departure") or {"city": source_code},
            destination=_first_airport(data, "arrival") or {"city": destination_code},
            price_insights=data.get("price_insights"),
        )
    except FlightSearchError as exc:
        logger.warning("Flight search unavailable (%s), using demo flights", exc)
    except Exception:
        logger.exception("Malformed flight search response, using demo flights")
    return create_fallback_flights(source, destination)


def create_fallback_flights(source: str, destination: str) -> FlightRecommendations:
    source_code = extract_airport_code(source)
    destination_code = extract_airport_code(destination)

    def demo(airline: str, number: str, price: int, minutes: int, dep: str, arr: str) -> FlightOption:
        return FlightOption(
            price=price,
            total_duration=minutes,
            segments=[
                FlightSegment(
                    airline=airline,
                    airline_logo_url=DEMO_LOGO,
                    flight_number=number,
                    departure_airport=Airport(f"{source} Airport", source_code, dep),
                    arrival_airport=Airport(f"{destination} Airport", destination_code, arr),
                    duration=minutes,
                    travel_class="Economy",
                )
            ],
        )

    return FlightRecommendations(
        flights=[
            demo("Demo Airlines", "DA123", 550, 360, "08:00", "14:00"),
            demo("Demo Express", "DE456", 450, 420, "10:30", "17:30"),
        ],
        source={
            "city": source,
            "airport": {"name": f"{source} Airport", "id": source_code},
            "country": "Unknown",
        },
        destination={
            "city": destination,
            "airport": {"name": f"{destination} Airport", "id": destination_code},
            "country": "Unknown",
        },
        price_insights={"lowestPrice": 450, "typicalPriceRange": [450, 650]},
    )
