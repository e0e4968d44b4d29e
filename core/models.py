# core/models.py

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, List, Optional, Tuple


@dataclass
class TripRequest:
    source: str
    destination: str
    start_date: date
    end_date: date
    budget: int
    currency: str
    travelers: int
    interests: List[str]
    additional_notes: Optional[str] = None

    def duration_days(self) -> int:
        """Inclusive day count between start and end dates."""
        return (self.end_date - self.start_date).days + 1


# ──────────────────────────────────────────────────────────────────────────────
# Itinerary
# ──────────────────────────────────────────────────────────────────────────────
@dataclass
class Activity:
    title: str
    description: str
    location: Optional[str] = None
    time: Optional[str] = None
    # keys the model sent beyond the ones above, explicit nulls included
    extra: Dict[str, Any] = field(default_factory=dict, repr=False)

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"title": self.title, "description": self.description}
        if self.location is not None:
            out["location"] = self.location
        if self.time is not None:
            out["time"] = self.time
        out.update(self.extra)
        return out

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Activity":
        extra = _extra_keys(data, ("title", "description", "location", "time"))
        extra.update({k: None for k in ("location", "time") if k in data and data[k] is None})
        return cls(
            title=data.get("title", ""),
            description=data.get("description", ""),
            location=data.get("location"),
            time=data.get("time"),
            extra=extra,
        )


@dataclass
class TimeBlock:
    activities: List[Activity] = field(default_factory=list)
    extra: Dict[str, Any] = field(default_factory=dict, repr=False)

    def to_dict(self) -> Dict[str, Any]:
        return {"activities": [a.to_dict() for a in self.activities], **self.extra}

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "TimeBlock":
        if not data:
            return cls()
        return cls(
            activities=[Activity.from_dict(a) for a in data.get("activities", [])],
            extra=_extra_keys(data, ("activities",)),
        )


@dataclass
class Day:
    title: str
    morning: TimeBlock = field(default_factory=TimeBlock)
    afternoon: TimeBlock = field(default_factory=TimeBlock)
    evening: TimeBlock = field(default_factory=TimeBlock)
    extra: Dict[str, Any] = field(default_factory=dict, repr=False)

    def blocks(self) -> Dict[str, TimeBlock]:
        return {"morning": self.morning, "afternoon": self.afternoon, "evening": self.evening}

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"title": self.title}
        out.update({name: block.to_dict() for name, block in self.blocks().items()})
        out.update(self.extra)
        return out

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Day":
        return cls(
            title=data.get("title", ""),
            morning=TimeBlock.from_dict(data.get("morning")),
            afternoon=TimeBlock.from_dict(data.get("afternoon")),
            evening=TimeBlock.from_dict(data.get("evening")),
            extra=_extra_keys(data, ("title", "morning", "afternoon", "evening")),
        )


@dataclass
class Itinerary:
    days: List[Day] = field(default_factory=list)
    tips: List[str] = field(default_factory=list)
    must_see_locations: List[str] = field(default_factory=list)
    food_recommendations: List[str] = field(default_factory=list)
    extra: Dict[str, Any] = field(default_factory=dict, repr=False)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "days": [d.to_dict() for d in self.days],
            "tips": list(self.tips),
            "mustSeeLocations": list(self.must_see_locations),
            "foodRecommendations": list(self.food_recommendations),
            **self.extra,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Itinerary":
        """
        Shape a decoded JSON object into an Itinerary.
        Missing keys fall back to empty values; wrongly typed ones raise
        TypeError / AttributeError for the caller to handle.
        Keys outside the schema are carried through to to_dict() unchanged.
        """
        days = data.get("days", [])
        if not isinstance(days, list):
            raise TypeError("'days' must be a list")
        return cls(
            days=[Day.from_dict(d) for d in days],
            tips=_str_list(data.get("tips", [])),
            must_see_locations=_str_list(data.get("mustSeeLocations", [])),
            food_recommendations=_str_list(data.get("foodRecommendations", [])),
            extra=_extra_keys(data, _ITINERARY_KEYS),
        )


_ITINERARY_KEYS = ("days", "tips", "mustSeeLocations", "foodRecommendations")


def _str_list(value: Any) -> List[str]:
    if not isinstance(value, list):
        raise TypeError(f"expected a list, got {type(value).__name__}")
    return list(value)


def _extra_keys(data: Dict[str, Any], known: Tuple[str, ...]) -> Dict[str, Any]:
    return {k: v for k, v in data.items() if k not in known}


# ──────────────────────────────────────────────────────────────────────────────
# Flights
# ──────────────────────────────────────────────────────────────────────────────
@dataclass
class Airport:
    name: str
    code: str
    local_time: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "code": self.code, "localTime": self.local_time}


@dataclass
class FlightSegment:
    airline: str
    airline_logo_url: str
    flight_number: str
    departure_airport: Airport
    arrival_airport: Airport
    duration: int
    travel_class: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "airline": self.airline,
            "airlineLogoUrl": self.airline_logo_url,
            "flightNumber": self.flight_number,
            "departureAirport": self.departure_airport.to_dict(),
            "arrivalAirport": self.arrival_airport.to_dict(),
            "duration": self.duration,
            "travelClass": self.travel_class,
        }


@dataclass
class Layover:
    duration: int
    airport: str
    airport_code: str
    overnight: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "duration": self.duration,
            "airport": self.airport,
            "airportCode": self.airport_code,
            "overnight": self.overnight,
        }


@dataclass
class FlightOption:
    price: float
    total_duration: int
    segments: List[FlightSegment] = field(default_factory=list)
    layovers: List[Layover] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "price": self.price,
            "totalDuration": self.total_duration,
            "flights": [s.to_dict() for s in self.segments],
            "layovers": [l.to_dict() for l in self.layovers],
        }


@dataclass
class FlightRecommendations:
    flights: List[FlightOption]
    source: Dict[str, Any]
    destination: Dict[str, Any]
    price_insights: Optional[Dict[str, Any]] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "flights": [f.to_dict() for f in self.flights],
            "source": self.source,
            "destination": self.destination,
            "priceInsights": self.price_insights,
        }
