# tests/conftest.py

import datetime

import pytest

from core.models import TripRequest


@pytest.fixture
def paris_request():
    return TripRequest(
        source="New York (JFK)",
        destination="Paris, France",
        start_date=datetime.date(2024, 6, 1),
        end_date=datetime.date(2024, 6, 3),
        budget=1500,
        currency="USD",
        travelers=2,
        interests=["culture", "food"],
    )


@pytest.fixture
def itinerary_payload():
    """A well-formed itinerary exactly as the model is asked to return it."""
    def act(title, location, time):
        return {"title": title, "description": f"About {title}", "location": location, "time": time}

    return {
        "days": [
            {
                "title": "Day 1 - Old Town",
                "morning": {"activities": [act("Castle tour", "Castle Hill", "9:00 AM")]},
                "afternoon": {"activities": [
                    act("River walk", "Embankment", "1:00 PM"),
                    act("Coffee break", "Café Central", "3:30 PM"),
                ]},
                "evening": {"activities": [act("Jazz club", "Club 21", "8:00 PM")]},
            },
            {
                "title": "Day 2 - Markets",
                "morning": {"activities": [act("Flea market", "Market Square", "10:00 AM")]},
                "afternoon": {"activities": []},
                "evening": {"activities": [act("Food hall dinner", "Hall 3", "7:00 PM")]},
            },
        ],
        "tips": ["Carry cash", "Buy a transit pass"],
        "mustSeeLocations": ["Castle Hill", "Market Square"],
        "foodRecommendations": ["Dumplings", "Plum brandy"],
    }
