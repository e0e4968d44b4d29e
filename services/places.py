# services/places.py

import logging

import requests

from core.errors import ProviderError

logger = logging.getLogger(__name__)

_URL = "https://maps.googleapis.com/maps/api/place/autocomplete/json"

MOCK_PREDICTIONS = [
    {"place_id": "1", "description": "New York, USA"},
    {"place_id": "2", "description": "New Delhi, India"},
    {"place_id": "3", "description": "London, UK"},
    {"place_id": "4", "description": "Tokyo, Japan"},
    {"place_id": "5", "description": "Paris, France"},
]


def autocomplete_cities(query: str, *, api_key: str = "") -> dict:
    """
    City suggestions from the Google Places Autocomplete API.
    Without a key, a fixed list is returned so the form stays usable.
    """
    if not api_key:
        logger.debug("GOOGLE_PLACES_API_KEY is not set, returning mock predictions")
        return {"predictions": [dict(p) for p in MOCK_PREDICTIONS]}

    params = {"input": query, "types": "(cities)", "key": api_key}
    try:
        r = requests.get(_URL, params=params, timeout=10)
        r.raise_for_status()
        data = r.json()
    except (requests.RequestException, ValueError) as exc:
        raise ProviderError(f"Places autocomplete failed: {exc}") from exc

    status = data.get("status", "OK")
    if status not in ("OK", "ZERO_RESULTS"):
        raise ProviderError(f"Places autocomplete returned {status}: {data.get('error_message', '')}")

    return {
        "predictions": [
            {"place_id": p.get("place_id", ""), "description": p.get("description", "")}
            for p in data.get("predictions", [])
        ]
    }
