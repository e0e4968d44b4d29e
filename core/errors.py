# core/errors.py

from dataclasses import dataclass


class ValidationError(Exception):
    """The trip request is incomplete or inconsistent (HTTP 400)."""


class ProviderError(Exception):
    """The generative model could not be reached or refused the call (HTTP 500)."""


class FlightSearchError(Exception):
    """Flight provider failure. Never leaves services.flights."""


@dataclass(frozen=True)
class ExtractionFailure:
    """
    The model answered, but no usable JSON itinerary could be read from it.
    Returned as a value by the extractor; the caller turns it into a fallback.
    """
    reason: str
    excerpt: str = ""
