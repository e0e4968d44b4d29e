# ai/gemini.py
# ------------------------------------------------------------------------------
import json
import logging
import textwrap
from typing import Optional, Union

import google.generativeai as genai
from google.generativeai.types import HarmBlockThreshold, HarmCategory

from ai.fallback import create_demo_itinerary, create_fallback_itinerary, fill_empty_lists
from core.config import DEFAULT_GEMINI_MODEL, Settings
from core.errors import ExtractionFailure, ProviderError
from core.models import Itinerary, TripRequest

logger = logging.getLogger(__name__)

# Fixed on purpose: the extractor relies on the model sticking to the schema.
GENERATION_CONFIG = {
    "temperature": 0.7,
    "top_p": 0.9,
    "top_k": 40,
}

SAFETY_SETTINGS = {
    HarmCategory.HARM_CATEGORY_HARASSMENT: HarmBlockThreshold.BLOCK_MEDIUM_AND_ABOVE,
    HarmCategory.HARM_CATEGORY_HATE_SPEECH: HarmBlockThreshold.BLOCK_MEDIUM_AND_ABOVE,
    HarmCategory.HARM_CATEGORY_SEXUALLY_EXPLICIT: HarmBlockThreshold.BLOCK_MEDIUM_AND_ABOVE,
    HarmCategory.HARM_CATEGORY_DANGEROUS_CONTENT: HarmBlockThreshold.BLOCK_MEDIUM_AND_ABOVE,
}

# ──────────────────────────────────────────────────────────────────────────────
# Prompt template
# ──────────────────────────────────────────────────────────────────────────────
ITINERARY_SCHEMA = textwrap.dedent(
    """\
    {
      "days": [
        {
          "title": "Day title/theme",
          "morning": {
            "activities": [
              {
                "title": "Activity name",
                "description": "Detailed description",
                "location": "Specific location name",
                "time": "Recommended time"
              }
            ]
          },
          "afternoon": {
            "activities": [...]
          },
          "evening": {
            "activities": [...]
          }
        }
      ],
      "tips": ["tip 1", "tip 2", ...],
      "mustSeeLocations": ["location 1", "location 2", ...],
      "foodRecommendations": ["food 1", "food 2", ...]
    }"""
)

_PROMPT_TEMPLATE = textwrap.dedent(
    """\
    You are an expert travel planner. Create a detailed day-by-day travel itinerary for a trip with the following details:

    Source: {source}
    Destination: {destination}
    Dates: {start} to {end} ({duration} days)
    Budget: {currency} {budget}
    Number of Travelers: {travelers}
    Interests: {interests}
    {notes}
    For each day, please provide:
    1. A day title/theme
    2. Morning activities (1-3 activities with descriptions, locations, and recommended times)
    3. Afternoon activities (1-3 activities with descriptions, locations, and recommended times)
    4. Evening activities (1-3 activities with descriptions, locations, and recommended times)

    Also include:
    - 5-7 practical travel tips specific to the destination
    - 5 must-see locations that shouldn't be missed
    - 5 food recommendations typical of the destination

    Generate the response in a structured JSON format with the following schema:
    {schema}

    Ensure all recommendations stay within the specified budget and match the travelers' interests."""
)


def _format_day(d) -> str:
    return f"{d:%b} {d.day}, {d.year}"


def build_prompt(req: TripRequest) -> str:
    """Return the generation prompt for a trip. Same request, same string."""
    notes = f"Additional Notes: {req.additional_notes}\n" if req.additional_notes else ""
    return _PROMPT_TEMPLATE.format(
        source=req.source,
        destination=req.destination,
        start=_format_day(req.start_date),
        end=_format_day(req.end_date),
        duration=req.duration_days(),
        currency=req.currency,
        budget=req.budget,
        travelers=req.travelers,
        interests=", ".join(req.interests),
        notes=notes,
        schema=ITINERARY_SCHEMA,
    )


# ──────────────────────────────────────────────────────────────────────────────
# Gemini client
# ──────────────────────────────────────────────────────────────────────────────
class GeminiClient:
    """One configured Gemini model. Built once at startup, shared by requests."""

    def __init__(self, api_key: str, model_name: str = DEFAULT_GEMINI_MODEL):
        if not api_key:
            raise ProviderError("GEMINI_API_KEY is missing.")
        genai.configure(api_key=api_key)
        self.model_name = model_name
        self._model = genai.GenerativeModel(
            model_name,
            generation_config=GENERATION_CONFIG,
            safety_settings=SAFETY_SETTINGS,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> Optional["GeminiClient"]:
        """None when no key is configured; callers then serve demo itineraries."""
        if not settings.gemini_api_key:
            logger.warning("GEMINI_API_KEY is not set, itineraries will use demo data")
            return None
        return cls(settings.gemini_api_key, settings.gemini_model)

    def generate(self, prompt: str) -> str:
        """Single call, no retry. Any failure comes back as ProviderError."""
        try:
            resp = self._model.generate_content(prompt)
            text = resp.text
        except Exception as exc:
            raise ProviderError(f"Gemini call failed: {exc}") from exc
        if not text:
            raise ProviderError("Gemini returned an empty response")
        return text


# ──────────────────────────────────────────────────────────────────────────────
# Extraction
# ──────────────────────────────────────────────────────────────────────────────
def extract_itinerary(text: str) -> Union[Itinerary, ExtractionFailure]:
    """
    Pull the JSON object out of free-form model output: everything from the
    first "{" to the last "}". Only JSON syntax and basic shape are checked.
    """
    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end == -1 or end < start:
        return ExtractionFailure("no JSON object found", text[:200])

    raw_json = text[start:end + 1]
    # RecursionError: nesting deeper than the decoder can follow
    try:
        data = json.loads(raw_json)
    except (ValueError, RecursionError) as exc:
        return ExtractionFailure(f"invalid JSON: {exc}", raw_json[:200])

    if not isinstance(data, dict):
        return ExtractionFailure("top-level JSON value is not an object", raw_json[:200])
    try:
        return Itinerary.from_dict(data)
    except (TypeError, AttributeError) as exc:
        return ExtractionFailure(f"unexpected itinerary shape: {exc}", raw_json[:200])


# ──────────────────────────────────────────────────────────────────────────────
# Generate itinerary
# ──────────────────────────────────────────────────────────────────────────────
def generate_itinerary(req: TripRequest, client: Optional[GeminiClient]) -> Itinerary:
    """
    Always returns an itinerary unless Gemini itself fails (ProviderError).
    No client -> curated demo data; unreadable answer -> generic fallback.
    """
    if client is None:
        logger.info("No Gemini client configured, using demo itinerary for %s", req.destination)
        return create_demo_itinerary(req)

    text = client.generate(build_prompt(req))
    result = extract_itinerary(text)
    if isinstance(result, ExtractionFailure):
        logger.warning("Could not parse Gemini itinerary (%s), using fallback", result.reason)
        return create_fallback_itinerary(req.duration_days())
    return fill_empty_lists(result)
