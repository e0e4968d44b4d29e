# core/config.py

import logging
import os
from dataclasses import dataclass

from dotenv import load_dotenv

DEFAULT_GEMINI_MODEL = "gemini-1.5-flash"


@dataclass(frozen=True)
class Settings:
    gemini_api_key: str = ""
    gemini_model: str = DEFAULT_GEMINI_MODEL
    serpapi_key: str = ""
    google_places_api_key: str = ""
    log_level: str = "INFO"


def load_settings() -> Settings:
    """Read provider credentials from the environment (.env included)."""
    load_dotenv()
    return Settings(
        gemini_api_key=os.getenv("GEMINI_API_KEY", "").strip(),
        gemini_model=os.getenv("GEMINI_MODEL", "").strip() or DEFAULT_GEMINI_MODEL,
        serpapi_key=os.getenv("SERPAPI_KEY", "").strip(),
        google_places_api_key=os.getenv("GOOGLE_PLACES_API_KEY", "").strip(),
        log_level=_log_level(os.getenv("LOG_LEVEL", "")),
    )


def _log_level(raw: str) -> str:
    """Unknown names (e.g. "VERBOSE") fall back to INFO so logging.basicConfig accepts it."""
    level = raw.strip().upper()
    if not isinstance(logging.getLevelName(level), int):
        return "INFO"
    return level
