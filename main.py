# main.py

import datetime
import logging
from typing import Any, Optional

from fastapi import FastAPI, HTTPException, Query, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from ai import gemini
from core.config import load_settings
from core.errors import ProviderError, ValidationError
from core.validation import normalize_request, optional_text
from services import flights as fsvc, places as psvc

settings = load_settings()
logging.basicConfig(level=settings.log_level)
logger = logging.getLogger(__name__)

app = FastAPI(title="AI Travel Planner")
app.state.settings = settings
app.state.gemini = gemini.GeminiClient.from_settings(settings)


# Form payload as sent by the planner UI; checked by normalize_request
class TravelPlanForm(BaseModel):
    source: Optional[str] = None
    destination: Optional[str] = None
    startDate: Optional[str] = None
    endDate: Optional[str] = None
    budget: Any = None
    currency: Optional[str] = None
    travelers: Any = None
    interests: Any = None  # list of tags or "a,b" string
    additionalNotes: Optional[str] = None


# Malformed bodies and query strings get 400, like normalize_request failures
@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(status_code=400, content={"detail": jsonable_encoder(exc.errors())})


@app.get("/api/health")
def health(request: Request):
    cfg = request.app.state.settings
    return {
        "status": "ok",
        "gemini": request.app.state.gemini is not None,
        "flights": bool(cfg.serpapi_key),
        "places": bool(cfg.google_places_api_key),
    }


@app.get("/api/places")
def places_endpoint(request: Request, query: Optional[str] = None):
    if not optional_text(query):
        raise HTTPException(status_code=400, detail="Query parameter is required")
    try:
        return psvc.autocomplete_cities(
            query.strip(), api_key=request.app.state.settings.google_places_api_key
        )
    except ProviderError as e:
        logger.exception("Places lookup failed")
        raise HTTPException(status_code=500, detail=str(e))


@app.post("/api/travel-plan")
def travel_plan_endpoint(form: TravelPlanForm, request: Request):
    payload = form.model_dump(exclude_none=True)
    try:
        trip_req = normalize_request(payload)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))

    try:
        itin = gemini.generate_itinerary(trip_req, request.app.state.gemini)
    except ProviderError as e:
        logger.exception("Itinerary generation failed")
        raise HTTPException(status_code=500, detail=f"Failed to generate travel plan: {e}")

    return {
        **payload,
        "itinerary": itin.to_dict(),
        "createdAt": datetime.datetime.now(datetime.timezone.utc).isoformat(),
    }


@app.get("/api/flights")
def flights_endpoint(
    request: Request,
    source: Optional[str] = None,
    destination: Optional[str] = None,
    departure_date: Optional[str] = Query(None, alias="departureDate"),
    return_date: Optional[str] = Query(None, alias="returnDate"),
):
    if not (optional_text(source) and optional_text(destination) and optional_text(departure_date)):
        raise HTTPException(
            status_code=400, detail="source, destination and departureDate are required"
        )
    recs = fsvc.get_recommended_flights(
        source.strip(),
        destination.strip(),
        departure_date.strip(),
        optional_text(return_date),
        api_key=request.app.state.settings.serpapi_key,
    )
    return recs.to_dict()
