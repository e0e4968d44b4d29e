# app.py

import datetime
import logging

import pandas as pd
import streamlit as st

from ai import gemini
from core.config import load_settings
from core.errors import ProviderError, ValidationError
from core.formatting import CURRENCY_SYMBOLS, currency_symbol, format_date_range, format_duration
from core.validation import normalize_request
from services import flights as fsvc

settings = load_settings()
logging.basicConfig(level=settings.log_level)

INTERESTS = {
    "food": "🍽️ Food & Culinary",
    "culture": "🏛️ Culture & History",
    "adventure": "🏞️ Adventure & Outdoors",
    "relaxation": "🧘 Relaxation & Wellness",
    "nightlife": "🎭 Nightlife",
    "shopping": "🛍️ Shopping",
    "family": "👨‍👩‍👧‍👦 Family-friendly",
    "art": "🎨 Art & Museums",
    "wildlife": "🦁 Wildlife & Nature",
    "photography": "📸 Photography",
    "architecture": "🏙️ Architecture",
    "beaches": "🏖️ Beaches",
}


@st.cache_resource
def _client():
    return gemini.GeminiClient.from_settings(settings)


# ──────────────────────────────────────────────────────────────────────────────
# 0. Streamlit configuration
# ──────────────────────────────────────────────────────────────────────────────
st.set_page_config(page_title="AI Travel Planner", layout="wide")

defaults = {
    "itinerary": None,       # Itinerary.to_dict()
    "flights": None,         # FlightRecommendations.to_dict()
    "trip": None,            # normalised TripRequest
    "error_message": "",
    "last_payload": None,    # kept for the retry button
}
for k, v in defaults.items():
    st.session_state.setdefault(k, v)


def _plan(payload: dict) -> None:
    st.session_state.last_payload = payload
    try:
        req = normalize_request(payload)
    except ValidationError as e:
        st.session_state.error_message = f"🛑 {e}"
        return
    try:
        with st.spinner("🤖 Generating itinerary…"):
            itin = gemini.generate_itinerary(req, _client())
    except ProviderError as e:
        st.session_state.error_message = f"⚠️ Could not generate the itinerary: {e}"
        st.session_state.itinerary = None
        return
    with st.spinner("✈️ Looking for flights…"):
        recs = fsvc.get_recommended_flights(
            req.source, req.destination, req.start_date.isoformat(), req.end_date.isoformat(),
            api_key=settings.serpapi_key,
        )
    st.session_state.error_message = ""
    st.session_state.trip = req
    st.session_state.itinerary = itin.to_dict()
    st.session_state.flights = recs.to_dict()


# ──────────────────────────────────────────────────────────────────────────────
# 1. Input form
# ──────────────────────────────────────────────────────────────────────────────
with st.form("travel_form"):
    st.markdown("## 🧭 AI Travel Planner")
    c1, c2 = st.columns(2)
    source_input = c1.text_input("From", "New York (JFK)")
    destination_input = c2.text_input("To", "Paris, France")
    today = datetime.date.today()
    start_input = c1.date_input("Start date", today + datetime.timedelta(days=30))
    end_input = c2.date_input("End date", today + datetime.timedelta(days=32))
    budget_input = c1.number_input("Total budget", min_value=1, value=1500, step=50)
    currency_input = c2.selectbox("Currency", list(CURRENCY_SYMBOLS))
    travelers_input = c1.number_input("Travelers", min_value=1, max_value=20, value=2)
    interests_input = c2.multiselect(
        "Interests", list(INTERESTS), default=["culture", "food"], format_func=INTERESTS.get
    )
    notes_input = st.text_area("Additional notes (optional)")
    submitted = st.form_submit_button("Generate plan")

if submitted:
    _plan({
        "source": source_input,
        "destination": destination_input,
        "startDate": start_input.isoformat(),
        "endDate": end_input.isoformat(),
        "budget": budget_input,
        "currency": currency_input,
        "travelers": travelers_input,
        "interests": interests_input,
        "additionalNotes": notes_input,
    })

# ──────────────────────────────────────────────────────────────────────────────
# 2. Errors (with retry)
# ──────────────────────────────────────────────────────────────────────────────
if st.session_state.error_message:
    st.error(st.session_state.error_message)
    if st.session_state.last_payload and st.button("🔁 Try again"):
        _plan(st.session_state.last_payload)
        st.rerun()

# ──────────────────────────────────────────────────────────────────────────────
# 3. Itinerary
# ──────────────────────────────────────────────────────────────────────────────
if st.session_state.itinerary and not st.session_state.error_message:
    trip = st.session_state.trip
    data = st.session_state.itinerary
    sym = currency_symbol(trip.currency)

    st.subheader(f"🗓️ {trip.destination}")
    st.write(
        f"{format_date_range(trip.start_date, trip.end_date)} · {trip.duration_days()} days · "
        f"{trip.travelers} traveler(s) · budget {sym}{trip.budget}"
    )

    tab_days, tab_info, tab_flights = st.tabs(["Itinerary", "Tips & food", "Flights"])

    with tab_days:
        for i, day in enumerate(data["days"]):
            with st.expander(day["title"], expanded=(i == 0)):
                for part in ("morning", "afternoon", "evening"):
                    acts = day[part]["activities"]
                    if not acts:
                        continue
                    st.markdown(f"**{part.capitalize()}**")
                    for a in acts:
                        meta = " · ".join(x for x in (a.get("time"), a.get("location")) if x)
                        st.markdown(f"- **{a['title']}** - {a['description']}" + (f"  \n  _{meta}_" if meta else ""))

    with tab_info:
        c1, c2, c3 = st.columns(3)
        c1.markdown("#### 💡 Tips")
        c1.markdown("\n".join(f"- {t}" for t in data["tips"]))
        c2.markdown("#### 📍 Must see")
        c2.markdown("\n".join(f"- {l}" for l in data["mustSeeLocations"]))
        c3.markdown("#### 🍴 Food")
        c3.markdown("\n".join(f"- {f}" for f in data["foodRecommendations"]))

    with tab_flights:
        recs = st.session_state.flights or {"flights": []}
        rows = [
            {
                "Price (USD)": opt["price"],
                "Duration": format_duration(opt["totalDuration"]),
                "Stops": len(opt["layovers"]),
                "Airlines": ", ".join(s["airline"] for s in opt["flights"]),
                "Flights": ", ".join(s["flightNumber"] for s in opt["flights"]),
                "Departs": opt["flights"][0]["departureAirport"]["localTime"] if opt["flights"] else "",
                "Arrives": opt["flights"][-1]["arrivalAirport"]["localTime"] if opt["flights"] else "",
            }
            for opt in recs["flights"]
        ]
        st.dataframe(pd.DataFrame(rows), hide_index=True, use_container_width=True)
        insights = recs.get("priceInsights") or {}
        if "lowestPrice" in insights or "lowest_price" in insights:
            st.caption(f"Lowest price seen: ${insights.get('lowestPrice', insights.get('lowest_price'))}")
