# ai/fallback.py
# ------------------------------------------------------------------------------
# Hand-written itineraries served when Gemini is not configured or its answer
# cannot be parsed. Nothing here touches the network and nothing here raises.
# ------------------------------------------------------------------------------
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from core.models import Activity, Day, Itinerary, TimeBlock, TripRequest

MORNING_TIME = "9:00 AM - 12:00 PM"
AFTERNOON_TIME = "2:00 PM - 5:00 PM"
EVENING_TIME = "7:00 PM - 10:00 PM"

# (title, description, location)
Slot = Tuple[str, str, str]


@dataclass(frozen=True)
class DestinationGuide:
    """
    Curated content for one destination. The three day-specific entries of
    every list cover days 1-3; `extra_*` is reused for every later day.
    """
    name: str
    keywords: Tuple[str, ...]
    day_titles: Tuple[str, str, str]
    morning: Tuple[Slot, Slot, Slot]
    afternoon: Tuple[Slot, Slot, Slot]
    evening: Tuple[Slot, Slot, Slot]
    extra_morning: Slot
    extra_afternoon: Slot
    extra_evening: Slot
    tips: Tuple[str, ...]
    must_see_locations: Tuple[str, ...]
    food_recommendations: Tuple[str, ...]

    def matches(self, destination: str) -> bool:
        lowered = destination.lower()
        return any(k in lowered for k in self.keywords)


# ──────────────────────────────────────────────────────────────────────────────
# Curated destinations
# ──────────────────────────────────────────────────────────────────────────────
PARIS = DestinationGuide(
    name="Paris",
    keywords=("paris", "france"),
    day_titles=("Welcome to Paris", "Art and Culture", "Parisian Lifestyle"),
    morning=(
        ("Eiffel Tower Visit",
         "Experience the iconic symbol of Paris with breathtaking views of the city.",
         "Champ de Mars, 5 Avenue Anatole France"),
        ("Louvre Museum",
         "See the Mona Lisa and thousands of other masterpieces in the former royal palace.",
         "Rue de Rivoli, 75001 Paris"),
        ("Montmartre Walk",
         "Wander the hilltop village of painters up to the Sacré-Cœur basilica.",
         "Montmartre, 75018 Paris"),
    ),
    afternoon=(
        ("Seine River Cruise",
         "Enjoy Paris from a different perspective with a scenic river cruise.",
         "Seine River, Departure near Eiffel Tower"),
        ("Notre-Dame Cathedral",
         "Admire the Gothic facade and stroll around the Île de la Cité.",
         "6 Parvis Notre-Dame - Pl. Jean-Paul II, 75004"),
        ("Luxembourg Gardens",
         "Relax among fountains and statues in the city's favourite park.",
         "6e Arrondissement, 75006 Paris"),
    ),
    evening=(
        ("Dinner at Montparnasse",
         "Enjoy authentic French cuisine in a classic brasserie.",
         "Avenue du Maine, 75015 Paris"),
        ("Evening at Moulin Rouge",
         "Catch the legendary cabaret show in Pigalle.",
         "82 Boulevard de Clichy, 75018 Paris"),
        ("Fine Dining Experience",
         "Treat yourself to a tasting menu in one of the Marais' bistros.",
         "Le Marais district"),
    ),
    extra_morning=("Café and Croissants",
                   "Start the day like a Parisian at a neighbourhood café.",
                   "Local Parisian Café"),
    extra_afternoon=("Shopping at Champs-Élysées",
                     "Browse flagship stores on the way up to the Arc de Triomphe.",
                     "Avenue des Champs-Élysées, 75008 Paris"),
    extra_evening=("Parisian Night Walk",
                   "Follow the illuminated quays and bridges after dark.",
                   "Along the Seine River"),
    tips=(
        "Learn a few basic French phrases - locals appreciate the effort",
        "Many museums are free on the first Sunday of each month",
        "The Paris Museum Pass can save you money if you plan to visit multiple sites",
        "Be aware of pickpockets, especially in crowded tourist areas",
        "Restaurants often have fixed price menus (prix fixe) which offer good value",
        "Consider buying a carnet of 10 metro tickets to save money on transportation",
    ),
    must_see_locations=(
        "Eiffel Tower - Iconic symbol of Paris",
        "Louvre Museum - Home to thousands of works of art, including the Mona Lisa",
        "Notre-Dame Cathedral - Masterpiece of French Gothic architecture",
        "Champs-Élysées and Arc de Triomphe - Famous avenue and monument",
        "Montmartre and Sacré-Cœur - Artistic neighborhood with stunning basilica",
    ),
    food_recommendations=(
        "Croissants and Pain au Chocolat - Must try from a local bakery",
        "Boeuf Bourguignon - Classic French beef stew",
        "Escargot - Snails prepared with garlic and butter",
        "Macarons - Try these colorful confections from Ladurée or Pierre Hermé",
        "Cheese and Wine - Experience a traditional French cheese board with local wine",
    ),
)

NEW_YORK = DestinationGuide(
    name="NYC",
    keywords=("new york", "nyc"),
    day_titles=("Manhattan Highlights", "Arts and Culture", "New York Neighborhoods"),
    morning=(
        ("Empire State Building",
         "Experience panoramic views from one of New York's most iconic buildings.",
         "350 Fifth Avenue, Manhattan"),
        ("Metropolitan Museum of Art",
         "Spend the morning among five thousand years of art.",
         "1000 Fifth Avenue, Manhattan"),
        ("Brooklyn Bridge Walk",
         "Cross the East River on foot for skyline views.",
         "Brooklyn Bridge, Start at City Hall Park"),
    ),
    afternoon=(
        ("Central Park Exploration",
         "Enjoy the green heart of Manhattan with various attractions inside the park.",
         "Central Park, Manhattan"),
        ("American Museum of Natural History",
         "Dinosaurs, dioramas and the planetarium across from the park.",
         "200 Central Park West, Manhattan"),
        ("High Line and Chelsea Market",
         "Walk the elevated park and graze through the food hall below.",
         "The High Line, Start at Gansevoort Street"),
    ),
    evening=(
        ("Times Square Night Experience",
         "Be dazzled by the bright lights and energy of Times Square at night.",
         "Times Square, Manhattan"),
        ("Broadway Show",
         "See a musical in the Theatre District.",
         "Broadway Theatre District, Manhattan"),
        ("Dinner in Little Italy",
         "Pasta and cannoli along Mulberry Street.",
         "Little Italy, Manhattan"),
    ),
    extra_morning=("New York Bagels and Coffee",
                   "Grab a bagel and coffee like a local before heading out.",
                   "Local NYC Café"),
    extra_afternoon=("Shopping in SoHo",
                     "Boutiques and cast-iron architecture on cobbled streets.",
                     "SoHo, Manhattan"),
    extra_evening=("Rooftop Bar Experience",
                   "End the day with a drink above the skyline.",
                   "Manhattan Rooftop Bar"),
    tips=(
        "Purchase a MetroCard for unlimited subway and bus trips during your stay",
        "Many museums have 'pay what you wish' times - check their websites",
        "Consider the New York CityPASS if you plan to visit multiple attractions",
        "Comfortable walking shoes are essential - New Yorkers walk everywhere",
        "Tipping 15-20% is customary in restaurants",
        "Take advantage of free Staten Island Ferry for views of the Statue of Liberty",
    ),
    must_see_locations=(
        "Empire State Building - Iconic Art Deco skyscraper with observation deck",
        "Central Park - Urban oasis with walking paths, lakes, and attractions",
        "Statue of Liberty and Ellis Island - Symbols of American freedom and immigration",
        "Times Square - The bright and bustling heart of Manhattan",
        "Metropolitan Museum of Art - One of the world's largest and finest art museums",
    ),
    food_recommendations=(
        "New York Pizza - Fold it like a local when eating a slice",
        "Bagel with Lox and Cream Cheese - Breakfast classic",
        "Pastrami on Rye from a classic deli like Katz's",
        "Food cart hot dogs and pretzels - Street food staples",
        "Cheesecake from Junior's or another famous bakery",
    ),
)

CURATED_GUIDES: Sequence[DestinationGuide] = (PARIS, NEW_YORK)

# ──────────────────────────────────────────────────────────────────────────────
# Generic content (any destination)
# ──────────────────────────────────────────────────────────────────────────────
_GENERIC_MORNING: Tuple[Slot, ...] = (
    ("City Introduction Tour",
     "Start your trip with an overview of the main attractions and history.", "City Center"),
    ("Local Museum Visit",
     "Learn about the region's history and culture.", "National Museum"),
    ("Landmark Exploration",
     "Visit the landmark the destination is best known for.", "Famous Landmark"),
    ("Morning Cultural Activity",
     "Discover a neighbourhood off the main tourist trail.", "Cultural District"),
)
_GENERIC_AFTERNOON: Tuple[Slot, ...] = (
    ("Local Market Visit",
     "Experience local life and cuisine at the central market.", "Central Market"),
    ("Park and Gardens",
     "Slow down in the city's green spaces.", "City Park"),
    ("Shopping District",
     "Pick up souvenirs and local crafts.", "Shopping Area"),
    ("Afternoon Leisure",
     "Free time to revisit a favourite spot.", "Leisure District"),
)
_GENERIC_EVENING: Tuple[Slot, ...] = (
    ("Welcome Dinner",
     "Enjoy authentic local cuisine in a traditional setting.", "Restaurant District"),
    ("Cultural Performance",
     "Catch a show featuring local music or dance.", "Cultural Center"),
    ("Local Cuisine Experience",
     "Try the regional specialities at a well-known table.", "Famous Restaurant"),
    ("Evening Entertainment",
     "See how the city comes alive at night.", "Entertainment District"),
)

GENERIC_TIPS = (
    "Research local customs before your trip",
    "Learn a few basic phrases in the local language",
    "Check if your destination requires special travel insurance",
    "Keep a copy of important documents separate from originals",
    "Try to explore beyond just the tourist areas",
    "Use public transportation when possible to experience local life",
)
GENERIC_LOCATIONS = (
    "Historical City Center",
    "National Museum",
    "Local Market",
    "Famous Religious Site",
    "Natural Landmark",
)
GENERIC_FOOD = (
    "National signature dish",
    "Local street food specialty",
    "Regional dessert",
    "Traditional beverage",
    "Famous restaurant dish",
)

# Used when Gemini answered but the JSON could not be read
_PARSE_FALLBACK_TIPS = (
    "Research local customs before your trip",
    "Keep important documents in a safe place",
    "Try to learn a few phrases in the local language",
    "Check the weather forecast before packing",
    "Notify your bank about your travel plans",
)
_PARSE_FALLBACK_LOCATIONS = (
    "Main city square",
    "Local museum",
    "Historical landmark",
    "Popular viewpoint",
    "Local market",
)
_PARSE_FALLBACK_FOOD = (
    "Local specialty dish",
    "Traditional dessert",
    "Popular street food",
    "Regional beverage",
    "Famous restaurant dish",
)


# ──────────────────────────────────────────────────────────────────────────────
# Builders
# ──────────────────────────────────────────────────────────────────────────────
def _block(slot: Slot, time: str) -> TimeBlock:
    title, description, location = slot
    return TimeBlock(activities=[Activity(title, description, location, time)])


def _pick(slots: Sequence[Slot], index: int, extra: Slot) -> Slot:
    return slots[index] if index < len(slots) else extra


def _curated_day(guide: DestinationGuide, i: int) -> Day:
    title = guide.day_titles[i] if i < len(guide.day_titles) else f"Exploring {guide.name}"
    return Day(
        title=f"Day {i + 1} - {title}",
        morning=_block(_pick(guide.morning, i, guide.extra_morning), MORNING_TIME),
        afternoon=_block(_pick(guide.afternoon, i, guide.extra_afternoon), AFTERNOON_TIME),
        evening=_block(_pick(guide.evening, i, guide.extra_evening), EVENING_TIME),
    )


def _generic_day(destination: str, i: int) -> Day:
    last = len(_GENERIC_MORNING) - 1
    return Day(
        title=f"Day {i + 1} - {destination} Exploration",
        morning=_block(_GENERIC_MORNING[min(i, last)], MORNING_TIME),
        afternoon=_block(_GENERIC_AFTERNOON[min(i, last)], AFTERNOON_TIME),
        evening=_block(_GENERIC_EVENING[min(i, last)], EVENING_TIME),
    )


def find_guide(destination: str) -> Optional[DestinationGuide]:
    """First curated guide whose keywords appear in `destination` (case-insensitive)."""
    for guide in CURATED_GUIDES:
        if guide.matches(destination or ""):
            return guide
    return None


def create_demo_itinerary(req: TripRequest) -> Itinerary:
    """Destination-aware itinerary used when no Gemini key is configured."""
    return build_destination_itinerary(req.destination, req.duration_days())


def build_destination_itinerary(destination: str, num_days: int) -> Itinerary:
    days_range = range(max(num_days, 0))
    guide = find_guide(destination)
    if guide is not None:
        return Itinerary(
            days=[_curated_day(guide, i) for i in days_range],
            tips=list(guide.tips),
            must_see_locations=list(guide.must_see_locations),
            food_recommendations=list(guide.food_recommendations),
        )
    return Itinerary(
        days=[_generic_day(destination, i) for i in days_range],
        tips=list(GENERIC_TIPS),
        must_see_locations=list(GENERIC_LOCATIONS),
        food_recommendations=list(GENERIC_FOOD),
    )


def create_fallback_itinerary(num_days: int) -> Itinerary:
    """Destination-agnostic itinerary used when Gemini's answer is unreadable."""
    days: List[Day] = [
        Day(
            title=f"Day {i + 1} - Exploration",
            morning=_block(
                ("Breakfast & Planning",
                 "Start your day with a local breakfast and plan the day's adventures.",
                 "Hotel/Accommodation"),
                "8:00 AM - 10:00 AM",
            ),
            afternoon=_block(
                ("Sightseeing", "Explore the main attractions of the destination.", "City Center"),
                "12:00 PM - 4:00 PM",
            ),
            evening=_block(
                ("Dinner Experience", "Enjoy local cuisine for dinner.", "Local Restaurant"),
                "7:00 PM - 9:00 PM",
            ),
        )
        for i in range(max(num_days, 0))
    ]
    return Itinerary(
        days=days,
        tips=list(_PARSE_FALLBACK_TIPS),
        must_see_locations=list(_PARSE_FALLBACK_LOCATIONS),
        food_recommendations=list(_PARSE_FALLBACK_FOOD),
    )


def fill_empty_lists(itinerary: Itinerary) -> Itinerary:
    """Top up tips, locations and food lists the model left empty."""
    if not itinerary.tips:
        itinerary.tips = list(_PARSE_FALLBACK_TIPS)
    if not itinerary.must_see_locations:
        itinerary.must_see_locations = list(_PARSE_FALLBACK_LOCATIONS)
    if not itinerary.food_recommendations:
        itinerary.food_recommendations = list(_PARSE_FALLBACK_FOOD)
    return itinerary
