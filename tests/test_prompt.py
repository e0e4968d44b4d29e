# tests/test_prompt.py

import dataclasses

from ai.gemini import ITINERARY_SCHEMA, build_prompt


def test_prompt_is_deterministic(paris_request):
    copy = dataclasses.replace(paris_request, interests=list(paris_request.interests))
    assert build_prompt(paris_request) == build_prompt(copy)


def test_prompt_contains_trip_details(paris_request):
    prompt = build_prompt(paris_request)
    assert "Source: New York (JFK)" in prompt
    assert "Destination: Paris, France" in prompt
    assert "Jun 1, 2024 to Jun 3, 2024 (3 days)" in prompt
    assert "Budget: USD 1500" in prompt
    assert "Number of Travelers: 2" in prompt
    assert "Interests: culture, food" in prompt


def test_prompt_embeds_schema_verbatim(paris_request):
    prompt = build_prompt(paris_request)
    assert ITINERARY_SCHEMA in prompt
    for key in ('"days"', '"morning"', '"afternoon"', '"evening"', '"activities"',
                '"mustSeeLocations"', '"foodRecommendations"', '"tips"'):
        assert key in ITINERARY_SCHEMA


def test_notes_only_when_present(paris_request):
    assert "Additional Notes" not in build_prompt(paris_request)
    with_notes = dataclasses.replace(paris_request, additional_notes="No museums on Monday")
    assert "Additional Notes: No museums on Monday" in build_prompt(with_notes)


def test_duration_is_inclusive(paris_request):
    one_day = dataclasses.replace(paris_request, end_date=paris_request.start_date)
    assert "(1 days)" in build_prompt(one_day)
