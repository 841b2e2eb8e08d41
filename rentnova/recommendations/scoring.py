from __future__ import annotations

import math

from .models import Property, RecommendationScore, UserPreferences

BUDGET_POINTS = 25
BUDGET_STRETCH_POINTS = 15
BUDGET_STRETCH_FACTOR = 1.1
LOCATION_POINTS = 20
TYPE_POINTS = 15
BEDROOM_POINTS = 15
BEDROOM_CLOSE_POINTS = 8
AMENITY_POINTS = 15
LIFESTYLE_POINTS = 10

# lifestyle -> (predicate, reason)
_LIFESTYLE_RULES = {
    "luxury": (lambda p: p.property_type == "penthouse", "Matches luxury lifestyle"),
    "minimalist": (lambda p: p.property_type == "studio", "Perfect for minimalist lifestyle"),
    "family": (lambda p: p.bedroom_count >= 3, "Great for family living"),
}


def location_matches(prop: Property, locations: list[str]) -> bool:
    """True if any preferred location is a case-insensitive substring of city or state."""
    city = (prop.city or "").lower()
    state = (prop.state or "").lower()
    for loc in locations:
        needle = loc.lower()
        if needle in city or needle in state:
            return True
    return False


def _amenity_score(prop: Property, wanted: list[str]) -> tuple[float, int]:
    if not wanted:
        return 0.0, 0
    amenities = prop.amenity_set()
    matched = sum(
        1 for pref in wanted if any(pref.lower() in amenity for amenity in amenities)
    )
    return min(float(AMENITY_POINTS), matched / len(wanted) * AMENITY_POINTS), matched


def match_percentage(score: float) -> int:
    # Half-up rounding, so 32.5 displays as 33.
    return int(math.floor(score + 0.5))


def score_property(prop: Property, preferences: UserPreferences) -> RecommendationScore:
    """Score how well ``prop`` fits ``preferences`` on a nominal 0-100 scale.

    The factor weights sum to 100, so a perfect match scores exactly 100.
    The result is not clamped.
    """
    score = 0.0
    reasons: list[str] = []
    budget = preferences.budget

    if budget.min <= prop.price <= budget.max:
        score += BUDGET_POINTS
        reasons.append("Within your budget range")
    elif prop.price < budget.max * BUDGET_STRETCH_FACTOR:
        score += BUDGET_STRETCH_POINTS
        reasons.append("Slightly above budget but good value")

    if location_matches(prop, preferences.location):
        score += LOCATION_POINTS
        reasons.append("In your preferred location")

    if prop.property_type in preferences.property_types:
        score += TYPE_POINTS
        reasons.append(f"Matches your {prop.property_type} preference")

    bedroom_gap = abs(prop.bedroom_count - preferences.bedrooms)
    if bedroom_gap == 0:
        score += BEDROOM_POINTS
        reasons.append("Perfect bedroom count match")
    elif bedroom_gap == 1:
        score += BEDROOM_CLOSE_POINTS
        reasons.append("Close to ideal bedroom count")

    amenity_points, matched = _amenity_score(prop, preferences.amenity_preferences)
    if matched > 0:
        score += amenity_points
        reasons.append(f"Has {matched} of your preferred amenities")

    rule = _LIFESTYLE_RULES.get(preferences.lifestyle)
    if rule is not None and rule[0](prop):
        score += LIFESTYLE_POINTS
        reasons.append(rule[1])

    return RecommendationScore(
        property_id=prop.id,
        score=score,
        reasons=reasons,
        match_percentage=match_percentage(score),
    )
