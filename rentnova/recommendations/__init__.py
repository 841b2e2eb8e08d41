"""
Property recommendation engine.

Responsibilities:
- Score a property against a renter's structured preferences (budget, location,
  type, bedrooms, amenities, lifestyle).
- Rank properties against a free-text location query.
- Filter, sort and truncate candidates, caching results for an hour.
- Optionally ask an LLM for a summary of the top matches, with a template fallback.
- Provide cheap unscored quick matches for preset-driven lists.
"""
from .engine import RecommendationEngine, get_recommendations, quick_matches
from .scoring import score_property

__all__ = [
    "RecommendationEngine",
    "get_recommendations",
    "quick_matches",
    "score_property",
]
