from __future__ import annotations

from typing import Any

from .models import PartialPreferences, UserPreferences

RECOMMENDATION_PRESETS: dict[str, dict[str, Any]] = {
    "student": {
        "property_types": ["apartment", "studio"],
        "amenity_preferences": ["wifi", "study area", "public transport"],
        "lifestyle": "minimalist",
        "work_style": "student",
    },
    "young_professional": {
        "property_types": ["apartment", "condo"],
        "amenity_preferences": ["gym", "wifi", "parking", "security"],
        "lifestyle": "modern",
        "work_style": "hybrid",
    },
    "family": {
        "property_types": ["house", "duplex"],
        "amenity_preferences": ["garden", "parking", "schools nearby", "playground"],
        "lifestyle": "family",
        "work_style": "office",
    },
    "luxury_seeker": {
        "property_types": ["penthouse", "luxury apartment"],
        "amenity_preferences": ["pool", "concierge", "gym", "spa", "valet"],
        "lifestyle": "luxury",
        "work_style": "remote",
    },
}


def get_preset(name: str) -> dict[str, Any]:
    """Return a copy of the named preset. Raises ``KeyError`` if unknown."""
    preset = RECOMMENDATION_PRESETS[name]
    return {k: list(v) if isinstance(v, list) else v for k, v in preset.items()}


def apply_preset(preferences: UserPreferences, name: str) -> UserPreferences:
    """Overlay a preset onto existing preferences, keeping budget, location and bedrooms."""
    return preferences.model_copy(update=get_preset(name))


def preset_quick_filter(name: str, **overrides: Any) -> PartialPreferences:
    """Partial preferences for a preset-driven quick match list.

    Only property types are used as a filter by default; lifestyle and
    amenities don't take part in quick matching.
    """
    preset = get_preset(name)
    return PartialPreferences(property_types=preset["property_types"], **overrides)
