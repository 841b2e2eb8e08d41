from __future__ import annotations

import pytest
from pydantic import ValidationError

from rentnova.recommendations.models import Budget, Property, UserPreferences
from rentnova.recommendations.scoring import match_percentage, score_property


def _prop(**kwargs) -> Property:
    data = {"id": "p1", "price": 0, "property_type": "house", "bedroom_count": 0}
    data.update(kwargs)
    return Property(**data)


def _prefs(**kwargs) -> UserPreferences:
    data = {
        "budget": {"min": 150000, "max": 250000},
        "location": [],
        "property_types": [],
        "bedrooms": 10,
        "lifestyle": "modern",
        "amenity_preferences": [],
    }
    data.update(kwargs)
    return UserPreferences(**data)


# ── Budget ───────────────────────────────────────────────────────────────


def test_price_within_budget():
    result = score_property(_prop(price=200000), _prefs())
    assert result.score == 25
    assert result.reasons == ["Within your budget range"]


def test_price_slightly_above_budget():
    result = score_property(_prop(price=260000), _prefs())
    assert result.score == 15
    assert result.reasons == ["Slightly above budget but good value"]


def test_price_well_above_budget_scores_nothing():
    # 280000 is not below 250000 * 1.1
    result = score_property(_prop(price=280000), _prefs())
    assert result.score == 0
    assert result.reasons == []


def test_price_below_min_takes_stretch_branch():
    result = score_property(_prop(price=100000), _prefs())
    assert result.score == 15
    assert result.reasons == ["Slightly above budget but good value"]


# ── Location / type ──────────────────────────────────────────────────────


def test_location_matches_city_case_insensitively():
    result = score_property(
        _prop(price=999999, city="San Francisco", state="CA"),
        _prefs(location=["francisco"]),
    )
    assert result.score == 20
    assert result.reasons == ["In your preferred location"]


def test_location_matches_state():
    result = score_property(
        _prop(price=999999, city="Austin", state="Texas"),
        _prefs(location=["Seattle", "TEXAS"]),
    )
    assert "In your preferred location" in result.reasons


def test_location_ignores_address_and_country():
    result = score_property(
        _prop(price=999999, address="1 Austin Road", city="Dallas", country="Austin"),
        _prefs(location=["austin"]),
    )
    assert result.score == 0


def test_property_type_reason_names_the_type():
    result = score_property(
        _prop(price=999999, property_type="condo"),
        _prefs(property_types=["apartment", "condo"]),
    )
    assert result.score == 15
    assert result.reasons == ["Matches your condo preference"]


# ── Bedrooms ─────────────────────────────────────────────────────────────


@pytest.mark.parametrize(
    ("bedrooms", "points", "reasons"),
    [
        (3, 15, ["Perfect bedroom count match"]),
        (2, 8, ["Close to ideal bedroom count"]),
        (4, 8, ["Close to ideal bedroom count"]),
        (5, 0, []),
    ],
)
def test_bedroom_count(bedrooms, points, reasons):
    result = score_property(_prop(price=999999, bedroom_count=bedrooms), _prefs(bedrooms=3))
    assert result.score == points
    assert result.reasons == reasons


# ── Amenities ────────────────────────────────────────────────────────────


def test_no_amenity_preferences_contributes_nothing():
    result = score_property(
        _prop(price=999999, building_amenities=["Pool", "Gym"]),
        _prefs(amenity_preferences=[]),
    )
    assert result.score == 0
    assert result.reasons == []


def test_amenities_match_by_substring_across_lists():
    prop = _prop(
        price=999999,
        building_amenities=["Swimming Pool"],
        utilities=["High-speed WiFi"],
        furnishings=None,
    )
    result = score_property(prop, _prefs(amenity_preferences=["wifi", "pool", "gym"]))
    assert result.score == pytest.approx(10.0)
    assert result.reasons == ["Has 2 of your preferred amenities"]


def test_all_amenities_matched_caps_at_fifteen():
    prop = _prop(price=999999, furnishings=["Sofa", "Bed"])
    result = score_property(prop, _prefs(amenity_preferences=["sofa", "bed"]))
    assert result.score == 15


def test_missing_amenity_lists_are_empty():
    result = score_property(_prop(price=999999), _prefs(amenity_preferences=["pool"]))
    assert result.score == 0


# ── Lifestyle ────────────────────────────────────────────────────────────


@pytest.mark.parametrize(
    ("lifestyle", "prop_kwargs", "reason"),
    [
        ("luxury", {"property_type": "penthouse"}, "Matches luxury lifestyle"),
        ("minimalist", {"property_type": "studio"}, "Perfect for minimalist lifestyle"),
        ("family", {"bedroom_count": 4}, "Great for family living"),
    ],
)
def test_lifestyle_bonus(lifestyle, prop_kwargs, reason):
    result = score_property(_prop(price=999999, **prop_kwargs), _prefs(lifestyle=lifestyle))
    assert result.score == 10
    assert result.reasons == [reason]


def test_lifestyle_without_matching_property():
    result = score_property(
        _prop(price=999999, property_type="house"), _prefs(lifestyle="luxury")
    )
    assert result.score == 0


# ── Totals ───────────────────────────────────────────────────────────────


def test_reasons_follow_evaluation_order():
    prop = _prop(
        price=200000,
        city="Austin",
        property_type="apartment",
        bedroom_count=2,
        building_amenities=["Gym"],
    )
    prefs = _prefs(
        location=["austin"],
        property_types=["apartment"],
        bedrooms=3,
        amenity_preferences=["gym"],
        lifestyle="minimalist",
    )
    assert score_property(prop, prefs).reasons == [
        "Within your budget range",
        "In your preferred location",
        "Matches your apartment preference",
        "Close to ideal bedroom count",
        "Has 1 of your preferred amenities",
    ]


def test_perfect_luxury_match_scores_one_hundred():
    prop = _prop(
        id="ph-1",
        price=200000,
        city="Miami",
        state="Florida",
        property_type="penthouse",
        bedroom_count=3,
        building_amenities=["Pool", "Concierge"],
    )
    prefs = _prefs(
        location=["miami"],
        property_types=["penthouse"],
        bedrooms=3,
        amenity_preferences=["pool", "concierge"],
        lifestyle="luxury",
    )
    result = score_property(prop, prefs)
    assert result.property_id == "ph-1"
    assert result.score == 100
    assert result.match_percentage == 100
    assert len(result.reasons) == 6


def test_match_percentage_rounds_half_up():
    prop = _prop(price=999999, building_amenities=["Gym"])
    result = score_property(prop, _prefs(amenity_preferences=["gym", "pool"]))
    assert result.score == pytest.approx(7.5)
    assert result.match_percentage == 8
    assert match_percentage(32.4) == 32


def test_scoring_is_deterministic_and_non_negative():
    prop = _prop(price=210000, city="Austin", bedroom_count=2, utilities=["Water"])
    prefs = _prefs(location=["austin"], amenity_preferences=["water", "gas"])
    first = score_property(prop, prefs)
    second = score_property(prop.model_copy(), prefs.model_copy(deep=True))
    assert first == second
    assert first.score >= 0


def test_camel_case_records_are_accepted():
    prop = Property(
        id="x",
        price=1200,
        propertyType="studio",
        bedroomCount=1,
        buildingAmenities=["Laundry"],
        ownerId="ignored",
    )
    prefs = UserPreferences(
        budget={"min": 1000, "max": 1500},
        propertyTypes=["studio"],
        bedrooms=1,
        amenityPreferences=["laundry"],
    )
    result = score_property(prop, prefs)
    assert result.score == 25 + 15 + 15 + 15


def test_budget_min_above_max_is_rejected():
    with pytest.raises(ValidationError):
        UserPreferences(budget={"min": 5000, "max": 1000})
    with pytest.raises(ValidationError):
        Budget(min=2, max=1)
