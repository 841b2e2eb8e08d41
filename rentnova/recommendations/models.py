from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

WorkStyle = Literal["remote", "office", "hybrid", "student"]


class _Record(BaseModel):
    """Base for records shared with the listings store (camelCase on the wire)."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class Property(_Record):
    id: str
    property_title: str | None = None
    price: float = Field(default=0, ge=0)
    property_type: str = ""
    bedroom_count: int = Field(default=0, ge=0)
    address: str | None = None
    city: str | None = None
    state: str | None = None
    country: str | None = None
    building_amenities: list[str] | None = None
    utilities: list[str] | None = None
    furnishings: list[str] | None = None

    def amenity_set(self) -> set[str]:
        """Lower-cased union of building amenities, utilities and furnishings."""
        items = [
            *(self.building_amenities or []),
            *(self.utilities or []),
            *(self.furnishings or []),
        ]
        return {a.lower() for a in items}


class Budget(_Record):
    min: float = 0
    max: float = 5_000_000

    @model_validator(mode="after")
    def _check_range(self) -> Budget:
        if self.min > self.max:
            raise ValueError(f"budget min ({self.min}) must not exceed max ({self.max})")
        return self


class UserPreferences(_Record):
    budget: Budget = Field(default_factory=Budget)
    location: list[str] = Field(default_factory=list)
    property_types: list[str] = Field(default_factory=list)
    bedrooms: int = Field(default=2, ge=0)
    lifestyle: str = "modern"
    work_style: WorkStyle = "hybrid"
    family_size: int = Field(default=1, ge=0)
    pet_owner: bool = False
    commute_priority: bool = False
    amenity_preferences: list[str] = Field(default_factory=list)
    move_in_timeframe: str = "1-3 months"


class PartialPreferences(_Record):
    """Preset-driven subset of preferences; ``None`` disables a predicate."""

    budget: Budget | None = None
    location: list[str] | None = None
    property_types: list[str] | None = None
    bedrooms: int | None = Field(default=None, ge=0)
    lifestyle: str | None = None
    work_style: WorkStyle | None = None
    amenity_preferences: list[str] | None = None


class RecommendationScore(_Record):
    property_id: str
    score: float
    reasons: list[str] = Field(default_factory=list)
    match_percentage: int


class ScoredProperty(_Record):
    property: Property
    score: RecommendationScore


class RecommendationResult(_Record):
    recommendations: list[ScoredProperty]
    summary: str
    cached: bool = False


class LocationMatch(_Record):
    match_type: Literal["exact", "high", "partial", "similar"]
    score: int
    label: str


# ── API request / response bodies ────────────────────────────────────────


class RecommendationRequest(_Record):
    properties: list[Property] = Field(default_factory=list)
    preferences: UserPreferences
    use_ai: bool = False


class ScoreRequest(_Record):
    property: Property
    preferences: UserPreferences


class QuickMatchRequest(_Record):
    properties: list[Property] = Field(default_factory=list)
    preferences: PartialPreferences = Field(default_factory=PartialPreferences)
    limit: int = Field(default=20, ge=1, le=20)


class QuickMatchResponse(_Record):
    properties: list[Property]


class LocationSearchRequest(_Record):
    properties: list[Property] = Field(default_factory=list)
    location: str | None = None
    min_price: float | None = Field(default=None, ge=0)
    max_price: float | None = Field(default=None, ge=0)
    min_bedrooms: int | None = Field(default=None, ge=0)


class LocationSearchItem(_Record):
    property: Property
    relevance: int
    match: LocationMatch | None = None


class LocationSearchResponse(_Record):
    results: list[LocationSearchItem]
    total: int
