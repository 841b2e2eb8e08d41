from __future__ import annotations

from fastapi import FastAPI, HTTPException

from .analytics.aggregator import compute_analytics
from .analytics.store import get_events
from .recommendations.engine import get_engine, quick_matches
from .recommendations.models import (
    LocationSearchItem,
    LocationSearchRequest,
    LocationSearchResponse,
    QuickMatchRequest,
    QuickMatchResponse,
    RecommendationRequest,
    RecommendationResult,
    RecommendationScore,
    ScoreRequest,
)
from .recommendations.presets import RECOMMENDATION_PRESETS, get_preset
from .recommendations.relevance import (
    classify_location_match,
    relevance,
    search_by_location,
)
from .recommendations.scoring import score_property

app = FastAPI(title="RentNova Recommendation API", version="1.0.0")


# ── Health ───────────────────────────────────────────────────────────────


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


# ── Recommendations ──────────────────────────────────────────────────────


@app.post("/recommendations", response_model=RecommendationResult)
def recommendations(body: RecommendationRequest) -> RecommendationResult:
    return get_engine().get_recommendations(body.properties, body.preferences, body.use_ai)


@app.post("/recommendations/score", response_model=RecommendationScore)
def score(body: ScoreRequest) -> RecommendationScore:
    return score_property(body.property, body.preferences)


@app.post("/recommendations/quick", response_model=QuickMatchResponse)
def quick(body: QuickMatchRequest) -> QuickMatchResponse:
    return QuickMatchResponse(
        properties=quick_matches(body.properties, body.preferences, body.limit)
    )


# ── Location search ──────────────────────────────────────────────────────


@app.post("/properties/search", response_model=LocationSearchResponse)
def search(body: LocationSearchRequest) -> LocationSearchResponse:
    found = search_by_location(
        body.properties,
        location=body.location,
        min_price=body.min_price,
        max_price=body.max_price,
        min_bedrooms=body.min_bedrooms,
    )
    term = (body.location or "").strip()
    items = [
        LocationSearchItem(
            property=p,
            relevance=relevance(p, term) if term else 0,
            match=classify_location_match(p, term),
        )
        for p in found
    ]
    return LocationSearchResponse(results=items, total=len(items))


# ── Presets ──────────────────────────────────────────────────────────────


@app.get("/presets")
def presets() -> dict:
    return {"presets": {name: get_preset(name) for name in RECOMMENDATION_PRESETS}}


@app.get("/presets/{name}")
def preset(name: str) -> dict:
    try:
        return get_preset(name)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Unknown preset: {name}")


# ── Operations ───────────────────────────────────────────────────────────


@app.get("/cache/stats")
def cache_stats() -> dict:
    return get_engine().cache.stats()


@app.get("/analytics")
def analytics() -> dict:
    return compute_analytics(get_events())
