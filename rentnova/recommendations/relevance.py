"""
Location relevance for free-text property search.

``relevance`` is an additive heuristic: every matching rule adds its bonus and
nothing short-circuits, so a query that equals the city also collects the
startswith and contains bonuses for it. The number only means something
relative to other properties scored against the same term.

An empty term is contained in (and is a prefix of) every field, so all
containment bonuses fire for every property. ``rank_by_relevance`` keeps the
input order for blank terms instead of sorting on that.
"""
from __future__ import annotations

import logging

from .models import LocationMatch, Property

logger = logging.getLogger(__name__)

MIN_TOKEN_LENGTH = 3


def _fields(prop: Property) -> tuple[str, str, str, str]:
    return (
        (prop.address or "").lower(),
        (prop.city or "").lower(),
        (prop.state or "").lower(),
        (prop.country or "").lower(),
    )


def _normalize(term: str | None) -> str:
    return (term or "").lower().strip()


def _tokens(term: str) -> list[str]:
    return [w for w in term.split() if len(w) >= MIN_TOKEN_LENGTH]


def relevance(prop: Property, search_term: str) -> int:
    term = _normalize(search_term)
    address, city, state, country = _fields(prop)
    score = 0

    if address == term:
        score += 100
    if city == term:
        score += 90
    if state == term:
        score += 80

    if term in address:
        score += 70

    if address.startswith(term):
        score += 60
    if city.startswith(term):
        score += 50
    if state.startswith(term):
        score += 40

    if term in city:
        score += 30
    if term in state:
        score += 20
    if term in country:
        score += 10

    for word in _tokens(term):
        if word in address:
            score += 15
        if word in city:
            score += 10
        if word in state:
            score += 5

    return score


def rank_by_relevance(properties: list[Property], search_term: str | None) -> list[Property]:
    """Stable sort by descending relevance; ties keep their input order."""
    term = _normalize(search_term)
    if not term:
        return list(properties)
    return sorted(properties, key=lambda p: relevance(p, term), reverse=True)


def matches_location(prop: Property, search_term: str) -> bool:
    """Loose location filter used before ranking."""
    term = _normalize(search_term)
    fields = _fields(prop)
    if term in " ".join(fields):
        return True
    if any(term in f for f in fields):
        return True
    return any(word in f for word in _tokens(term) for f in fields)


def classify_location_match(prop: Property, search_term: str | None) -> LocationMatch | None:
    """Describe the strongest kind of location match, for result badges."""
    term = _normalize(search_term)
    if not term:
        return None
    address, city, state, _ = _fields(prop)

    if address == term:
        return LocationMatch(match_type="exact", score=100, label="Exact Address Match")
    if city == term or state == term:
        return LocationMatch(match_type="exact", score=95, label="Exact Location Match")
    if term in address:
        return LocationMatch(match_type="high", score=85, label="Address Match")
    if term in city:
        return LocationMatch(match_type="high", score=75, label="City Match")
    if term in state:
        return LocationMatch(match_type="partial", score=60, label="State Match")

    words = _tokens(term)
    hits = 0
    best = ""
    for word in words:
        if word in address:
            hits += 1
            best = "Address"
        elif word in city:
            hits += 1
            best = best or "City"
        elif word in state:
            hits += 1
            best = best or "State"

    if hits:
        return LocationMatch(
            match_type="partial" if hits >= len(words) / 2 else "similar",
            score=min(70, 30 + hits * 10),
            label=f"{best} Similar",
        )
    return LocationMatch(match_type="similar", score=10, label="Area Match")


def search_by_location(
    properties: list[Property],
    location: str | None = None,
    min_price: float | None = None,
    max_price: float | None = None,
    min_bedrooms: int | None = None,
) -> list[Property]:
    """Filter by fuzzy location, rank by relevance, then apply price/bedroom bounds."""
    results = list(properties)

    term = _normalize(location)
    if term:
        before = len(results)
        results = rank_by_relevance([p for p in results if matches_location(p, term)], term)
        logger.debug("Location filter %r kept %d of %d properties", term, len(results), before)

    # Zero thresholds are treated as unset.
    if min_price:
        results = [p for p in results if p.price >= min_price]
    if max_price:
        results = [p for p in results if p.price <= max_price]
    if min_bedrooms:
        results = [p for p in results if p.bedroom_count >= min_bedrooms]

    return results
