from __future__ import annotations

import logging
import math
import threading
import time
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeout
from typing import Any

from ..analytics.store import record_event
from ..llm.groq_client import Summarizer, build_summarizer
from .cache import RecommendationCache, make_cache_key
from .config import DEFAULT_ENGINE_CONFIG, EngineConfig
from .models import (
    PartialPreferences,
    Property,
    RecommendationResult,
    ScoredProperty,
    UserPreferences,
)
from .scoring import location_matches, score_property

logger = logging.getLogger(__name__)


# ── Summaries ────────────────────────────────────────────────────────────


def template_summary(recommendations: list[ScoredProperty]) -> str:
    count = len(recommendations)
    if count:
        avg = sum(r.score.match_percentage for r in recommendations) / count
    else:
        avg = 0.0
    return (
        f"I found {count} properties matching your preferences with an average "
        f"compatibility of {math.floor(avg + 0.5)}%. These selections consider "
        "your budget, location, and lifestyle requirements."
    )


def summary_entry(item: ScoredProperty) -> dict[str, Any]:
    prop = item.property
    return {
        "id": prop.id,
        "title": prop.property_title or prop.property_type or "Property",
        "city": prop.city or "",
        "match_percentage": item.score.match_percentage,
        "reasons": list(item.score.reasons),
    }


# ── Engine ───────────────────────────────────────────────────────────────


class RecommendationEngine:
    """Scores candidate properties against preferences and caches the ranking.

    The cache and the summarizer are injected. Without a summarizer, requests
    with ``use_ai=True`` get the template summary.
    """

    def __init__(
        self,
        cache: RecommendationCache | None = None,
        summarizer: Summarizer | None = None,
        config: EngineConfig = DEFAULT_ENGINE_CONFIG,
    ) -> None:
        self.config = config
        self.cache = cache if cache is not None else RecommendationCache(config.cache_ttl_minutes)
        self.summarizer = summarizer

    def rank(
        self,
        properties: list[Property],
        preferences: UserPreferences,
    ) -> list[ScoredProperty]:
        scored = [
            ScoredProperty(property=p, score=score_property(p, preferences))
            for p in properties
        ]
        kept = [s for s in scored if s.score.score > self.config.min_score]
        # sorted() is stable, equal scores keep candidate order
        kept = sorted(kept, key=lambda s: s.score.score, reverse=True)
        return kept[: self.config.max_results]

    def get_recommendations(
        self,
        properties: list[Property],
        preferences: UserPreferences,
        use_ai: bool = False,
    ) -> RecommendationResult:
        start_time = time.time()

        # --- Cache check ---
        cache_key = make_cache_key(preferences, len(properties))
        cached = self.cache.get(cache_key)
        if cached is not None:
            logger.debug("Recommendation cache hit for %s", cache_key)
            result = RecommendationResult(
                recommendations=list(cached["recommendations"]),
                summary=cached["summary"],
                cached=True,
            )
            self._record(start_time, properties, preferences, result, use_ai, False)
            return result

        # --- Scoring ---
        ranked = self.rank(properties, preferences)
        logger.debug(
            "Scored %d candidates, %d above threshold", len(properties), len(ranked)
        )

        # --- Summary ---
        fallback = False
        if use_ai and ranked:
            summary, fallback = self._ai_summary(ranked, preferences)
        else:
            summary = template_summary(ranked)

        self.cache.set(
            cache_key,
            {"recommendations": ranked, "summary": summary},
            self.config.cache_ttl_minutes,
        )

        result = RecommendationResult(
            recommendations=list(ranked), summary=summary, cached=False
        )
        self._record(start_time, properties, preferences, result, use_ai, fallback)
        return result

    def _ai_summary(
        self,
        ranked: list[ScoredProperty],
        preferences: UserPreferences,
    ) -> tuple[str, bool]:
        """Return ``(summary, used_fallback)``. Never raises."""
        if self.summarizer is None:
            return template_summary(ranked), True

        entries = [summary_entry(s) for s in ranked[: self.config.summary_entries]]
        executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="summarizer")
        try:
            future = executor.submit(self.summarizer.summarize, entries, preferences)
            text = future.result(timeout=self.config.summary_timeout)
        except FutureTimeout:
            logger.warning(
                "Summarizer timed out after %.1fs, using template summary",
                self.config.summary_timeout,
            )
            return template_summary(ranked), True
        except Exception:
            logger.warning("Summarizer call failed, using template summary", exc_info=True)
            return template_summary(ranked), True
        finally:
            # Don't wait on a hung call.
            executor.shutdown(wait=False)

        if not isinstance(text, str) or not text.strip():
            logger.warning("Summarizer returned no text, using template summary")
            return template_summary(ranked), True
        return text.strip(), False

    def _record(
        self,
        start_time: float,
        properties: list[Property],
        preferences: UserPreferences,
        result: RecommendationResult,
        use_ai: bool,
        fallback: bool,
    ) -> None:
        elapsed_ms = round((time.time() - start_time) * 1000, 1)
        record_event("recommendation", {
            "locations": preferences.location,
            "property_types": preferences.property_types,
            "lifestyle": preferences.lifestyle,
            "total_candidates": len(properties),
            "results_returned": len(result.recommendations),
            "response_time_ms": elapsed_ms,
            "cache_hit": result.cached,
            "use_ai": use_ai,
            "summary_fallback": fallback,
        })


# ── Quick matches ────────────────────────────────────────────────────────


def _passes_quick_filters(prop: Property, preferences: PartialPreferences) -> bool:
    budget = preferences.budget
    if budget is not None and not (budget.min <= prop.price <= budget.max):
        return False
    # An empty list or zero bedrooms leaves that filter off.
    if preferences.property_types and prop.property_type not in preferences.property_types:
        return False
    if preferences.bedrooms and prop.bedroom_count < preferences.bedrooms:
        return False
    if preferences.location and not location_matches(prop, preferences.location):
        return False
    return True


def quick_matches(
    properties: list[Property],
    preferences: PartialPreferences,
    limit: int = DEFAULT_ENGINE_CONFIG.quick_match_limit,
) -> list[Property]:
    """Unscored boolean filter; first ``limit`` matches in input order."""
    limit = min(limit, DEFAULT_ENGINE_CONFIG.quick_match_limit)
    matches: list[Property] = []
    for prop in properties:
        if len(matches) >= limit:
            break
        if _passes_quick_filters(prop, preferences):
            matches.append(prop)
    return matches


# ── Module-level entry points ────────────────────────────────────────────

_default_engine: RecommendationEngine | None = None
_engine_lock = threading.Lock()


def get_engine() -> RecommendationEngine:
    """Return the shared engine, building it (and its summarizer) on first call."""
    global _default_engine
    with _engine_lock:
        if _default_engine is None:
            _default_engine = RecommendationEngine(summarizer=build_summarizer())
        return _default_engine


def set_engine(engine: RecommendationEngine | None) -> None:
    global _default_engine
    with _engine_lock:
        _default_engine = engine


def get_recommendations(
    properties: list[Property],
    preferences: UserPreferences,
    use_ai: bool = False,
) -> RecommendationResult:
    return get_engine().get_recommendations(properties, preferences, use_ai)