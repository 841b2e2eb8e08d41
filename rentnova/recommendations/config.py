from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class EngineConfig:
    min_score: float = 20.0  # candidates at or below this are never surfaced
    max_results: int = 10
    summary_entries: int = 3
    cache_ttl_minutes: float = 60.0
    quick_match_limit: int = 20
    summary_timeout: float = 10.0


DEFAULT_ENGINE_CONFIG = EngineConfig()
