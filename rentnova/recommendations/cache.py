from __future__ import annotations

import hashlib
import json
import threading
import time
from collections.abc import Callable
from typing import Any

from pydantic import BaseModel

_DEFAULT_TTL_MINUTES = 60


def make_cache_key(preferences: BaseModel | dict, candidate_count: int) -> str:
    """Deterministic key for (preferences, candidate-set size).

    Structurally equal preference objects always give the same key.
    """
    prefs = preferences.model_dump() if isinstance(preferences, BaseModel) else preferences
    normalized = json.dumps(
        {"preferences": prefs, "count": candidate_count}, sort_keys=True, default=str
    )
    return "rec_" + hashlib.sha256(normalized.encode()).hexdigest()[:32]


class RecommendationCache:
    """Process-local TTL cache with lazy eviction on read.

    There is no size bound and no background sweep; expired entries are only
    dropped when they are looked up.
    """

    def __init__(
        self,
        default_ttl_minutes: float = _DEFAULT_TTL_MINUTES,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._default_ttl = default_ttl_minutes
        self._clock = clock
        self._entries: dict[str, dict[str, Any]] = {}
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0

    def get(self, key: str) -> Any | None:
        with self._lock:
            entry = self._entries.get(key)
            if entry and self._clock() - entry["stored_at"] <= entry["ttl"]:
                self._hits += 1
                return entry["value"]
            if entry:
                del self._entries[key]
            self._misses += 1
            return None

    def set(self, key: str, value: Any, ttl_minutes: float | None = None) -> None:
        ttl = self._default_ttl if ttl_minutes is None else ttl_minutes
        with self._lock:
            self._entries[key] = {
                "value": value,
                "stored_at": self._clock(),
                "ttl": ttl * 60,
            }

    def __contains__(self, key: str) -> bool:
        # Raw membership, no expiry check and no stats.
        with self._lock:
            return key in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def stats(self) -> dict:
        with self._lock:
            total = self._hits + self._misses
            return {
                "size": len(self._entries),
                "hits": self._hits,
                "misses": self._misses,
                "hit_rate": round(self._hits / total * 100, 1) if total > 0 else 0.0,
            }

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self._hits = 0
            self._misses = 0
