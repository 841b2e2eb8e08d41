from __future__ import annotations

from collections import Counter
from typing import Any


def compute_analytics(events: list[dict[str, Any]]) -> dict[str, Any]:
    runs = [e for e in events if e["type"] == "recommendation"]
    total = len(runs)

    times = [r["response_time_ms"] for r in runs if "response_time_ms" in r]
    avg_time = round(sum(times) / len(times), 1) if times else 0.0

    # Top preferred locations
    loc_counter: Counter[str] = Counter()
    for r in runs:
        for loc in r.get("locations", []) or []:
            loc_counter[loc] += 1
    top_locations = [{"name": n, "count": c} for n, c in loc_counter.most_common(10)]

    lifestyle_counter: Counter[str] = Counter(r.get("lifestyle") or "unknown" for r in runs)

    cache_hits = sum(1 for r in runs if r.get("cache_hit"))
    ai_requests = sum(1 for r in runs if r.get("use_ai"))
    ai_fallbacks = sum(1 for r in runs if r.get("summary_fallback"))
    returned = [r["results_returned"] for r in runs if "results_returned" in r]

    return {
        "total_requests": total,
        "avg_response_time_ms": avg_time,
        "avg_results_returned": round(sum(returned) / len(returned), 1) if returned else 0.0,
        "empty_results": sum(1 for n in returned if n == 0),
        "top_locations": top_locations,
        "lifestyles": dict(lifestyle_counter),
        "cache_stats": {
            "hits": cache_hits,
            "misses": total - cache_hits,
            "hit_rate": round(cache_hits / total * 100, 1) if total else 0.0,
        },
        "ai_summaries": {
            "requested": ai_requests,
            "fallbacks": ai_fallbacks,
        },
    }
