from __future__ import annotations

from collections import Counter
from typing import Any

BASED_ON_LABELS = ("interests", "location", "history", "featured", "mixed")


def compute_analytics(events: list[dict[str, Any]]) -> dict[str, Any]:
    requests = [e for e in events if e["type"] == "recommendation"]
    total = len(requests)

    # Average response time
    times = [r["response_time_ms"] for r in requests if "response_time_ms" in r]
    avg_time = round(sum(times) / len(times), 1) if times else 0.0

    # Requests that came back empty (unknown user, no candidates, store failure)
    empty = sum(1 for r in requests if not r.get("results_returned"))
    failed = sum(1 for r in requests if r.get("failed"))

    # basedOn badge distribution across every returned recommendation
    based_on: Counter[str] = Counter({label: 0 for label in BASED_ON_LABELS})
    for r in requests:
        for label, count in (r.get("based_on") or {}).items():
            based_on[label] += count
    returned = sum(based_on.values())
    based_on_share = {
        label: round(count / returned * 100, 1) if returned else 0.0
        for label, count in based_on.items()
    }

    # Top recommended categories
    category_counter: Counter[str] = Counter()
    for r in requests:
        for c in r.get("categories", []) or []:
            category_counter[c] += 1
    top_categories = [{"name": n, "count": c} for n, c in category_counter.most_common(10)]

    # Per-variant request counts
    variants = dict(Counter(r.get("variant", "smart") for r in requests))

    top_scores = [r["top_score"] for r in requests if r.get("top_score") is not None]

    return {
        "total_requests": total,
        "avg_response_time_ms": avg_time,
        "empty_result_rate": round(empty / total * 100, 1) if total else 0.0,
        "failed_requests": failed,
        "recommendations_returned": returned,
        "based_on": dict(based_on),
        "based_on_share": based_on_share,
        "top_categories": top_categories,
        "variants": variants,
        "avg_top_score": round(sum(top_scores) / len(top_scores), 2) if top_scores else 0.0,
    }
