from __future__ import annotations

import logging
import random
import time
from collections import Counter
from datetime import datetime, timezone

from ..analytics.store import record_event
from .config import DEFAULT_RECOMMENDATION_CONFIG, RecommendationConfig
from .data_store import EventStore
from .models import Recommendation
from .ranker import rank_candidates
from .scorer import RandomSource, score_candidates
from .signals import extract_candidates, extract_user_signals

logger = logging.getLogger(__name__)


def _utc(now: datetime | None) -> datetime:
    if now is None:
        return datetime.now(timezone.utc)
    if now.tzinfo is None:
        return now.replace(tzinfo=timezone.utc)
    return now.astimezone(timezone.utc)


def recommend(
    user_id: str,
    limit: int | None = None,
    include_reasons: bool = True,
    *,
    store: EventStore,
    rng: RandomSource | None = None,
    now: datetime | None = None,
    config: RecommendationConfig = DEFAULT_RECOMMENDATION_CONFIG,
) -> list[Recommendation]:
    """Rank upcoming published events for *user_id*.

    An unknown user or an empty candidate pool yields ``[]``.  Pass a
    seeded *rng* for a reproducible order; by default a fresh generator
    is created per call (seeded from ``config.seed`` when set).
    """
    now = _utc(now)
    limit = config.default_limit if limit is None else limit

    user = store.get_user(user_id)
    if not user:
        logger.info("No profile for user %s, returning no recommendations", user_id)
        return []

    signals = extract_user_signals(user, store.get_purchased_event_categories(user_id))
    events = store.get_upcoming_published_events(config.candidate_pool_size, now)
    candidates = extract_candidates(events, now)
    if not candidates:
        return []

    rng = rng if rng is not None else random.Random(config.seed)
    scored = score_candidates(
        signals,
        candidates,
        rng,
        soon_window_days=config.soon_window_days,
        jitter_scale=config.jitter_scale,
    )
    return rank_candidates(scored, limit=limit, include_reasons=include_reasons)


def recommend_ai(
    user_id: str,
    limit: int | None = None,
    **kwargs,
) -> list[Recommendation]:
    """Same ranking as ``recommend`` with reasons always included."""
    kwargs.pop("include_reasons", None)
    return recommend(user_id, limit, True, **kwargs)


def smart_recommendations(
    user_id: str,
    limit: int | None = None,
    include_reasons: bool = True,
    *,
    store: EventStore,
    variant: str = "smart",
    rng: RandomSource | None = None,
    now: datetime | None = None,
    config: RecommendationConfig = DEFAULT_RECOMMENDATION_CONFIG,
) -> list[Recommendation]:
    """Service entry point: degrades store failures to an empty list."""
    start_time = time.time()

    try:
        results = recommend(
            user_id,
            limit,
            include_reasons,
            store=store,
            rng=rng,
            now=now,
            config=config,
        )
        failed = False
    except Exception:
        logger.warning(
            "Recommendation lookup failed for user %s, returning empty list",
            user_id,
            exc_info=True,
        )
        results = []
        failed = True

    elapsed_ms = round((time.time() - start_time) * 1000, 1)
    record_event("recommendation", {
        "variant": variant,
        "user_id": user_id,
        "limit": limit if limit is not None else config.default_limit,
        "include_reasons": include_reasons,
        "results_returned": len(results),
        "based_on": dict(Counter(r.based_on for r in results)),
        "categories": [r.event.get("category", "other") for r in results],
        "top_score": results[0].score if results else None,
        "response_time_ms": elapsed_ms,
        "failed": failed,
    })
    return results
