from __future__ import annotations

from fastapi import Depends, FastAPI

from .analytics.aggregator import compute_analytics
from .analytics.store import get_events
from .recommendations.data_store import EventStore, get_store
from .recommendations.engine import smart_recommendations
from .recommendations.models import (
    AIRecommendationRequest,
    RecommendationRequest,
    RecommendationResponse,
)

app = FastAPI(title="Event Recommendation API", version="1.0.0")


# ── Public endpoints ─────────────────────────────────────────────────────


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


# ── Recommendation endpoints ─────────────────────────────────────────────


@app.post("/recommendations/smart", response_model=RecommendationResponse)
def smart(
    body: RecommendationRequest,
    store: EventStore = Depends(get_store),
) -> RecommendationResponse:
    results = smart_recommendations(
        body.user_id,
        body.limit,
        body.include_reasons,
        store=store,
    )
    return RecommendationResponse(recommendations=results)


@app.post("/recommendations/ai", response_model=RecommendationResponse)
def ai(
    body: AIRecommendationRequest,
    store: EventStore = Depends(get_store),
) -> RecommendationResponse:
    # Same engine, reasons always surfaced
    results = smart_recommendations(
        body.user_id,
        body.limit,
        True,
        store=store,
        variant="ai",
    )
    return RecommendationResponse(recommendations=results)


# ── Admin endpoints ──────────────────────────────────────────────────────


@app.get("/analytics")
def analytics() -> dict:
    return compute_analytics(get_events())
