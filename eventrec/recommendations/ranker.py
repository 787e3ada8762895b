from __future__ import annotations

from typing import Iterable

from .models import BasedOn, Recommendation, RuleKind, ScoredCandidate

# Order in which a matched rule decides the "basedOn" badge.
# Independent of the scoring weights.
_BASED_ON_PRIORITY: tuple[tuple[RuleKind, BasedOn], ...] = (
    (RuleKind.interests, "interests"),
    (RuleKind.location, "location"),
    (RuleKind.history, "history"),
    (RuleKind.featured, "featured"),
)


def classify(matched: Iterable[RuleKind]) -> BasedOn:
    """Pick the dominant reason a recommendation was produced."""
    kinds = set(matched)
    for kind, label in _BASED_ON_PRIORITY:
        if kind in kinds:
            return label
    return "mixed"


def rank_candidates(
    scored: Iterable[ScoredCandidate],
    limit: int = 10,
    include_reasons: bool = True,
) -> list[Recommendation]:
    """Sort by score (highest first), truncate, and shape the output."""
    # sorted() is stable, so exact ties keep insertion order
    ordered = sorted(scored, key=lambda c: c.score, reverse=True)[: max(limit, 0)]

    return [
        Recommendation(
            event_id=candidate.features.event_id,
            score=candidate.score,
            reasons=candidate.reasons if include_reasons else [],
            rank=index + 1,
            based_on=classify(candidate.matched),
            event=candidate.features.payload,
        )
        for index, candidate in enumerate(ordered)
    ]
