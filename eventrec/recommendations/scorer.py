"""
Rule-based event scoring.

Score formula (additive, range [0, 110))
----------------------------------------
    total = (
        30  if an event tag matches a user interest
      + 20  if the user bought tickets for this category before
      + 25  if the event city contains the user's city (case-insensitive)
      + 15  if the event is featured
      + 10  if the event starts within 7 days
      + jitter in [0, 10)
    )

Rules are evaluated in the order above; the order only affects the order
of the reasons list.  No rule subtracts.

The jitter is drawn from an explicit random source so callers can seed it
and get a reproducible ordering among events that match the same rules.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable, Protocol

from .config import DEFAULT_RECOMMENDATION_CONFIG
from .models import EventFeatures, RuleKind, ScoredCandidate, UserSignals


class RandomSource(Protocol):
    def random(self) -> float:
        """Return a float in [0, 1)."""
        ...


@dataclass(frozen=True)
class Rule:
    kind: RuleKind
    points: float
    matches: Callable[[UserSignals, EventFeatures, int], bool]


def _matches_interests(user: UserSignals, event: EventFeatures, window: int) -> bool:
    return not user.interests.isdisjoint(event.tags)


def _matches_history(user: UserSignals, event: EventFeatures, window: int) -> bool:
    return event.category in user.past_categories


def _matches_location(user: UserSignals, event: EventFeatures, window: int) -> bool:
    if not user.location or not event.city:
        return False
    return user.location.lower() in event.city.lower()


def _matches_featured(user: UserSignals, event: EventFeatures, window: int) -> bool:
    return event.is_featured


def _matches_recency(user: UserSignals, event: EventFeatures, window: int) -> bool:
    return event.days_until_start <= window


RULES: tuple[Rule, ...] = (
    Rule(RuleKind.interests, 30.0, _matches_interests),
    Rule(RuleKind.history, 20.0, _matches_history),
    Rule(RuleKind.location, 25.0, _matches_location),
    Rule(RuleKind.featured, 15.0, _matches_featured),
    Rule(RuleKind.recency, 10.0, _matches_recency),
)

MAX_RULE_POINTS = sum(rule.points for rule in RULES)


def score_event(
    user: UserSignals,
    event: EventFeatures,
    rng: RandomSource,
    soon_window_days: int = DEFAULT_RECOMMENDATION_CONFIG.soon_window_days,
    jitter_scale: float = DEFAULT_RECOMMENDATION_CONFIG.jitter_scale,
) -> ScoredCandidate:
    score = 0.0
    matched: list[RuleKind] = []
    for rule in RULES:
        if rule.matches(user, event, soon_window_days):
            score += rule.points
            matched.append(rule.kind)

    score += rng.random() * jitter_scale
    return ScoredCandidate(features=event, score=score, matched=tuple(matched))


def score_candidates(
    user: UserSignals,
    candidates: Iterable[EventFeatures],
    rng: RandomSource,
    soon_window_days: int = DEFAULT_RECOMMENDATION_CONFIG.soon_window_days,
    jitter_scale: float = DEFAULT_RECOMMENDATION_CONFIG.jitter_scale,
) -> list[ScoredCandidate]:
    """Score every candidate, keeping input order."""
    return [
        score_event(user, event, rng, soon_window_days, jitter_scale)
        for event in candidates
    ]
