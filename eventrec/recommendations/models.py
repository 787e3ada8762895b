from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

BasedOn = Literal["interests", "location", "history", "featured", "mixed"]


class RuleKind(str, Enum):
    """Scoring rules, each carrying the reason text shown to the user."""

    interests = "interests"
    history = "history"
    location = "location"
    featured = "featured"
    recency = "recency"

    @property
    def reason(self) -> str:
        return _REASON_TEXT[self]


_REASON_TEXT: dict[RuleKind, str] = {
    RuleKind.interests: "Corresponde aos teus interesses",
    RuleKind.history: "Categoria que já assististe antes",
    RuleKind.location: "Perto da tua localização",
    RuleKind.featured: "Evento em destaque",
    RuleKind.recency: "Acontece em breve",
}


# ── Extracted signals ────────────────────────────────────────────────────


@dataclass(frozen=True)
class UserSignals:
    user_id: str
    interests: frozenset[str] = frozenset()
    past_categories: frozenset[str] = frozenset()
    location: str = ""


@dataclass(frozen=True)
class EventFeatures:
    event_id: str
    category: str = "other"
    tags: frozenset[str] = frozenset()
    city: str = ""
    is_featured: bool = False
    days_until_start: int = 0
    payload: dict[str, Any] = field(default_factory=dict, compare=False)


@dataclass(frozen=True)
class ScoredCandidate:
    features: EventFeatures
    score: float
    matched: tuple[RuleKind, ...] = ()

    @property
    def reasons(self) -> list[str]:
        return [kind.reason for kind in self.matched]


# ── API models ───────────────────────────────────────────────────────────


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RecommendationRequest(_CamelModel):
    user_id: str = Field(..., min_length=1)
    limit: int = Field(default=10, ge=1, le=50)
    include_reasons: bool = True


class AIRecommendationRequest(_CamelModel):
    user_id: str = Field(..., min_length=1)
    limit: int = Field(default=10, ge=1, le=50)


class Recommendation(_CamelModel):
    event_id: str
    score: float = Field(..., ge=0.0)
    reasons: list[str] = Field(default_factory=list)
    rank: int = Field(..., ge=1)
    based_on: BasedOn
    event: dict[str, Any] = Field(default_factory=dict)


class RecommendationResponse(_CamelModel):
    recommendations: list[Recommendation]
