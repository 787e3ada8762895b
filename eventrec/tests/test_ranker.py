from __future__ import annotations

from eventrec.recommendations.models import EventFeatures, RuleKind, ScoredCandidate
from eventrec.recommendations.ranker import classify, rank_candidates


def _scored(event_id: str, score: float, *matched: RuleKind) -> ScoredCandidate:
    features = EventFeatures(event_id=event_id, payload={"id": event_id})
    return ScoredCandidate(features=features, score=score, matched=tuple(matched))


# ── basedOn classification ───────────────────────────────────────────────


class TestClassify:
    def test_interests_wins_over_everything(self):
        kinds = [RuleKind.featured, RuleKind.history, RuleKind.location, RuleKind.interests]
        assert classify(kinds) == "interests"

    def test_location_beats_history(self):
        assert classify([RuleKind.history, RuleKind.location]) == "location"

    def test_history_beats_featured(self):
        assert classify([RuleKind.featured, RuleKind.history]) == "history"

    def test_featured(self):
        assert classify([RuleKind.featured, RuleKind.recency]) == "featured"

    def test_recency_alone_is_mixed(self):
        assert classify([RuleKind.recency]) == "mixed"

    def test_nothing_matched_is_mixed(self):
        assert classify([]) == "mixed"


# ── Ranking ──────────────────────────────────────────────────────────────


def test_sorted_descending_with_dense_ranks():
    scored = [
        _scored("a", 12.0),
        _scored("b", 55.0, RuleKind.interests),
        _scored("c", 31.5, RuleKind.location),
    ]
    recs = rank_candidates(scored, limit=10)
    assert [r.event_id for r in recs] == ["b", "c", "a"]
    assert [r.rank for r in recs] == [1, 2, 3]
    assert [r.based_on for r in recs] == ["interests", "location", "mixed"]


def test_truncates_to_limit():
    scored = [_scored(str(i), float(i)) for i in range(10)]
    recs = rank_candidates(scored, limit=3)
    assert len(recs) == 3
    assert [r.event_id for r in recs] == ["9", "8", "7"]
    assert [r.rank for r in recs] == [1, 2, 3]


def test_exact_ties_keep_insertion_order():
    scored = [_scored("first", 20.0), _scored("second", 20.0), _scored("third", 20.0)]
    recs = rank_candidates(scored)
    assert [r.event_id for r in recs] == ["first", "second", "third"]


def test_reasons_suppressed_but_classification_kept():
    scored = [
        _scored("a", 45.0, RuleKind.history, RuleKind.featured),
        _scored("b", 30.0, RuleKind.interests),
    ]
    with_reasons = rank_candidates(scored, include_reasons=True)
    without = rank_candidates(scored, include_reasons=False)

    assert with_reasons[0].reasons == ["Categoria que já assististe antes", "Evento em destaque"]
    assert all(r.reasons == [] for r in without)
    assert [r.based_on for r in without] == [r.based_on for r in with_reasons]
    assert [r.score for r in without] == [r.score for r in with_reasons]


def test_payload_is_echoed():
    recs = rank_candidates([_scored("a", 1.0)])
    assert recs[0].event == {"id": "a"}


def test_empty_input():
    assert rank_candidates([], limit=5) == []


def test_serialises_with_camel_case_keys():
    rec = rank_candidates([_scored("a", 25.0, RuleKind.location)])[0]
    body = rec.model_dump(by_alias=True)
    assert set(body) == {"eventId", "score", "reasons", "rank", "basedOn", "event"}
    assert body["basedOn"] == "location"
