"""
Signal extraction.

Turns loosely-typed user and event records into the immutable
``UserSignals`` / ``EventFeatures`` the scorer works on.  Nothing here
raises on bad data: unparseable fields collapse to empty values so a
user with no history or interests still gets recommendations.
"""
from __future__ import annotations

import logging
import math
from datetime import datetime, timezone
from typing import Any, Iterable

from .mapping import as_bool, map_db_event_to_event, safe_json_parse
from .models import EventFeatures, UserSignals

logger = logging.getLogger(__name__)

_SECONDS_PER_DAY = 60 * 60 * 24


def safe_json_list(value: Any) -> list[str]:
    """Parse a JSON array of strings; anything else yields ``[]``."""
    if isinstance(value, (tuple, set, frozenset)):
        parsed: Any = list(value)
    else:
        parsed = safe_json_parse(value, [])
    if not isinstance(parsed, list):
        return []
    return [item for item in parsed if isinstance(item, str) and item]


def parse_timestamp(value: Any) -> datetime | None:
    """Return an aware UTC datetime, or ``None`` if *value* is unusable."""
    if value is None:
        return None
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, str) and value.strip():
        raw = value.strip()
        if raw.endswith("Z"):
            raw = raw[:-1] + "+00:00"
        try:
            dt = datetime.fromisoformat(raw)
        except ValueError:
            return None
    else:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def extract_user_signals(
    user: dict[str, Any],
    past_categories: Iterable[str] | None = None,
) -> UserSignals:
    interests = frozenset(safe_json_list(user.get("interests")))
    categories = frozenset(c for c in (past_categories or ()) if isinstance(c, str) and c)
    city = user.get("location_city")
    location = city.strip() if isinstance(city, str) else ""
    return UserSignals(
        user_id=str(user.get("id") or ""),
        interests=interests,
        past_categories=categories,
        location=location,
    )


def days_until(start: datetime, now: datetime) -> int:
    """Whole days from *now* to *start*, rounded down."""
    return math.floor((start - now).total_seconds() / _SECONDS_PER_DAY)


def extract_event_features(event: dict[str, Any], now: datetime) -> EventFeatures | None:
    """Build features for one event, or ``None`` if it has no future start."""
    start = parse_timestamp(event.get("date"))
    if start is None:
        logger.debug("Skipping event %s: missing or invalid start date", event.get("id"))
        return None
    if start < now:
        logger.debug("Skipping event %s: already started", event.get("id"))
        return None

    city = event.get("venue_city")
    category = event.get("category")
    return EventFeatures(
        event_id=str(event.get("id") or ""),
        category=category if isinstance(category, str) and category else "other",
        tags=frozenset(safe_json_list(event.get("tags"))),
        city=city.strip() if isinstance(city, str) else "",
        is_featured=as_bool(event.get("is_featured")),
        days_until_start=days_until(start, now),
        payload=map_db_event_to_event(event),
    )


def extract_candidates(events: Iterable[dict[str, Any]], now: datetime) -> list[EventFeatures]:
    candidates: list[EventFeatures] = []
    for event in events:
        features = extract_event_features(event, now)
        if features is not None:
            candidates.append(features)
    return candidates
