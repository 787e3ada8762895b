"""
Row → payload mapping for events.

Datastore rows arrive snake_case with JSON-encoded text columns; the
payload echoed back inside each recommendation is the camelCase event
record the clients render.
"""
from __future__ import annotations

import json
import logging
from datetime import datetime
from typing import Any

logger = logging.getLogger(__name__)


def safe_json_parse(value: Any, fallback: Any) -> Any:
    """Decode a JSON text column, returning *fallback* when absent or invalid.

    Already-decoded values (lists/dicts from a jsonb column) pass through.
    """
    if value is None or value == "":
        return fallback
    if isinstance(value, (list, dict)):
        return value
    if not isinstance(value, (str, bytes)):
        return fallback
    try:
        return json.loads(value)
    except (TypeError, ValueError):
        logger.debug("Unparseable JSON column value %r, using fallback", value)
        return fallback


def as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("true", "t", "1", "yes")
    return bool(value) if value is not None else False


def _iso(value: Any) -> str | None:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.isoformat()
    return str(value)


def _map_promoter(row: dict[str, Any]) -> dict[str, Any]:
    p = row.get("promoters")
    if isinstance(p, dict) and p:
        return {
            "id": p.get("id"),
            "name": p.get("name"),
            "image": p.get("image") or "",
            "description": p.get("description") or "",
            "verified": as_bool(p.get("verified")),
            "followersCount": p.get("followers_count") or 0,
        }
    return {
        "id": row.get("promoter_id") or "unknown",
        "name": "Promotor",
        "image": "",
        "description": "",
        "verified": False,
        "followersCount": 0,
    }


def _map_ticket_type(t: dict[str, Any]) -> dict[str, Any]:
    available = t.get("available")
    return {
        "id": t.get("id") or t.get("ticketTypeId") or "",
        "name": t.get("name") or "",
        "price": t.get("price") or 0,
        "available": 0 if available is None else available,
        "description": t.get("description"),
        "maxPerPerson": t.get("maxPerPerson") or 4,
    }


def map_db_event_to_event(row: dict[str, Any]) -> dict[str, Any]:
    event_id = str(row.get("id") or "")
    ticket_types = safe_json_parse(row.get("ticket_types"), [])
    if not isinstance(ticket_types, list):
        ticket_types = []
    artists = safe_json_parse(row.get("artists"), [])
    tags = safe_json_parse(row.get("tags"), [])

    event: dict[str, Any] = {
        "id": event_id,
        "title": row.get("title") or "",
        "artists": artists if isinstance(artists, list) else [],
        "venue": {
            "id": f"venue-{event_id}",
            "name": row.get("venue_name") or "",
            "address": row.get("venue_address") or "",
            "city": row.get("venue_city") or "",
            "capacity": row.get("venue_capacity") or 0,
        },
        "date": _iso(row.get("date")),
        "endDate": _iso(row.get("end_date")),
        "image": row.get("image") or "",
        "description": row.get("description") or "",
        "category": row.get("category") or "other",
        "ticketTypes": [_map_ticket_type(t) for t in ticket_types if isinstance(t, dict)],
        "isSoldOut": as_bool(row.get("is_sold_out")),
        "isFeatured": as_bool(row.get("is_featured")),
        "duration": row.get("duration") or None,
        "promoter": _map_promoter(row),
        "tags": tags if isinstance(tags, list) else [],
    }

    links = {
        "instagram": row.get("instagram_link") or None,
        "facebook": row.get("facebook_link") or None,
        "twitter": row.get("twitter_link") or None,
        "website": row.get("website_link") or None,
    }
    if any(links.values()):
        event["socialLinks"] = links

    lat, lng = row.get("latitude"), row.get("longitude")
    if lat is not None and lng is not None:
        event["coordinates"] = {"latitude": lat, "longitude": lng}

    return event
