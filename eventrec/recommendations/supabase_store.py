from __future__ import annotations

import os
from datetime import datetime
from typing import Any

from dotenv import load_dotenv
from supabase import Client, create_client

load_dotenv()


def get_supabase_client() -> Client:
    url = os.environ["SUPABASE_URL"]
    key = os.environ["SUPABASE_SERVICE_ROLE_KEY"]
    return create_client(url, key)


def _execute(rb: Any) -> list[dict[str, Any]]:
    """Execute a Supabase query builder and return its rows."""
    return rb.execute().data or []


class SupabaseEventStore:
    """Event store backed by the production Supabase tables."""

    def __init__(self, client: Client) -> None:
        self.client = client

    def get_user(self, user_id: str) -> dict[str, Any] | None:
        rows = _execute(
            self.client.table("users").select("*").eq("id", user_id).limit(1)
        )
        return rows[0] if rows else None

    def get_purchased_event_categories(self, user_id: str) -> set[str]:
        tickets = _execute(
            self.client.table("tickets").select("event_id").eq("user_id", user_id)
        )
        event_ids = sorted({t["event_id"] for t in tickets if t.get("event_id")})
        if not event_ids:
            return set()

        events = _execute(
            self.client.table("events").select("category").in_("id", event_ids)
        )
        return {e["category"] for e in events if e.get("category")}

    def get_upcoming_published_events(
        self, max_count: int, now: datetime,
    ) -> list[dict[str, Any]]:
        return _execute(
            self.client.table("events")
            .select("*, promoters(*)")
            .eq("status", "published")
            .gte("date", now.isoformat())
            .order("date")
            .limit(max_count)
        )
