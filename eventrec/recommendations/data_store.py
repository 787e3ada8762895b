from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Protocol

import pandas as pd

from .config import DEFAULT_RECOMMENDATION_CONFIG, RecommendationConfig
from .supabase_store import SupabaseEventStore, get_supabase_client

logger = logging.getLogger(__name__)

USER_COLUMNS = ["id", "name", "email", "interests", "location_city"]
EVENT_COLUMNS = [
    "id", "title", "category", "tags", "venue_name", "venue_city",
    "is_featured", "date", "status", "promoter_id",
]
TICKET_COLUMNS = ["id", "user_id", "event_id"]


class EventStore(Protocol):
    """Read-only lookups the recommendation engine depends on."""

    def get_user(self, user_id: str) -> dict[str, Any] | None: ...

    def get_purchased_event_categories(self, user_id: str) -> set[str]: ...

    def get_upcoming_published_events(
        self, max_count: int, now: datetime,
    ) -> list[dict[str, Any]]: ...


def _records(df: pd.DataFrame) -> list[dict[str, Any]]:
    """DataFrame rows as plain dicts, with NaN/NaT mapped to ``None``."""
    clean = df.astype(object).where(pd.notna(df), None)
    return clean.to_dict(orient="records")


def _read_csv(path: Path, columns: list[str]) -> pd.DataFrame:
    if not path.exists():
        logger.warning("Data file %s not found, starting with an empty table", path)
        return pd.DataFrame(columns=columns)
    return pd.read_csv(path, dtype={"id": str, "user_id": str, "event_id": str})


class DataFrameEventStore:
    """In-memory store over users / events / tickets tables."""

    def __init__(
        self,
        users: pd.DataFrame,
        events: pd.DataFrame,
        tickets: pd.DataFrame,
    ) -> None:
        self.users = users.copy()
        self.events = events.copy()
        self.tickets = tickets.copy()

        for df in (self.users, self.events):
            df["id"] = df["id"].astype(str)
        for col in ("user_id", "event_id"):
            self.tickets[col] = self.tickets[col].astype(str)

        # Parsed start time for filtering/sorting; never returned to callers
        self._starts = pd.to_datetime(
            self.events["date"], utc=True, errors="coerce", format="ISO8601",
        )

    @classmethod
    def from_csv(cls, data_dir: Path) -> "DataFrameEventStore":
        return cls(
            users=_read_csv(data_dir / "users.csv", USER_COLUMNS),
            events=_read_csv(data_dir / "events.csv", EVENT_COLUMNS),
            tickets=_read_csv(data_dir / "tickets.csv", TICKET_COLUMNS),
        )

    def get_user(self, user_id: str) -> dict[str, Any] | None:
        match = self.users.loc[self.users["id"] == str(user_id)]
        if match.empty:
            return None
        return _records(match.head(1))[0]

    def get_purchased_event_categories(self, user_id: str) -> set[str]:
        event_ids = self.tickets.loc[self.tickets["user_id"] == str(user_id), "event_id"]
        if event_ids.empty:
            return set()
        categories = self.events.loc[self.events["id"].isin(event_ids), "category"]
        return {c for c in categories.dropna().astype(str) if c}

    def get_upcoming_published_events(
        self, max_count: int, now: datetime,
    ) -> list[dict[str, Any]]:
        now_ts = pd.Timestamp(now)
        if now_ts.tzinfo is None:
            now_ts = now_ts.tz_localize("UTC")

        mask = (self.events["status"] == "published") & (self._starts >= now_ts)
        upcoming = (
            self.events.loc[mask]
            .assign(_start=self._starts[mask])
            .sort_values("_start", kind="stable")
            .drop(columns="_start")
            .head(max_count)
        )
        return _records(upcoming)


_store: EventStore | None = None


def build_store(config: RecommendationConfig = DEFAULT_RECOMMENDATION_CONFIG) -> EventStore:
    if config.store_backend == "supabase":
        return SupabaseEventStore(get_supabase_client())
    return DataFrameEventStore.from_csv(config.data_dir)


def get_store() -> EventStore:
    """Return the process-wide store, building it on first call."""
    global _store
    if _store is None:
        _store = build_store()
    return _store
