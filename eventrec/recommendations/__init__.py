"""
Event recommendation engine.

Responsibilities:
- Extract user and event signals from raw datastore records.
- Score each upcoming event with fixed, additive rules plus jitter.
- Rank, truncate and classify results ready for API serialisation.
"""
