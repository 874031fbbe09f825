"""
Clock helpers shared by the domain and persistence layers.
"""

from datetime import datetime, timezone


def now_utc() -> datetime:
    """Return a naive UTC datetime (SQLite drops tzinfo on round-trip)."""
    return datetime.now(timezone.utc).replace(tzinfo=None)
