"""Clock utilities.

Sample timestamps are UTC-aware.  Hourly buckets are keyed by the host's
*local* wall-clock hour.  This module is the single source of "now" so tests
can monkey-patch it trivially.
"""

from __future__ import annotations

from datetime import datetime, timezone


def utc_now() -> datetime:
    """Return the current UTC time as a timezone-aware datetime."""
    return datetime.now(timezone.utc)


def local_now() -> datetime:
    """Return the current local time as a timezone-aware datetime."""
    return datetime.now().astimezone()


def current_hour(now: datetime | None = None) -> int:
    """Hour of day (0-23) in local time for *now*, or for the current instant."""
    if now is None:
        now = local_now()
    elif now.tzinfo is not None:
        now = now.astimezone()
    return now.hour
