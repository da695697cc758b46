"""Fixed clock and calendar helpers shared by the test modules."""

from __future__ import annotations

from datetime import date, datetime, timedelta

import pytz

TORONTO = pytz.timezone("America/Toronto")
# Saturday 2026-03-21, noon in Toronto (EDT, UTC-4).
AS_OF = datetime(2026, 3, 21, 16, 0, tzinfo=pytz.utc)
TODAY = date(2026, 3, 21)
# Habits created long before AS_OF so the creation bound never interferes.
CREATED = datetime(2025, 1, 1, tzinfo=pytz.utc)


def days_ago(count: int) -> date:
    """Return the civil date ``count`` days before TODAY."""
    return TODAY - timedelta(days=count)
