"""Civil dates and weekdays in the tracker's fixed timezone."""

from __future__ import annotations

from datetime import date, datetime, tzinfo

import pytz


def now_utc() -> datetime:
    """Return the current instant as an aware UTC datetime."""

    return datetime.now(pytz.utc)


def _aware(instant: datetime) -> datetime:
    # Naive instants are taken to be UTC.
    if instant.tzinfo is None:
        return pytz.utc.localize(instant)
    return instant


def civil_date(instant: datetime, tz: tzinfo) -> date:
    """Return the calendar date observed in ``tz`` at ``instant``."""

    return _aware(instant).astimezone(tz).date()


def civil_date_str(instant: datetime, tz: tzinfo) -> str:
    """Return the civil date as ``YYYY-MM-DD``."""

    return civil_date(instant, tz).isoformat()


def weekday_of(day: date) -> int:
    """Return the weekday index of a calendar date, Sunday = 0 .. Saturday = 6."""

    return (day.weekday() + 1) % 7


def civil_weekday(instant: datetime, tz: tzinfo) -> int:
    """Return the civil weekday in ``tz`` at ``instant``, Sunday = 0."""

    return weekday_of(civil_date(instant, tz))


def to_date(value: date | str) -> date:
    """Accept a ``date`` or an ISO ``YYYY-MM-DD`` string."""

    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(value)


__all__ = [
    "civil_date",
    "civil_date_str",
    "civil_weekday",
    "now_utc",
    "to_date",
    "weekday_of",
]
