"""Habit applicability, streak and missed-day calculations.

Everything in this module is pure: callers fetch habits, log entries and skip
days from the store and pass them in together with the instant that counts as
"now". Dates are civil dates in the tracker's fixed timezone.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta, tzinfo
from itertools import takewhile
from typing import Any, Iterable, Iterator, Mapping, Optional, Sequence

from ..models.habit import Habit
from .calendar import civil_date, to_date, weekday_of

MILESTONES: tuple[int, ...] = (7, 30, 100)
DEFAULT_LOOKBACK_DAYS = 365


@dataclass(frozen=True, slots=True)
class StreakStats:
    """Backward-looking counters for one habit, both ending yesterday."""

    streak: int = 0
    missed_days: int = 0


@dataclass(slots=True)
class HabitStatus:
    """Computed view of one habit for the current civil day."""

    habit: Habit
    applicable: bool
    completed: bool
    skipped: bool
    skip_reason: Optional[str]
    streak: int
    missed_days: int
    milestone: Optional[int] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "habit": habit_to_dict(self.habit),
            "applicable": self.applicable,
            "completed": self.completed,
            "skipped": self.skipped,
            "skip_reason": self.skip_reason,
            "streak": self.streak,
            "missed_days": self.missed_days,
            "milestone": self.milestone,
        }


@dataclass(slots=True)
class DaySummary:
    """End-of-day score over the habits that applied today."""

    day: date
    total: int
    completed: int
    skipped: int
    missed: int
    score: int
    missed_critical: list[str] = field(default_factory=list)

    @property
    def perfect(self) -> bool:
        return self.missed == 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "date": self.day.isoformat(),
            "total": self.total,
            "completed": self.completed,
            "skipped": self.skipped,
            "missed": self.missed,
            "score": self.score,
            "perfect": self.perfect,
            "missed_critical": list(self.missed_critical),
        }


def habit_to_dict(habit: Habit) -> dict[str, Any]:
    return {
        "id": habit.id,
        "habit_key": habit.habit_key,
        "label": habit.label,
        "frequency": habit.frequency,
        "specific_days": sorted(habit.specific_days),
        "skippable": habit.skippable,
        "critical": habit.critical,
        "active": habit.active,
        "sort_order": habit.sort_order,
    }


def is_applicable(habit: Habit, weekday: int) -> bool:
    """Return True when ``weekday`` (Sunday = 0) is in the habit's recurrence set."""

    return weekday in habit.specific_days


def build_skip_index(skip_days: Iterable[Any]) -> dict[date, str]:
    """Map each skip date to its reason; a later duplicate overwrites an earlier one."""

    index: dict[date, str] = {}
    for skip_day in skip_days:
        index[to_date(skip_day.date)] = skip_day.reason
    return index


def reason_for(index: Mapping[date, str], day: date | str) -> Optional[str]:
    return index.get(to_date(day))


def _entry_parts(entry: Any) -> tuple[str, date]:
    if isinstance(entry, tuple):
        habit_key, day = entry
    else:
        habit_key, day = entry.habit_key, entry.completed_date
    return habit_key, to_date(day)


def index_logs(log_entries: Iterable[Any]) -> dict[str, set[date]]:
    """Group ``(habit_key, date)`` entries (or HabitLog rows) by habit key."""

    by_habit: dict[str, set[date]] = {}
    for entry in log_entries:
        habit_key, day = _entry_parts(entry)
        by_habit.setdefault(habit_key, set()).add(day)
    return by_habit


def _counted_days(
    habit: Habit,
    completed: set[date],
    skip_index: Mapping[date, str],
    start: date,
    lookback_days: int,
    earliest: Optional[date],
) -> Iterator[bool]:
    """Yield, newest first, whether each day that counts for the habit was completed.

    Days outside the recurrence set, and skip days for skippable habits, are
    passed over without yielding. The walk covers at most ``lookback_days``
    calendar days and never goes past ``earliest``.
    """
    for offset in range(lookback_days):
        day = start - timedelta(days=offset)
        if earliest is not None and day < earliest:
            return
        if not is_applicable(habit, weekday_of(day)):
            continue
        if habit.skippable and day in skip_index:
            continue
        yield day in completed


def _run_length(flags: Iterable[bool], value: bool) -> int:
    return sum(1 for _ in takewhile(lambda flag: flag == value, flags))


def compute_streaks(
    habits: Sequence[Habit],
    log_entries: Iterable[Any],
    skip_days: Iterable[Any],
    as_of: datetime,
    *,
    tz: tzinfo,
    lookback_days: int = DEFAULT_LOOKBACK_DAYS,
) -> dict[str, StreakStats]:
    """Return streak and missed-day counts per habit key, both ending yesterday.

    ``streak`` counts consecutive counted days with a log entry and stops at the
    first counted day without one. ``missed_days`` counts consecutive counted
    days without an entry and stops at the first completed one.
    """
    logs_by_habit = index_logs(log_entries)
    skip_index = build_skip_index(skip_days)
    yesterday = civil_date(as_of, tz) - timedelta(days=1)

    result: dict[str, StreakStats] = {}
    for habit in habits:
        completed = logs_by_habit.get(habit.habit_key, set())
        earliest = civil_date(habit.created_at, tz) if habit.created_at else None

        walk = (habit, completed, skip_index, yesterday, lookback_days, earliest)
        result[habit.habit_key] = StreakStats(
            streak=_run_length(_counted_days(*walk), True),
            missed_days=_run_length(_counted_days(*walk), False),
        )
    return result


def milestone_for(streak: int) -> Optional[int]:
    """Return ``streak`` when it is one of the celebrated milestones."""

    return streak if streak in MILESTONES else None


def compose_today(
    habits: Iterable[Habit],
    todays_completed_keys: Iterable[str],
    todays_skip_reason: Optional[str],
    streaks: Mapping[str, StreakStats],
    today_weekday: int,
) -> list[HabitStatus]:
    """Combine today's log, today's skip day and streak counters per active habit."""

    completed_keys = set(todays_completed_keys)
    statuses: list[HabitStatus] = []
    for habit in habits:
        if not habit.active:
            continue
        skipped = todays_skip_reason is not None and habit.skippable
        stats = streaks.get(habit.habit_key, StreakStats())
        statuses.append(
            HabitStatus(
                habit=habit,
                applicable=is_applicable(habit, today_weekday),
                completed=habit.habit_key in completed_keys,
                skipped=skipped,
                skip_reason=todays_skip_reason if skipped else None,
                streak=stats.streak,
                missed_days=stats.missed_days,
            )
        )
    return statuses


def summarize_day(statuses: Iterable[HabitStatus], day: date) -> DaySummary:
    """Score the day over applicable habits; a skipped habit counts as done."""

    applicable = [status for status in statuses if status.applicable]
    skipped = sum(1 for status in applicable if status.skipped and not status.completed)
    done = sum(1 for status in applicable if status.completed or status.skipped)
    missed = [status for status in applicable if not (status.completed or status.skipped)]
    total = len(applicable)
    # Halves round up.
    score = math.floor(done / total * 100 + 0.5) if total else 100
    return DaySummary(
        day=day,
        total=total,
        completed=done - skipped,
        skipped=skipped,
        missed=len(missed),
        score=score,
        missed_critical=[status.habit.label for status in missed if status.habit.critical],
    )


__all__ = [
    "DEFAULT_LOOKBACK_DAYS",
    "DaySummary",
    "HabitStatus",
    "MILESTONES",
    "StreakStats",
    "build_skip_index",
    "compose_today",
    "compute_streaks",
    "habit_to_dict",
    "index_logs",
    "is_applicable",
    "milestone_for",
    "reason_for",
    "summarize_day",
]
