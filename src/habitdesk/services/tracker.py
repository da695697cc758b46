"""Store-backed habit tracker: today's statuses, toggling and habit management."""

from __future__ import annotations

import re
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import date, datetime, timedelta, tzinfo
from typing import Any, Callable, Iterable, Iterator, Optional

from sqlalchemy.exc import SQLAlchemyError

from ..domain.repositories import HabitLogRepository, HabitRepository, SkipDayRepository
from ..exceptions import HabitNotFoundError, HabitValidationError, StoreReadError, StoreWriteError
from ..logging_config import get_logger
from ..models.habit import ALL_WEEKDAYS, Habit
from .calendar import civil_date, now_utc, weekday_of
from .habits import (
    DEFAULT_LOOKBACK_DAYS,
    DaySummary,
    HabitStatus,
    compose_today,
    compute_streaks,
    milestone_for,
    summarize_day,
)

logger = get_logger("tracker")

DAILY = "daily"
SPECIFIC_DAYS = "specific_days"
FREQUENCIES = (DAILY, SPECIFIC_DAYS)
UPDATABLE_FIELDS = {
    "label",
    "frequency",
    "specific_days",
    "skippable",
    "critical",
    "active",
    "sort_order",
}


@dataclass(frozen=True, slots=True)
class ToggleResult:
    """Outcome of flipping today's completion for one habit."""

    completed: bool
    milestone: Optional[int] = None

    def to_dict(self) -> dict[str, Any]:
        return {"completed": self.completed, "milestone": self.milestone}


@contextmanager
def reading(what: str) -> Iterator[None]:
    """Translate store failures during a read into ``StoreReadError``."""
    try:
        yield
    except SQLAlchemyError as exc:
        raise StoreReadError(f"Could not read {what}: {exc}") from exc


@contextmanager
def writing(what: str) -> Iterator[None]:
    """Translate store failures during a write into ``StoreWriteError``."""
    try:
        yield
    except SQLAlchemyError as exc:
        raise StoreWriteError(f"Could not write {what}: {exc}") from exc


def derive_habit_key(label: str) -> str:
    """Lowercase the label and collapse anything outside ``[a-z0-9]`` into ``_``."""

    return re.sub(r"[^a-z0-9]+", "_", label.lower()).strip("_")


def normalize_recurrence(frequency: str, specific_days: Optional[Iterable[int]]) -> list[int]:
    """Return the stored weekday list for a frequency, rejecting an empty set."""

    if frequency not in FREQUENCIES:
        raise HabitValidationError(
            f"Unknown frequency {frequency!r}", errors={"frequency": ["Unknown frequency."]}
        )
    if frequency == DAILY:
        return list(ALL_WEEKDAYS)
    days = sorted(set(specific_days or []))
    if any(day not in ALL_WEEKDAYS for day in days):
        raise HabitValidationError(
            "Weekdays must be between 0 (Sunday) and 6 (Saturday)",
            errors={"specific_days": ["Weekdays must be between 0 and 6."]},
        )
    if not days:
        raise HabitValidationError(
            "A habit must apply on at least one weekday",
            errors={"specific_days": ["Pick at least one weekday."]},
        )
    return days


class HabitTracker:
    """Reads and writes habits through the repositories and runs the streak engine."""

    def __init__(
        self,
        habit_repo: HabitRepository,
        log_repo: HabitLogRepository,
        skip_day_repo: SkipDayRepository,
        *,
        tz: tzinfo,
        lookback_days: int = DEFAULT_LOOKBACK_DAYS,
        clock: Callable[[], datetime] = now_utc,
    ):
        self.habit_repo = habit_repo
        self.log_repo = log_repo
        self.skip_day_repo = skip_day_repo
        self.tz = tz
        self.lookback_days = lookback_days
        self.clock = clock

    def today(self, as_of: Optional[datetime] = None) -> date:
        return civil_date(as_of or self.clock(), self.tz)

    def _window_start(self, today: date) -> date:
        return today - timedelta(days=self.lookback_days)

    # Read path
    def today_statuses(self, as_of: Optional[datetime] = None) -> list[HabitStatus]:
        """Return one status per active habit for the civil day of ``as_of``.

        Any failed read aborts the whole composition with ``StoreReadError``.
        """
        as_of = as_of or self.clock()
        today = self.today(as_of)
        since = self._window_start(today)

        with reading("habits"):
            habits = self.habit_repo.list_habits(active_only=True)
        with reading("today's skip day"):
            skip_day = self.skip_day_repo.get(today)
        with reading("today's habit log"):
            completed_keys = self.log_repo.keys_completed_on(today)
        with reading("habit log window"):
            log_entries = self.log_repo.list_in_window(None, since)
        with reading("skip day window"):
            skip_days = self.skip_day_repo.list_in_window(since)

        streaks = compute_streaks(
            habits,
            log_entries,
            skip_days,
            as_of,
            tz=self.tz,
            lookback_days=self.lookback_days,
        )
        return compose_today(
            habits,
            completed_keys,
            skip_day.reason if skip_day else None,
            streaks,
            weekday_of(today),
        )

    def day_summary(self, as_of: Optional[datetime] = None) -> DaySummary:
        as_of = as_of or self.clock()
        return summarize_day(self.today_statuses(as_of), self.today(as_of))

    # Write path
    def toggle(self, habit_key: str, as_of: Optional[datetime] = None) -> ToggleResult:
        """Flip today's completion for ``habit_key``.

        Completing reports a milestone when the streak ending yesterday plus
        today lands on one. Un-completing never reports a milestone.
        """
        as_of = as_of or self.clock()
        today = self.today(as_of)

        habit = self.get_habit(habit_key)
        with reading("habit log"):
            exists = self.log_repo.exists(habit_key, today)

        if exists:
            with writing("habit log"):
                self.log_repo.delete(habit_key, today)
            logger.info("Habit un-completed", extra={"habit_key": habit_key, "day": today})
            return ToggleResult(completed=False)

        with writing("habit log"):
            inserted = self.log_repo.insert(habit_key, today)
        if not inserted:
            logger.info(
                "Habit already completed by a concurrent toggle",
                extra={"habit_key": habit_key, "day": today},
            )
            return ToggleResult(completed=True)

        milestone = self._milestone_after_completion(habit, as_of, today)
        logger.info(
            "Habit completed",
            extra={"habit_key": habit_key, "day": today, "milestone": milestone},
        )
        return ToggleResult(completed=True, milestone=milestone)

    def _milestone_after_completion(self, habit: Habit, as_of: datetime, today: date) -> Optional[int]:
        # Best effort: the completion is already stored whatever happens here.
        since = self._window_start(today)
        try:
            with reading("habit log window"):
                log_entries = self.log_repo.list_in_window(habit.habit_key, since)
            with reading("skip day window"):
                skip_days = self.skip_day_repo.list_in_window(since)
        except StoreReadError:
            logger.warning(
                "Milestone check skipped after completion",
                extra={"habit_key": habit.habit_key},
                exc_info=True,
            )
            return None

        streaks = compute_streaks(
            [habit],
            log_entries,
            skip_days,
            as_of,
            tz=self.tz,
            lookback_days=self.lookback_days,
        )
        return milestone_for(streaks[habit.habit_key].streak + 1)

    # Habit management
    def list_habits(self, include_inactive: bool = False) -> list[Habit]:
        with reading("habits"):
            return self.habit_repo.list_habits(active_only=not include_inactive)

    def get_habit(self, habit_key: str) -> Habit:
        with reading("habit"):
            habit = self.habit_repo.get(habit_key)
        if habit is None:
            raise HabitNotFoundError(f"Unknown habit {habit_key!r}")
        return habit

    def create_habit(
        self,
        *,
        label: str,
        frequency: str = DAILY,
        specific_days: Optional[Iterable[int]] = None,
        skippable: bool = False,
        critical: bool = False,
    ) -> Habit:
        """Create a habit whose key is derived once from its label."""

        label = label.strip()
        habit_key = derive_habit_key(label)
        if not habit_key:
            raise HabitValidationError(
                "Label must contain at least one letter or digit",
                errors={"label": ["Please provide a habit label."]},
            )
        days = normalize_recurrence(frequency, specific_days)

        with reading("habits"):
            if self.habit_repo.get(habit_key) is not None:
                raise HabitValidationError(
                    f"A habit with key {habit_key!r} already exists",
                    errors={"label": ["A habit with this label already exists."]},
                )
            highest = self.habit_repo.max_sort_order()

        habit = Habit(
            habit_key=habit_key,
            label=label,
            frequency=frequency,
            specific_days=days,
            skippable=skippable,
            critical=critical,
            sort_order=(highest if highest is not None else -1) + 1,
        )
        with writing("habit"):
            created = self.habit_repo.insert(habit)
        logger.info("Habit created", extra={"habit_key": habit_key})
        return created

    def update_habit(self, habit_key: str, changes: dict[str, Any]) -> Habit:
        """Apply a partial update; the key itself never changes."""

        unknown = set(changes) - UPDATABLE_FIELDS
        if unknown:
            raise HabitValidationError(
                f"Cannot update {', '.join(sorted(unknown))}",
                errors={name: ["This field cannot be changed."] for name in sorted(unknown)},
            )
        nulls = sorted(name for name, value in changes.items() if value is None)
        if nulls:
            raise HabitValidationError(
                f"Cannot clear {', '.join(nulls)}",
                errors={name: ["This field cannot be null."] for name in nulls},
            )
        changes = dict(changes)
        if "label" in changes:
            if not isinstance(changes["label"], str):
                raise HabitValidationError(
                    "Label must be text", errors={"label": ["Label must be text."]}
                )
            changes["label"] = changes["label"].strip()
            if not changes["label"]:
                raise HabitValidationError(
                    "Label cannot be empty", errors={"label": ["Please provide a habit label."]}
                )
        if "frequency" in changes or "specific_days" in changes:
            current = self.get_habit(habit_key)
            frequency = changes.get("frequency", current.frequency)
            changes["frequency"] = frequency
            changes["specific_days"] = normalize_recurrence(
                frequency, changes.get("specific_days", current.specific_days)
            )

        with writing("habit"):
            updated = self.habit_repo.update(habit_key, changes)
        if updated is None:
            raise HabitNotFoundError(f"Unknown habit {habit_key!r}")
        return updated

    def delete_habit(self, habit_key: str) -> None:
        """Soft delete: the habit stops appearing but its log is kept."""

        with writing("habit"):
            found = self.habit_repo.soft_delete(habit_key)
        if not found:
            raise HabitNotFoundError(f"Unknown habit {habit_key!r}")
        logger.info("Habit deactivated", extra={"habit_key": habit_key})


__all__ = [
    "DAILY",
    "FREQUENCIES",
    "HabitTracker",
    "SPECIFIC_DAYS",
    "ToggleResult",
    "derive_habit_key",
    "normalize_recurrence",
]
