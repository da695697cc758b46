"""Habit and habit log repository protocols."""

from __future__ import annotations

from datetime import date
from typing import Any, Optional, Protocol

from ...models.habit import Habit

LogEntry = tuple[str, date]


class HabitRepository(Protocol):
    """Repository for managing habit entities."""

    def list_habits(self, active_only: bool = True) -> list[Habit]:
        """List habits ordered by sort position."""
        ...

    def get(self, habit_key: str) -> Optional[Habit]:
        """Retrieve a habit by key, active or not."""
        ...

    def insert(self, habit: Habit) -> Habit:
        """Persist a new habit."""
        ...

    def update(self, habit_key: str, changes: dict[str, Any]) -> Optional[Habit]:
        """Apply a partial update; None when the key is unknown."""
        ...

    def soft_delete(self, habit_key: str) -> bool:
        """Clear the active flag; False when the key is unknown."""
        ...

    def max_sort_order(self) -> Optional[int]:
        """Highest sort position in use, None without habits."""
        ...


class HabitLogRepository(Protocol):
    """Repository for completion facts, unique per (habit, date)."""

    def exists(self, habit_key: str, day: date) -> bool:
        ...

    def insert(self, habit_key: str, day: date) -> bool:
        """Insert an entry; False when one already exists for that date."""
        ...

    def delete(self, habit_key: str, day: date) -> bool:
        ...

    def list_in_window(self, habit_key: Optional[str], since: date) -> list[LogEntry]:
        """Entries on or after ``since`` for one habit, or all habits when None."""
        ...

    def keys_completed_on(self, day: date) -> set[str]:
        ...
