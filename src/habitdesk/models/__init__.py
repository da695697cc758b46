"""SQLModel table exports."""

from .habit import ALL_WEEKDAYS, Habit, HabitLog
from .skip_day import RECOVERY_REASON, SkipDay

__all__ = [
    "ALL_WEEKDAYS",
    "Habit",
    "HabitLog",
    "RECOVERY_REASON",
    "SkipDay",
]
