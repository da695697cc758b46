"""Repository protocol definitions for domain layer."""

from .habit import HabitLogRepository, HabitRepository
from .skip_day import SkipDayRepository

__all__ = [
    "HabitLogRepository",
    "HabitRepository",
    "SkipDayRepository",
]
