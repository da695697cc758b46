"""Concrete repository implementations using SQLModel."""

from .habit import SQLModelHabitLogRepository, SQLModelHabitRepository
from .skip_day import SQLModelSkipDayRepository

__all__ = [
    "SQLModelHabitLogRepository",
    "SQLModelHabitRepository",
    "SQLModelSkipDayRepository",
]
