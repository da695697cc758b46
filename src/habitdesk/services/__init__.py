"""Service layer exports."""

from .habits import (
    MILESTONES,
    DaySummary,
    HabitStatus,
    StreakStats,
    build_skip_index,
    compose_today,
    compute_streaks,
    is_applicable,
    milestone_for,
    summarize_day,
)
from .tracker import HabitTracker, ToggleResult

__all__ = [
    "DaySummary",
    "HabitStatus",
    "HabitTracker",
    "MILESTONES",
    "StreakStats",
    "ToggleResult",
    "build_skip_index",
    "compose_today",
    "compute_streaks",
    "is_applicable",
    "milestone_for",
    "summarize_day",
]
