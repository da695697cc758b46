"""Habit tracking data structures."""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import ClassVar, Optional

from sqlalchemy import JSON, Column, UniqueConstraint
from sqlmodel import Field, SQLModel

ALL_WEEKDAYS: tuple[int, ...] = (0, 1, 2, 3, 4, 5, 6)


class Habit(SQLModel, table=True):
    """A recurring obligation tracked once per civil day."""

    __tablename__: ClassVar[str] = "habits"

    id: Optional[int] = Field(default=None, primary_key=True)
    habit_key: str = Field(nullable=False, unique=True, index=True, max_length=80)
    label: str = Field(nullable=False, max_length=120)
    frequency: str = Field(default="daily", max_length=32)
    # Weekday indices, Sunday = 0.
    specific_days: list[int] = Field(
        default_factory=lambda: list(ALL_WEEKDAYS),
        sa_column=Column(JSON, nullable=False),
    )
    skippable: bool = Field(default=False, nullable=False)
    critical: bool = Field(default=False, nullable=False)
    active: bool = Field(default=True, nullable=False, index=True)
    sort_order: int = Field(default=0, nullable=False, index=True)
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        nullable=False,
    )


class HabitLog(SQLModel, table=True):
    """A habit completed on one civil date; at most one per (habit, date)."""

    __tablename__: ClassVar[str] = "habit_logs"
    __table_args__ = (
        UniqueConstraint("habit_key", "completed_date", name="uq_habit_logs_key_date"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    habit_key: str = Field(foreign_key="habits.habit_key", nullable=False, index=True)
    completed_date: date = Field(nullable=False, index=True)
