"""Habit form definitions."""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class HabitFrequency(str, Enum):
    """Supported recurrence options for habits."""

    DAILY = "daily"
    SPECIFIC_DAYS = "specific_days"


def _check_weekdays(value: list[int]) -> list[int]:
    if any(day < 0 or day > 6 for day in value):
        raise ValueError("Weekdays must be between 0 (Sunday) and 6 (Saturday).")
    return sorted(set(value))


class HabitForm(BaseModel):
    """Payload for creating a habit."""

    model_config = ConfigDict(str_strip_whitespace=True, extra="forbid")

    label: str = Field(description="Display label; the habit key is derived from it", max_length=120)
    frequency: HabitFrequency = Field(default=HabitFrequency.DAILY)
    specific_days: list[int] = Field(default_factory=list, description="Weekdays, Sunday = 0")
    skippable: bool = False
    critical: bool = False

    @field_validator("label")
    @classmethod
    def validate_label(cls, value: str) -> str:
        if not value:
            raise ValueError("Please provide a habit label.")
        return value

    @field_validator("specific_days")
    @classmethod
    def validate_days(cls, value: list[int]) -> list[int]:
        return _check_weekdays(value)

    @model_validator(mode="after")
    def ensure_recurrence(self) -> "HabitForm":
        """Require at least one weekday for a specific-days habit."""

        if self.frequency is HabitFrequency.SPECIFIC_DAYS and not self.specific_days:
            raise ValueError("Pick at least one weekday.")
        return self


class HabitUpdateForm(BaseModel):
    """Partial update payload; the habit key is not accepted."""

    model_config = ConfigDict(str_strip_whitespace=True, extra="forbid")

    label: Optional[str] = Field(default=None, max_length=120)
    frequency: Optional[HabitFrequency] = None
    specific_days: Optional[list[int]] = None
    skippable: Optional[bool] = None
    critical: Optional[bool] = None
    active: Optional[bool] = None
    sort_order: Optional[int] = Field(default=None, ge=0)

    @field_validator("*", mode="before")
    @classmethod
    def reject_null(cls, value: Any) -> Any:
        """Fields may be omitted but not sent as null."""

        if value is None:
            raise ValueError("This field cannot be null.")
        return value

    @field_validator("specific_days")
    @classmethod
    def validate_days(cls, value: list[int]) -> list[int]:
        return _check_weekdays(value)

    def changes(self) -> dict[str, Any]:
        """Return only the fields the caller sent."""

        changes = self.model_dump(exclude_unset=True)
        if isinstance(changes.get("frequency"), HabitFrequency):
            changes["frequency"] = changes["frequency"].value
        return changes


__all__ = ["HabitForm", "HabitFrequency", "HabitUpdateForm"]
