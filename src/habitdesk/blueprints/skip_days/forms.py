"""Skip day form definitions."""

from __future__ import annotations

import datetime as dt

from pydantic import BaseModel, ConfigDict, Field, field_validator

REASON_OPTIONS = ("Wedding", "Bridal Show", "Birthday", "Recovery", "Vacation", "Other")


class SkipDayForm(BaseModel):
    """Payload for adding a skip day."""

    model_config = ConfigDict(str_strip_whitespace=True, extra="forbid")

    date: dt.date
    reason: str = Field(max_length=120)
    auto_recovery: bool = False

    @field_validator("reason")
    @classmethod
    def validate_reason(cls, value: str) -> str:
        if not value:
            raise ValueError("Please provide a reason.")
        return value


__all__ = ["REASON_OPTIONS", "SkipDayForm"]
