"""Organisation-wide skip days."""

from __future__ import annotations

import datetime as dt
from typing import ClassVar, Optional

from sqlmodel import Field, SQLModel

RECOVERY_REASON = "Recovery"


class SkipDay(SQLModel, table=True):
    """A date on which skippable habits count as satisfied."""

    __tablename__: ClassVar[str] = "skip_days"

    id: Optional[int] = Field(default=None, primary_key=True)
    date: dt.date = Field(nullable=False, index=True)
    reason: str = Field(nullable=False, max_length=120)
    auto_recovery: bool = Field(default=False, nullable=False)
    created_at: dt.datetime = Field(
        default_factory=lambda: dt.datetime.now(dt.timezone.utc),
        nullable=False,
    )
