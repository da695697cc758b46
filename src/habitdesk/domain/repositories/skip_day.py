"""Skip day repository protocol."""

from __future__ import annotations

from datetime import date
from typing import Optional, Protocol

from ...models.skip_day import SkipDay


class SkipDayRepository(Protocol):
    """Repository for organisation-wide skip days."""

    def get(self, day: date) -> Optional[SkipDay]:
        """Return the skip day recorded for a date, if any."""
        ...

    def list_all(self) -> list[SkipDay]:
        """List every skip day ordered by date."""
        ...

    def list_in_window(self, since: date) -> list[SkipDay]:
        """List skip days on or after ``since``."""
        ...

    def insert(self, day: date, reason: str, auto_recovery: bool) -> SkipDay:
        """Persist a skip day."""
        ...

    def delete(self, skip_day_id: int) -> bool:
        """Remove a skip day; False when the id is unknown."""
        ...
