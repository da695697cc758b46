"""
Exception classes for HabitDesk.
"""

from __future__ import annotations

from typing import Any


class HabitDeskError(Exception):
    """Base exception for all HabitDesk errors."""
    pass


class StoreError(HabitDeskError):
    """Raised when the backing store rejects or fails a call."""
    pass


class StoreReadError(StoreError):
    """Raised when a listing or lookup against the store fails."""
    pass


class StoreWriteError(StoreError):
    """Raised when an insert, update or delete against the store fails."""
    pass


class RecoveryDayError(StoreWriteError):
    """Raised when a skip day was stored but its recovery day was not."""

    def __init__(self, message: str, *, primary: Any = None):
        super().__init__(message)
        self.primary = primary


class HabitNotFoundError(HabitDeskError):
    """Raised when a habit key does not match any stored habit."""
    pass


class SkipDayNotFoundError(HabitDeskError):
    """Raised when a skip day id does not match any stored record."""
    pass


class HabitValidationError(HabitDeskError, ValueError):
    """Raised when habit fields are invalid."""

    def __init__(self, message: str, *, errors: dict[str, list[str]] | None = None):
        super().__init__(message)
        self.errors = errors or {}
