"""Blueprint exports."""

from . import habits, skip_days

__all__ = [
    "habits",
    "skip_days",
]
