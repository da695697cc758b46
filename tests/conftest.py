"""Pytest configuration and shared fixtures for HabitDesk tests.

This module provides database fixtures, repository and tracker fixtures, and
factories for habits, log entries and skip days, all pinned to a fixed
"now" so streak arithmetic is deterministic.
"""

from __future__ import annotations

import tempfile
from datetime import datetime
from pathlib import Path

import pytest
from sqlmodel import SQLModel, create_engine

from habitdesk.infra.database import create_session_factory
from habitdesk.infra.repositories import (
    SQLModelHabitLogRepository,
    SQLModelHabitRepository,
    SQLModelSkipDayRepository,
)
from habitdesk.models import ALL_WEEKDAYS, Habit
from habitdesk.services.tracker import HabitTracker, derive_habit_key

from support import AS_OF, CREATED, TORONTO, days_ago


# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture(scope="function")
def db_engine():
    """Create an isolated SQLite database file for each test.

    Yields:
        Engine: SQLModel engine connected to test database
    """
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        db_path = Path(f.name)

    engine = create_engine(f"sqlite:///{db_path}", echo=False)
    SQLModel.metadata.create_all(engine)

    yield engine

    engine.dispose()
    db_path.unlink(missing_ok=True)


@pytest.fixture(scope="function")
def session_factory(db_engine):
    """Session factory matching the one the application wires up."""
    return create_session_factory(db_engine)


@pytest.fixture
def habit_repo(session_factory) -> SQLModelHabitRepository:
    return SQLModelHabitRepository(session_factory)


@pytest.fixture
def log_repo(session_factory) -> SQLModelHabitLogRepository:
    return SQLModelHabitLogRepository(session_factory)


@pytest.fixture
def skip_day_repo(session_factory) -> SQLModelSkipDayRepository:
    return SQLModelSkipDayRepository(session_factory)


@pytest.fixture
def tracker(habit_repo, log_repo, skip_day_repo) -> HabitTracker:
    """Tracker in Toronto time whose clock is frozen at AS_OF."""
    return HabitTracker(
        habit_repo,
        log_repo,
        skip_day_repo,
        tz=TORONTO,
        clock=lambda: AS_OF,
    )


# =============================================================================
# Test Data Factories
# =============================================================================


@pytest.fixture
def habit_factory(habit_repo):
    """Factory for creating and persisting habits.

    Returns:
        Callable: Function that creates Habit rows with sensible defaults
    """
    counter = {"sort": 0}

    def _create_habit(
        label: str = "Test Habit",
        specific_days: tuple[int, ...] | list[int] = ALL_WEEKDAYS,
        skippable: bool = False,
        critical: bool = False,
        active: bool = True,
        created_at: datetime | None = CREATED,
    ) -> Habit:
        days = sorted(specific_days)
        habit = Habit(
            habit_key=derive_habit_key(label),
            label=label,
            frequency="daily" if len(days) == 7 else "specific_days",
            specific_days=days,
            skippable=skippable,
            critical=critical,
            active=active,
            sort_order=counter["sort"],
            created_at=created_at,
        )
        counter["sort"] += 1
        return habit_repo.insert(habit)

    return _create_habit


@pytest.fixture
def log_factory(log_repo):
    """Factory recording completions: ``log_factory("run", 1, 2, 3)`` logs T-1..T-3."""

    def _log(habit_key: str, *offsets: int) -> None:
        for offset in offsets:
            assert log_repo.insert(habit_key, days_ago(offset))

    return _log


@pytest.fixture
def skip_day_factory(skip_day_repo):
    """Factory recording skip days by offset from TODAY."""

    def _skip(offset: int, reason: str = "Vacation", auto_recovery: bool = False):
        return skip_day_repo.insert(days_ago(offset), reason, auto_recovery)

    return _skip
