"""Unit tests for repository implementations."""

from datetime import date

import pytest
from sqlalchemy import event
from sqlalchemy.exc import IntegrityError
from sqlmodel import SQLModel, create_engine

from habitdesk.infra.database import create_session_factory
from habitdesk.infra.repositories import SQLModelHabitLogRepository
from habitdesk.models import Habit

MARCH_20 = date(2026, 3, 20)
MARCH_21 = date(2026, 3, 21)


def test_habit_repository_crud(habit_repo):
    """Test habit repository CRUD operations."""
    assert habit_repo.max_sort_order() is None

    created = habit_repo.insert(Habit(habit_key="stretch", label="Stretch", sort_order=1))
    habit_repo.insert(Habit(habit_key="read", label="Read", sort_order=0))

    assert created.id is not None
    assert created.frequency == "daily"
    assert created.specific_days == [0, 1, 2, 3, 4, 5, 6]
    assert created.created_at is not None
    assert habit_repo.max_sort_order() == 1

    # List follows sort order
    assert [h.habit_key for h in habit_repo.list_habits()] == ["read", "stretch"]

    # Update
    updated = habit_repo.update("stretch", {"label": "Evening stretch", "specific_days": [1, 3]})
    assert updated.label == "Evening stretch"
    assert habit_repo.get("stretch").specific_days == [1, 3]
    assert habit_repo.update("missing", {"label": "x"}) is None

    # Soft delete
    assert habit_repo.soft_delete("stretch") is True
    assert [h.habit_key for h in habit_repo.list_habits()] == ["read"]
    assert len(habit_repo.list_habits(active_only=False)) == 2
    assert habit_repo.soft_delete("missing") is False


def test_habit_log_repository(habit_repo, log_repo):
    """Test completion log insert, lookup and removal."""
    habit_repo.insert(Habit(habit_key="stretch", label="Stretch"))
    habit_repo.insert(Habit(habit_key="read", label="Read"))

    assert log_repo.insert("stretch", MARCH_20) is True
    assert log_repo.insert("stretch", MARCH_21) is True
    assert log_repo.insert("read", MARCH_21) is True

    assert log_repo.exists("stretch", MARCH_21)
    assert not log_repo.exists("read", MARCH_20)
    assert log_repo.keys_completed_on(MARCH_21) == {"stretch", "read"}

    assert log_repo.list_in_window("stretch", MARCH_20) == [
        ("stretch", MARCH_20),
        ("stretch", MARCH_21),
    ]
    assert sorted(log_repo.list_in_window(None, MARCH_21)) == [
        ("read", MARCH_21),
        ("stretch", MARCH_21),
    ]

    assert log_repo.delete("stretch", MARCH_21) is True
    assert log_repo.delete("stretch", MARCH_21) is False
    assert not log_repo.exists("stretch", MARCH_21)


def test_duplicate_log_entry_is_rejected(habit_repo, log_repo):
    """The (habit_key, completed_date) pair is unique."""
    habit_repo.insert(Habit(habit_key="stretch", label="Stretch"))

    assert log_repo.insert("stretch", MARCH_21) is True
    assert log_repo.insert("stretch", MARCH_21) is False
    assert log_repo.list_in_window("stretch", MARCH_21) == [("stretch", MARCH_21)]


def test_skip_day_repository(skip_day_repo):
    """Test skip day insert, window listing and delete."""
    early = skip_day_repo.insert(date(2026, 1, 1), "New Year", False)
    skip_day_repo.insert(MARCH_21, "Wedding", True)

    assert skip_day_repo.get(MARCH_21).auto_recovery is True
    assert skip_day_repo.get(MARCH_20) is None
    assert [row.reason for row in skip_day_repo.list_in_window(date(2026, 3, 1))] == ["Wedding"]
    assert len(skip_day_repo.list_all()) == 2

    assert skip_day_repo.delete(early.id) is True
    assert skip_day_repo.delete(early.id) is False
    assert [row.reason for row in skip_day_repo.list_all()] == ["Wedding"]


def test_log_insert_for_unknown_habit_raises_when_foreign_keys_enforced(tmp_path):
    """Only the unique conflict counts as already completed."""
    engine = create_engine(f"sqlite:///{tmp_path / 'fk.db'}")

    @event.listens_for(engine, "connect")
    def _enable_foreign_keys(dbapi_connection, connection_record):
        dbapi_connection.execute("PRAGMA foreign_keys=ON")

    SQLModel.metadata.create_all(engine)
    log_repo = SQLModelHabitLogRepository(create_session_factory(engine))

    with pytest.raises(IntegrityError):
        log_repo.insert("ghost", MARCH_21)
    assert not log_repo.exists("ghost", MARCH_21)

    engine.dispose()
