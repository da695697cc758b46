"""SQLModel implementation of the habit and habit log repositories."""

from __future__ import annotations

from datetime import date
from typing import Any, Optional

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlmodel import select

from ...domain.repositories.habit import LogEntry
from ...models.habit import Habit, HabitLog
from ..database import SessionFactory


class SQLModelHabitRepository:
    """SQLModel-based habit repository implementation."""

    def __init__(self, session_factory: SessionFactory):
        """Initialize with a session factory."""
        self.session_factory = session_factory

    def list_habits(self, active_only: bool = True) -> list[Habit]:
        """List habits ordered by sort position."""
        with self.session_factory() as session:
            statement = select(Habit).order_by(Habit.sort_order, Habit.id)  # type: ignore
            if active_only:
                statement = statement.where(Habit.active == True)  # noqa: E712
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def get(self, habit_key: str) -> Optional[Habit]:
        with self.session_factory() as session:
            obj = session.exec(select(Habit).where(Habit.habit_key == habit_key)).first()
            if obj:
                session.expunge(obj)
            return obj

    def insert(self, habit: Habit) -> Habit:
        with self.session_factory() as session:
            session.add(habit)
            session.commit()
            session.refresh(habit)
            session.expunge(habit)
            return habit

    def update(self, habit_key: str, changes: dict[str, Any]) -> Optional[Habit]:
        """Apply a partial update; None when the key is unknown."""
        with self.session_factory() as session:
            habit = session.exec(select(Habit).where(Habit.habit_key == habit_key)).first()
            if habit is None:
                return None
            for field, value in changes.items():
                setattr(habit, field, value)
            session.add(habit)
            session.commit()
            session.refresh(habit)
            session.expunge(habit)
            return habit

    def soft_delete(self, habit_key: str) -> bool:
        return self.update(habit_key, {"active": False}) is not None

    def max_sort_order(self) -> Optional[int]:
        with self.session_factory() as session:
            return session.exec(select(func.max(Habit.sort_order))).one()


class SQLModelHabitLogRepository:
    """Completion log backed by the ``habit_logs`` table."""

    def __init__(self, session_factory: SessionFactory):
        self.session_factory = session_factory

    def exists(self, habit_key: str, day: date) -> bool:
        with self.session_factory() as session:
            statement = (
                select(HabitLog.id)
                .where(HabitLog.habit_key == habit_key)
                .where(HabitLog.completed_date == day)
            )
            return session.exec(statement).first() is not None

    def insert(self, habit_key: str, day: date) -> bool:
        """Insert an entry; False when the unique constraint already holds one.

        Any other integrity failure, such as an unknown habit key on a store
        that enforces foreign keys, is re-raised.
        """
        with self.session_factory() as session:
            session.add(HabitLog(habit_key=habit_key, completed_date=day))
            try:
                session.commit()
            except IntegrityError:
                session.rollback()
                if self.exists(habit_key, day):
                    return False
                raise
            return True

    def delete(self, habit_key: str, day: date) -> bool:
        with self.session_factory() as session:
            entry = session.exec(
                select(HabitLog)
                .where(HabitLog.habit_key == habit_key)
                .where(HabitLog.completed_date == day)
            ).first()
            if entry is None:
                return False
            session.delete(entry)
            session.commit()
            return True

    def list_in_window(self, habit_key: Optional[str], since: date) -> list[LogEntry]:
        """Entries on or after ``since``; all habits when ``habit_key`` is None."""
        with self.session_factory() as session:
            statement = (
                select(HabitLog.habit_key, HabitLog.completed_date)
                .where(HabitLog.completed_date >= since)
                .order_by(HabitLog.completed_date)  # type: ignore
            )
            if habit_key is not None:
                statement = statement.where(HabitLog.habit_key == habit_key)
            return [(key, day) for key, day in session.exec(statement).all()]

    def keys_completed_on(self, day: date) -> set[str]:
        with self.session_factory() as session:
            statement = select(HabitLog.habit_key).where(HabitLog.completed_date == day)
            return set(session.exec(statement).all())
