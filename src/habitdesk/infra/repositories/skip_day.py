"""SQLModel implementation of the skip day repository."""

from __future__ import annotations

from datetime import date
from typing import Optional

from sqlmodel import select

from ...models.skip_day import SkipDay
from ..database import SessionFactory


class SQLModelSkipDayRepository:
    """SQLModel-based skip day repository."""

    def __init__(self, session_factory: SessionFactory):
        self.session_factory = session_factory

    def get(self, day: date) -> Optional[SkipDay]:
        # Duplicates are tolerated; the latest insert wins like the index does.
        with self.session_factory() as session:
            obj = session.exec(
                select(SkipDay).where(SkipDay.date == day).order_by(SkipDay.id.desc())  # type: ignore
            ).first()
            if obj:
                session.expunge(obj)
            return obj

    def list_all(self) -> list[SkipDay]:
        with self.session_factory() as session:
            rows = list(session.exec(select(SkipDay).order_by(SkipDay.date, SkipDay.id)).all())  # type: ignore
            session.expunge_all()
            return rows

    def list_in_window(self, since: date) -> list[SkipDay]:
        with self.session_factory() as session:
            statement = (
                select(SkipDay)
                .where(SkipDay.date >= since)
                .order_by(SkipDay.date, SkipDay.id)  # type: ignore
            )
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def insert(self, day: date, reason: str, auto_recovery: bool) -> SkipDay:
        with self.session_factory() as session:
            skip_day = SkipDay(date=day, reason=reason, auto_recovery=auto_recovery)
            session.add(skip_day)
            session.commit()
            session.refresh(skip_day)
            session.expunge(skip_day)
            return skip_day

    def delete(self, skip_day_id: int) -> bool:
        with self.session_factory() as session:
            skip_day = session.get(SkipDay, skip_day_id)
            if skip_day is None:
                return False
            session.delete(skip_day)
            session.commit()
            return True
