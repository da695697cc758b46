"""Skip day management, including the automatic recovery day."""

from __future__ import annotations

from datetime import date, timedelta

from sqlalchemy.exc import SQLAlchemyError

from ..domain.repositories import SkipDayRepository
from ..exceptions import RecoveryDayError, SkipDayNotFoundError
from ..logging_config import get_logger
from ..models.skip_day import RECOVERY_REASON, SkipDay
from .tracker import reading, writing

logger = get_logger("skip_days")


def list_skip_days(repo: SkipDayRepository) -> list[SkipDay]:
    """Return every skip day ordered by date."""
    with reading("skip days"):
        return repo.list_all()


def add_skip_day(
    repo: SkipDayRepository, day: date, reason: str, auto_recovery: bool = False
) -> list[SkipDay]:
    """Record a skip day, and the following day as "Recovery" when asked.

    Returns the created records. If the recovery insert fails after the primary
    one succeeded, ``RecoveryDayError`` carries the stored primary record.
    """
    reason = reason.strip()
    if not reason:
        raise ValueError("A skip day needs a reason.")

    with writing("skip day"):
        primary = repo.insert(day, reason, auto_recovery)
    logger.info(
        "Skip day added",
        extra={"day": day, "reason": reason, "auto_recovery": auto_recovery},
    )
    if not auto_recovery:
        return [primary]

    recovery_day = day + timedelta(days=1)
    try:
        recovery = repo.insert(recovery_day, RECOVERY_REASON, False)
    except SQLAlchemyError as exc:
        logger.warning(
            "Recovery day insert failed", extra={"day": recovery_day}, exc_info=True
        )
        raise RecoveryDayError(
            f"Skip day added but recovery day failed: {exc}", primary=primary
        ) from exc
    return [primary, recovery]


def delete_skip_day(repo: SkipDayRepository, skip_day_id: int) -> None:
    with writing("skip day"):
        found = repo.delete(skip_day_id)
    if not found:
        raise SkipDayNotFoundError(f"Unknown skip day {skip_day_id}")


__all__ = ["add_skip_day", "delete_skip_day", "list_skip_days"]
