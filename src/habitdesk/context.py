"""Application context for dependency injection."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from sqlalchemy.engine import Engine

from .config import BaseConfig
from .infra.database import SessionFactory, bootstrap_database
from .infra.repositories import (
    SQLModelHabitLogRepository,
    SQLModelHabitRepository,
    SQLModelSkipDayRepository,
)
from .services.tracker import HabitTracker


@dataclass
class AppContext:
    """Centralized application context with repositories and services."""

    # Configuration
    config: BaseConfig

    # Storage
    engine: Engine
    session_factory: SessionFactory

    # Repositories
    habit_repo: SQLModelHabitRepository
    log_repo: SQLModelHabitLogRepository
    skip_day_repo: SQLModelSkipDayRepository

    # Services
    tracker: HabitTracker


def create_app_context(config: Optional[BaseConfig] = None) -> AppContext:
    """Create the engine, schema, repositories and tracker for ``config``."""

    if config is None:
        config = BaseConfig()

    engine, session_factory = bootstrap_database(config)

    habit_repo = SQLModelHabitRepository(session_factory)
    log_repo = SQLModelHabitLogRepository(session_factory)
    skip_day_repo = SQLModelSkipDayRepository(session_factory)

    tracker = HabitTracker(
        habit_repo,
        log_repo,
        skip_day_repo,
        tz=config.tzinfo(),
        lookback_days=config.STREAK_LOOKBACK_DAYS,
    )

    return AppContext(
        config=config,
        engine=engine,
        session_factory=session_factory,
        habit_repo=habit_repo,
        log_repo=log_repo,
        skip_day_repo=skip_day_repo,
        tracker=tracker,
    )
