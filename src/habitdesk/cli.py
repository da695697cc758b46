"""Flask CLI commands for HabitDesk."""

from __future__ import annotations

from datetime import date

import click


def _context():
    from .extensions import get_context

    return get_context()


def init_app(app) -> None:
    """Register CLI commands on the Flask app."""

    @app.cli.command("habitdesk-today")
    def habitdesk_today() -> None:
        """Print today's habit statuses."""

        tracker = _context().tracker
        as_of = tracker.clock()
        statuses = tracker.today_statuses(as_of)
        click.echo(f"Habits for {tracker.today(as_of).isoformat()}")
        for status in statuses:
            if not status.applicable:
                continue
            if status.skipped:
                mark = "skip"
            elif status.completed:
                mark = "done"
            else:
                mark = "todo"
            flag = " [CRITICAL]" if status.habit.critical and mark == "todo" else ""
            click.echo(
                f"  [{mark}] {status.habit.label}{flag} "
                f"(streak {status.streak}, missed {status.missed_days})"
            )
        summary = tracker.day_summary(as_of)
        click.echo(f"Score: {summary.score}% ({summary.completed + summary.skipped}/{summary.total})")

    @app.cli.command("habitdesk-toggle")
    @click.argument("habit_key")
    def habitdesk_toggle(habit_key: str) -> None:
        """Toggle today's completion for HABIT_KEY."""

        result = _context().tracker.toggle(habit_key)
        state = "completed" if result.completed else "reopened"
        click.echo(f"{habit_key}: {state}")
        if result.milestone:
            click.echo(f"{result.milestone}-day streak!")

    @app.cli.command("habitdesk-add-skip-day")
    @click.argument("day", type=click.DateTime(formats=["%Y-%m-%d"]))
    @click.argument("reason")
    @click.option("--recovery", is_flag=True, default=False, help="Also skip the following day")
    def habitdesk_add_skip_day(day, reason: str, recovery: bool) -> None:
        """Add a skip day on DAY (YYYY-MM-DD) with REASON."""

        from .exceptions import RecoveryDayError
        from .services.skip_days import add_skip_day

        skip_date: date = day.date()
        try:
            created = add_skip_day(_context().skip_day_repo, skip_date, reason, recovery)
        except RecoveryDayError as exc:
            click.echo(str(exc), err=True)
            raise SystemExit(1) from exc
        for skip_day in created:
            click.echo(f"Skip day added: {skip_day.date.isoformat()} ({skip_day.reason})")
