"""Habit routes."""

from __future__ import annotations

from flask import jsonify, request
from pydantic import ValidationError

from ...extensions import get_context
from ...services.habits import habit_to_dict
from ..forms import validation_errors
from . import bp
from .forms import HabitForm, HabitUpdateForm


def _truthy(value: str | None) -> bool:
    return (value or "").strip().lower() in {"1", "true", "yes", "on"}


@bp.get("/today")
def today_statuses():
    """Return today's status for every active habit."""

    tracker = get_context().tracker
    as_of = tracker.clock()
    statuses = tracker.today_statuses(as_of)
    return jsonify(
        {
            "date": tracker.today(as_of).isoformat(),
            "habits": [status.to_dict() for status in statuses],
        }
    )


@bp.get("/summary")
def day_summary():
    """Return the end-of-day score for today."""

    summary = get_context().tracker.day_summary()
    return jsonify(summary.to_dict())


@bp.post("/<habit_key>/toggle")
def toggle_habit(habit_key: str):
    """Toggle habit completion state for today."""

    result = get_context().tracker.toggle(habit_key)
    return jsonify(result.to_dict())


@bp.get("/")
def list_habits():
    """List habits by sort order; ``?include_inactive=1`` adds deactivated ones."""

    habits = get_context().tracker.list_habits(
        include_inactive=_truthy(request.args.get("include_inactive"))
    )
    return jsonify([habit_to_dict(habit) for habit in habits])


@bp.post("/")
def create_habit():
    payload = request.get_json(silent=True) or {}
    try:
        form = HabitForm.model_validate(payload)
    except ValidationError as exc:
        return jsonify({"error": "Invalid habit", "errors": validation_errors(exc)}), 400

    habit = get_context().tracker.create_habit(
        label=form.label,
        frequency=form.frequency.value,
        specific_days=form.specific_days,
        skippable=form.skippable,
        critical=form.critical,
    )
    return jsonify(habit_to_dict(habit)), 201


@bp.patch("/<habit_key>")
def update_habit(habit_key: str):
    payload = request.get_json(silent=True) or {}
    try:
        form = HabitUpdateForm.model_validate(payload)
    except ValidationError as exc:
        return jsonify({"error": "Invalid habit update", "errors": validation_errors(exc)}), 400

    habit = get_context().tracker.update_habit(habit_key, form.changes())
    return jsonify(habit_to_dict(habit))


@bp.delete("/<habit_key>")
def delete_habit(habit_key: str):
    """Soft delete a habit."""

    get_context().tracker.delete_habit(habit_key)
    return "", 204
