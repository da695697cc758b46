"""Skip day routes."""

from __future__ import annotations

from typing import Any

from flask import jsonify, request
from pydantic import ValidationError

from ...exceptions import RecoveryDayError
from ...extensions import get_context
from ...models.skip_day import SkipDay
from ...services.skip_days import add_skip_day, delete_skip_day, list_skip_days
from ..forms import validation_errors
from . import bp
from .forms import REASON_OPTIONS, SkipDayForm


def _skip_day_to_dict(skip_day: SkipDay) -> dict[str, Any]:
    return {
        "id": skip_day.id,
        "date": skip_day.date.isoformat(),
        "reason": skip_day.reason,
        "auto_recovery": skip_day.auto_recovery,
    }


@bp.get("/")
def list_days():
    """List all skip days ordered by date."""

    skip_days = list_skip_days(get_context().skip_day_repo)
    return jsonify(
        {
            "skip_days": [_skip_day_to_dict(skip_day) for skip_day in skip_days],
            "reason_options": list(REASON_OPTIONS),
        }
    )


@bp.post("/")
def add_day():
    """Add a skip day, plus a recovery day when ``auto_recovery`` is set."""

    payload = request.get_json(silent=True) or {}
    try:
        form = SkipDayForm.model_validate(payload)
    except ValidationError as exc:
        return jsonify({"error": "Invalid skip day", "errors": validation_errors(exc)}), 400

    repo = get_context().skip_day_repo
    try:
        created = add_skip_day(repo, form.date, form.reason, form.auto_recovery)
    except RecoveryDayError as exc:
        # The primary record exists; report the partial success.
        return (
            jsonify(
                {
                    "created": [_skip_day_to_dict(exc.primary)],
                    "warning": str(exc),
                }
            ),
            201,
        )
    return jsonify({"created": [_skip_day_to_dict(skip_day) for skip_day in created]}), 201


@bp.delete("/<int:skip_day_id>")
def delete_day(skip_day_id: int):
    delete_skip_day(get_context().skip_day_repo, skip_day_id)
    return "", 204
