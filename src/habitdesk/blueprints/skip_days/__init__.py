"""Skip days blueprint package."""

from __future__ import annotations

from flask import Blueprint

bp = Blueprint("skip_days", __name__, url_prefix="/skip-days")

from . import routes  # noqa: E402,F401 - import routes for registration

__all__ = ["bp"]
