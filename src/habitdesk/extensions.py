"""Flask wiring for the application context."""

from __future__ import annotations

from flask import Flask, current_app

from .context import AppContext

EXTENSION_KEY = "habitdesk"


def init_app(app: Flask, ctx: AppContext) -> None:
    """Attach the application context to the Flask app.

    Repositories open and close their own sessions per call, so nothing has to
    be torn down per request.
    """

    app.extensions[EXTENSION_KEY] = ctx


def get_context() -> AppContext:
    """Return the context attached to the current Flask app."""

    ctx = current_app.extensions.get(EXTENSION_KEY)
    if ctx is None:  # pragma: no cover - exercised only on misconfigured apps
        raise RuntimeError("HabitDesk context not initialized")
    return ctx
