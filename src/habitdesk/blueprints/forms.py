"""Shared helpers for pydantic form models."""

from __future__ import annotations

from pydantic import ValidationError


def validation_errors(exc: ValidationError) -> dict[str, list[str]]:
    """Flatten pydantic errors into ``{field: [messages]}``."""

    structured: dict[str, list[str]] = {}
    for error in exc.errors(include_url=False):
        loc = error.get("loc", ())
        key = str(loc[0]) if loc else "__root__"
        structured.setdefault(key, []).append(error.get("msg", "Invalid value"))
    return structured


__all__ = ["validation_errors"]
