"""Utility functions for the application."""

from __future__ import annotations

import datetime
from functools import wraps
from typing import Any

from flask import make_response, request
from werkzeug.datastructures import MultiDict


def utcnow() -> datetime.datetime:
    """Return the current time as an aware UTC datetime."""
    return datetime.datetime.now(datetime.timezone.utc)


def parse_datetime(value: Any) -> datetime.datetime | None:
    """Parse an ISO-8601 date or datetime string into an aware UTC datetime.

    Accepts ``YYYY-MM-DD``, ``YYYY-MM-DDTHH:MM[:SS]`` and the ``Z`` or offset
    suffixed forms browsers send. Naive values are taken to be UTC.

    Returns:
        The parsed datetime, or None if the value cannot be parsed.
    """
    if isinstance(value, datetime.datetime):
        parsed = value
    elif isinstance(value, datetime.date):
        parsed = datetime.datetime.combine(value, datetime.time.min)
    elif isinstance(value, str) and value.strip():
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.datetime.fromisoformat(text)
        except ValueError:
            return None
    else:
        return None

    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=datetime.timezone.utc)
    return parsed.astimezone(datetime.timezone.utc)


def to_iso(value: Any) -> Any:
    """Render datetimes as ISO-8601 strings, leaving other values untouched."""
    if isinstance(value, datetime.datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=datetime.timezone.utc)
        return value.isoformat()
    return value


def json_formdata() -> MultiDict:
    """Wrap the JSON request body so WTForms can validate it.

    Null values are dropped so optional fields behave as if omitted.
    """
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        payload = {}
    return MultiDict({k: v for k, v in payload.items() if v is not None})


def no_cache(f):
    """Mark a JSON response as never cacheable."""

    @wraps(f)
    def decorated_function(*args, **kwargs):
        response = make_response(f(*args, **kwargs))
        response.headers["Cache-Control"] = "no-cache, no-store, must-revalidate"
        response.headers["Pragma"] = "no-cache"
        response.headers["Expires"] = "0"
        return response

    return decorated_function
