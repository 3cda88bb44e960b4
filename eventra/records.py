"""Normalization of raw store values into the canonical types used by the core.

Rows coming back from the database (or any mapping-shaped record) go through
these helpers exactly once, at the repository boundary. Timestamps become
timezone-aware ``datetime`` objects in the application timezone and
string-typed numbers become ``float``.
"""

from __future__ import annotations

from datetime import date, datetime, time
from typing import Any

from eventra.constants import APP_TZ
from eventra.exceptions import MalformedRecordError


def to_datetime(value: Any, field: str = "timestamp") -> datetime:
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, date):
        dt = datetime.combine(value, time.min)
    elif isinstance(value, (int, float)) and not isinstance(value, bool):
        dt = datetime.fromtimestamp(value, APP_TZ)
    elif isinstance(value, str) and value.strip():
        try:
            dt = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        except ValueError as exc:
            raise MalformedRecordError(field, value, "not an ISO timestamp") from exc
    else:
        raise MalformedRecordError(field, value, "missing timestamp")

    if dt.tzinfo is None:
        return dt.replace(tzinfo=APP_TZ)
    return dt.astimezone(APP_TZ)


def to_optional_datetime(value: Any, field: str = "timestamp") -> datetime | None:
    if value is None or value == "":
        return None
    return to_datetime(value, field)


def to_date(value: Any, field: str = "date") -> date:
    if isinstance(value, date) and not isinstance(value, datetime):
        return value
    if isinstance(value, str) and len(value.strip()) == 10:
        try:
            return date.fromisoformat(value.strip())
        except ValueError as exc:
            raise MalformedRecordError(field, value, "not an ISO date") from exc
    return to_datetime(value, field).date()


def to_optional_date(value: Any, field: str = "date") -> date | None:
    if value is None or value == "":
        return None
    return to_date(value, field)


def to_float(value: Any, field: str = "amount", default: float | None = 0.0) -> float | None:
    """Coerce a stored number (possibly a string) to float; empty means ``default``."""
    if value is None or (isinstance(value, str) and not value.strip()):
        return default
    if isinstance(value, bool):
        raise MalformedRecordError(field, value, "boolean is not a number")
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise MalformedRecordError(field, value, "not a number") from exc

