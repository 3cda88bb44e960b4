"""Dashboard aggregation over in-memory record collections.

Records may be pydantic models or plain mappings; fields are looked up by
name either way.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from datetime import date, datetime
from enum import Enum
from typing import Any

from eventra.constants import month_label, now as current_time
from eventra.models.dashboard import MonthBucket
from eventra.models.event import REVENUE_STATUSES
from eventra.records import to_datetime

DEFAULT_MONTHS_BACK = 6


def _field(record: Any, name: str) -> Any:
    if isinstance(record, Mapping):
        return record.get(name)
    return getattr(record, name, None)


def _as_date(value: date | datetime) -> date:
    # Aware timestamps are read in APP_TZ so they land in the same month as ``today``.
    if isinstance(value, datetime):
        return to_datetime(value).date()
    return value


def _trailing_months(today: date, months_back: int) -> list[tuple[int, int]]:
    months = []
    year, month = today.year, today.month
    for _ in range(months_back):
        months.append((year, month))
        month -= 1
        if month == 0:
            year, month = year - 1, 12
    months.reverse()
    return months


def bucket_by_month(
    records: Iterable[Any],
    date_field: str,
    value_selector: Callable[[Any], float | None],
    months_back: int = DEFAULT_MONTHS_BACK,
    today: date | None = None,
) -> list[MonthBucket]:
    """Sum ``value_selector(record)`` into calendar-month buckets.

    Always returns ``months_back`` buckets, oldest first, ending at the month
    of ``today``. Records dated outside the window (or with no date) are
    ignored.
    """
    today = _as_date(today or current_time())
    months = _trailing_months(today, months_back)
    totals: dict[tuple[int, int], float] = {key: 0.0 for key in months}

    for record in records:
        raw = _field(record, date_field)
        if raw is None:
            continue
        day = _as_date(raw)
        key = (day.year, day.month)
        if key in totals:
            totals[key] += value_selector(record) or 0.0

    return [MonthBucket(month=month_label(year, month), value=totals[(year, month)]) for year, month in months]


def count_by_category(records: Iterable[Any], category_field: str) -> dict[str, int]:
    """Count records per category value; records without a category are skipped."""
    counts: dict[str, int] = {}
    for record in records:
        category = _field(record, category_field)
        if category is None:
            continue
        if isinstance(category, Enum):
            category = category.value
        category = str(category)
        if not category:
            continue
        counts[category] = counts.get(category, 0) + 1
    return counts


def filter_upcoming(events: Iterable[Any], now: datetime) -> list[Any]:
    """Events dated at or after ``now``, earliest first (stable for equal dates).

    Naive timestamps, on either side, are read as APP_TZ.
    """
    now = to_datetime(now)
    upcoming = []
    for event in events:
        raw = _field(event, "date")
        if raw is None:
            continue
        when = to_datetime(raw, "date")
        if when >= now:
            upcoming.append((when, event))
    upcoming.sort(key=lambda pair: pair[0])
    return [event for _, event in upcoming]


def sum_confirmed_revenue(events: Iterable[Any]) -> float:
    """Sum budgets of confirmed or completed events; other statuses contribute 0."""
    revenue_statuses = {status.value for status in REVENUE_STATUSES}
    total = 0.0
    for event in events:
        status = _field(event, "status")
        if isinstance(status, Enum):
            status = status.value
        if str(status or "").lower() in revenue_statuses:
            total += _field(event, "budget") or 0.0
    return total
