from datetime import datetime
from zoneinfo import ZoneInfo

from eventra.settings import settings

APP_TZ = ZoneInfo(settings.timezone)

MONTH_ABBR = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")

UPCOMING_LIMIT = 5
RECENT_CLIENTS_LIMIT = 5


def now() -> datetime:
    return datetime.now(APP_TZ)


def month_label(year: int, month: int) -> str:
    """Chart label for a calendar month: (2024, 1) -> 'Jan 2024'."""
    return f"{MONTH_ABBR[month - 1]} {year}"
