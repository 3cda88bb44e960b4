from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel

from eventra.currency import DEFAULT_CURRENCY


class Preferences(BaseModel):
    user_id: str
    currency: str = DEFAULT_CURRENCY
    country: str | None = None
    updated_at: datetime | None = None
