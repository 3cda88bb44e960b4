from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field, field_validator

from eventra.records import to_datetime


class EventStatus(str, Enum):
    TENTATIVE = "tentative"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    COMPLETED = "completed"


# Statuses whose budget counts as realized revenue.
REVENUE_STATUSES = frozenset({EventStatus.CONFIRMED, EventStatus.COMPLETED})


class EventTask(BaseModel):
    id: int | None = None
    event_id: int | None = None
    description: str
    completed: bool = False
    sort_order: int = 0


class Event(BaseModel):
    id: int | None = None
    uuid: str = ""
    user_id: str = ""
    title: str = Field(min_length=1)
    type: str = ""
    date: datetime
    end_time: datetime | None = None
    location: str = ""
    description: str = ""
    client_id: int | None = None
    client_name: str = ""
    budget: float = Field(default=0.0, ge=0)
    status: EventStatus = EventStatus.TENTATIVE
    vendor_ids: list[int] = []
    tasks: list[EventTask] = []
    notes: str = ""
    created_at: datetime | None = None
    updated_at: datetime | None = None
    deleted_at: datetime | None = None

    @field_validator("date", "end_time")
    @classmethod
    def _localize(cls, value: datetime | None) -> datetime | None:
        if value is None:
            return None
        return to_datetime(value, "date")

    @property
    def counts_as_revenue(self) -> bool:
        return self.status in REVENUE_STATUSES
