from __future__ import annotations

from pydantic import BaseModel

from eventra.models.client import Client
from eventra.models.event import Event


class MonthBucket(BaseModel):
    month: str  # 'Jan 2024'
    value: float = 0.0


class DashboardStats(BaseModel):
    total_events: int = 0
    upcoming_events: int = 0
    total_clients: int = 0
    total_revenue: float = 0.0
    confirmed_revenue: float = 0.0


class DashboardSummary(BaseModel):
    stats: DashboardStats
    upcoming: list[Event] = []
    recent_clients: list[Client] = []
    revenue_by_month: list[MonthBucket] = []
    client_growth: list[MonthBucket] = []
    event_types: dict[str, int] = {}
