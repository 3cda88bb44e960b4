from __future__ import annotations

import logging
from datetime import datetime

from eventra.aggregation import bucket_by_month, count_by_category, filter_upcoming, sum_confirmed_revenue
from eventra.constants import RECENT_CLIENTS_LIMIT, UPCOMING_LIMIT, now as current_time
from eventra.models.dashboard import DashboardStats, DashboardSummary
from eventra.records import to_datetime
from eventra.repositories.base import ClientRepository, EventRepository, InvoiceRepository
from eventra.settings import settings

logger = logging.getLogger(__name__)


class DashboardService:
    def __init__(
        self,
        client_repo: ClientRepository,
        event_repo: EventRepository,
        invoice_repo: InvoiceRepository,
    ) -> None:
        self.client_repo = client_repo
        self.event_repo = event_repo
        self.invoice_repo = invoice_repo

    def summary(self, user_id: str, now: datetime | None = None, months_back: int | None = None) -> DashboardSummary:
        now = to_datetime(now) if now is not None else current_time()
        months_back = months_back or settings.dashboard_months
        today = now.date()

        clients = self.client_repo.list_for_user(user_id)
        events = self.event_repo.list_for_user(user_id)
        invoices = self.invoice_repo.list_for_user(user_id)

        upcoming = filter_upcoming(events, now)
        stats = DashboardStats(
            total_events=len(events),
            upcoming_events=len(upcoming),
            total_clients=len(clients),
            total_revenue=sum(inv.amount for inv in invoices),
            confirmed_revenue=sum_confirmed_revenue(events),
        )
        recent_clients = sorted(
            (c for c in clients if c.created_at is not None),
            key=lambda c: c.created_at,
            reverse=True,
        )[:RECENT_CLIENTS_LIMIT]

        logger.debug(
            "Dashboard for user=%s: events=%d clients=%d invoices=%d",
            user_id,
            len(events),
            len(clients),
            len(invoices),
        )
        return DashboardSummary(
            stats=stats,
            upcoming=upcoming[:UPCOMING_LIMIT],
            recent_clients=recent_clients,
            revenue_by_month=bucket_by_month(invoices, "issue_date", lambda inv: inv.amount, months_back, today),
            client_growth=bucket_by_month(clients, "created_at", lambda c: 1, months_back, today),
            event_types=count_by_category(events, "type"),
        )
