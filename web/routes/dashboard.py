from __future__ import annotations

from fastapi import APIRouter, Query, Request

from eventra.models.dashboard import DashboardSummary
from web.deps import current_user, get_dashboard_service

router = APIRouter(prefix="/api/dashboard", tags=["dashboard"])


@router.get("")
async def dashboard(request: Request, months: int | None = Query(default=None, ge=1, le=36)) -> DashboardSummary:
    return get_dashboard_service(request).summary(current_user(request), months_back=months)
