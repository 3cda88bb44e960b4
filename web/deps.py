from __future__ import annotations

import logging

from fastapi import Request
from fastapi.responses import JSONResponse
from sqlalchemy import Connection
from starlette.types import ASGIApp, Receive, Scope, Send

from eventra.db import get_engine
from eventra.repositories.sqlalchemy import (
    SQLAlchemyClientRepository,
    SQLAlchemyEventRepository,
    SQLAlchemyInvoiceRepository,
    SQLAlchemyPreferenceRepository,
    SQLAlchemyVendorRepository,
)
from eventra.services.client_service import ClientService
from eventra.services.dashboard_service import DashboardService
from eventra.services.event_service import EventService
from eventra.services.invoice_service import InvoiceService
from eventra.services.preference_service import PreferenceService
from eventra.services.vendor_service import VendorService
from eventra.storage.factory import get_storage

logger = logging.getLogger(__name__)

USER_HEADER = "x-user-id"
PROTECTED_PREFIX = "/api/"


class IdentityMiddleware:
    """Pure ASGI middleware: API calls must carry the caller's id in ``X-User-Id``.

    The header is set by the auth proxy in front of the app.
    """

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        request = Request(scope, receive)
        request.state.user_id = None
        path = request.url.path
        if not path.startswith(PROTECTED_PREFIX):
            await self.app(scope, receive, send)
            return

        user_id = request.headers.get(USER_HEADER, "").strip()
        if not user_id:
            logger.info("Rejected %s %s: missing %s header", request.method, path, USER_HEADER)
            response = JSONResponse(
                {"error": "UNAUTHENTICATED", "message": "Missing X-User-Id header", "context": {}},
                status_code=401,
            )
            await response(scope, receive, send)
            return
        request.state.user_id = user_id
        await self.app(scope, receive, send)


class DBConnectionMiddleware:
    """Pure ASGI middleware: at most one DB connection per request."""

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        request = Request(scope)
        request.state.db_conn = None
        try:
            await self.app(scope, receive, send)
        finally:
            conn = getattr(request.state, "db_conn", None)
            if conn is not None:
                conn.close()
                logger.debug("DB connection closed for %s %s", request.method, request.url.path)


def _get_conn(request: Request) -> Connection:
    """Lazy per-request connection, closed by DBConnectionMiddleware."""
    if request.state.db_conn is None:
        logger.debug("Creating DB connection for %s %s", request.method, request.url.path)
        request.state.db_conn = get_engine().connect()
    return request.state.db_conn


def current_user(request: Request) -> str:
    return request.state.user_id


def get_client_service(request: Request) -> ClientService:
    conn = _get_conn(request)
    return ClientService(SQLAlchemyClientRepository(conn), SQLAlchemyEventRepository(conn))


def get_vendor_service(request: Request) -> VendorService:
    return VendorService(SQLAlchemyVendorRepository(_get_conn(request)))


def get_event_service(request: Request) -> EventService:
    conn = _get_conn(request)
    return EventService(
        SQLAlchemyEventRepository(conn),
        SQLAlchemyClientRepository(conn),
        SQLAlchemyVendorRepository(conn),
    )


def get_invoice_service(request: Request) -> InvoiceService:
    conn = _get_conn(request)
    return InvoiceService(
        SQLAlchemyInvoiceRepository(conn),
        SQLAlchemyClientRepository(conn),
        SQLAlchemyEventRepository(conn),
        get_storage(),
    )


def get_dashboard_service(request: Request) -> DashboardService:
    conn = _get_conn(request)
    return DashboardService(
        SQLAlchemyClientRepository(conn),
        SQLAlchemyEventRepository(conn),
        SQLAlchemyInvoiceRepository(conn),
    )


def get_preference_service(request: Request) -> PreferenceService:
    return PreferenceService(SQLAlchemyPreferenceRepository(_get_conn(request)))
