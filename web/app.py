from __future__ import annotations

import logging
import traceback
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy import text

from eventra.db import initialize_db
from eventra.exceptions import EventraError
from eventra.logging import configure_logging, reconfigure
from web.deps import DBConnectionMiddleware, IdentityMiddleware, _get_conn
from web.routes.clients import router as clients_router
from web.routes.dashboard import router as dashboard_router
from web.routes.events import router as events_router
from web.routes.invoices import router as invoices_router
from web.routes.preferences import router as preferences_router
from web.routes.vendors import router as vendors_router

configure_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    initialize_db()
    # Alembic's fileConfig may have replaced the logging setup.
    reconfigure()
    logger.info("Application started")
    yield


app = FastAPI(title="Eventra", lifespan=lifespan)

app.add_middleware(DBConnectionMiddleware)
app.add_middleware(IdentityMiddleware)

app.include_router(clients_router)
app.include_router(vendors_router)
app.include_router(events_router)
app.include_router(invoices_router)
app.include_router(dashboard_router)
app.include_router(preferences_router)


@app.exception_handler(EventraError)
async def eventra_error_handler(request: Request, exc: EventraError):
    logger.info("%s on %s %s: %s", exc.error_code, request.method, request.url.path, exc.message)
    return JSONResponse(exc.to_dict(), status_code=exc.status_code)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.error(
        "Unhandled exception on %s %s:\n%s",
        request.method,
        request.url.path,
        traceback.format_exc(),
    )
    return JSONResponse(
        {"error": "INTERNAL_ERROR", "message": "Internal Server Error", "context": {}},
        status_code=500,
    )


@app.get("/health")
async def health(request: Request):
    _get_conn(request).execute(text("SELECT 1"))
    return {"status": "ok"}
