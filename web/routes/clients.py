from __future__ import annotations

import logging

from fastapi import APIRouter, Request, Response

from eventra.models.client import Client
from eventra.models.event import Event
from eventra.models.invoice import Invoice
from eventra.search import ALL, search_clients
from web.deps import current_user, get_client_service, get_event_service, get_invoice_service
from web.schemas import ClientIn

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/clients", tags=["clients"])


@router.get("")
async def client_list(request: Request, q: str = "", type: str = ALL) -> list[Client]:
    clients = get_client_service(request).list_clients(current_user(request))
    return search_clients(clients, q, type)


@router.post("", status_code=201)
async def client_create(request: Request, body: ClientIn) -> Client:
    service = get_client_service(request)
    return service.create_client(current_user(request), Client(**body.model_dump()))


@router.get("/{client_id}")
async def client_detail(request: Request, client_id: int) -> Client:
    return get_client_service(request).get_client(current_user(request), client_id)


@router.put("/{client_id}")
async def client_update(request: Request, client_id: int, body: ClientIn) -> Client:
    service = get_client_service(request)
    user_id = current_user(request)
    existing = service.get_client(user_id, client_id)
    updated = existing.model_copy(update=body.model_dump())
    return service.update_client(user_id, updated)


@router.delete("/{client_id}", status_code=204)
async def client_delete(request: Request, client_id: int) -> Response:
    get_client_service(request).delete_client(current_user(request), client_id)
    return Response(status_code=204)


@router.get("/{client_id}/revenue")
async def client_revenue(request: Request, client_id: int) -> dict:
    revenue = get_client_service(request).client_revenue(current_user(request), client_id)
    return {"client_id": client_id, "confirmed_revenue": revenue}


@router.get("/{client_id}/events")
async def client_events(request: Request, client_id: int) -> list[Event]:
    return get_event_service(request).list_for_client(current_user(request), client_id)


@router.get("/{client_id}/invoices")
async def client_invoices(request: Request, client_id: int) -> list[Invoice]:
    return get_invoice_service(request).list_for_client(current_user(request), client_id)
