from __future__ import annotations

import logging

from fastapi import APIRouter, Request, Response

from eventra.models.event import Event, EventTask
from eventra.models.invoice import Invoice
from eventra.search import ALL, search_events
from web.deps import current_user, get_event_service, get_invoice_service
from web.schemas import EventIn, EventStatusIn, TaskCompletionIn

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/events", tags=["events"])


def _to_event(body: EventIn) -> Event:
    data = body.model_dump(exclude={"tasks"})
    return Event(**data, tasks=[EventTask(**task.model_dump()) for task in body.tasks])


@router.get("")
async def event_list(request: Request, q: str = "", status: str = ALL, type: str = ALL) -> list[Event]:
    events = get_event_service(request).list_events(current_user(request))
    return search_events(events, q, status, type)


@router.post("", status_code=201)
async def event_create(request: Request, body: EventIn) -> Event:
    return get_event_service(request).create_event(current_user(request), _to_event(body))


@router.get("/{event_id}")
async def event_detail(request: Request, event_id: int) -> Event:
    return get_event_service(request).get_event(current_user(request), event_id)


@router.put("/{event_id}")
async def event_update(request: Request, event_id: int, body: EventIn) -> Event:
    service = get_event_service(request)
    user_id = current_user(request)
    existing = service.get_event(user_id, event_id)
    event = _to_event(body)
    event.id = existing.id
    event.uuid = existing.uuid
    return service.update_event(user_id, event)


@router.post("/{event_id}/status")
async def event_status(request: Request, event_id: int, body: EventStatusIn) -> Event:
    return get_event_service(request).set_status(current_user(request), event_id, body.status)


@router.post("/{event_id}/tasks/{task_index}")
async def event_task(request: Request, event_id: int, task_index: int, body: TaskCompletionIn) -> Event:
    service = get_event_service(request)
    return service.set_task_completed(current_user(request), event_id, task_index, body.completed)


@router.get("/{event_id}/invoices")
async def event_invoices(request: Request, event_id: int) -> list[Invoice]:
    return get_invoice_service(request).list_for_event(current_user(request), event_id)


@router.delete("/{event_id}", status_code=204)
async def event_delete(request: Request, event_id: int) -> Response:
    get_event_service(request).delete_event(current_user(request), event_id)
    return Response(status_code=204)
