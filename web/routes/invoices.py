from __future__ import annotations

import logging

from fastapi import APIRouter, Request, Response

from eventra.models.invoice import Invoice, InvoiceTotals, LineItem
from eventra.search import ALL, search_invoices
from web.deps import (
    current_user,
    get_client_service,
    get_event_service,
    get_invoice_service,
    get_preference_service,
)
from web.schemas import InvoiceIn, InvoiceStatusIn, TotalsIn

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/invoices", tags=["invoices"])


def _items(body: TotalsIn) -> list[LineItem]:
    return [LineItem(**item.model_dump()) for item in body.items]


def _to_invoice(body: InvoiceIn) -> Invoice:
    data = body.model_dump(exclude={"items", "discount"})
    return Invoice(**data, items=_items(body), discount=body.discount)


def _currency(request: Request, currency: str | None) -> str:
    if currency:
        return currency.upper()
    return get_preference_service(request).get_currency(current_user(request))


@router.get("")
async def invoice_list(request: Request, q: str = "", status: str = ALL) -> list[Invoice]:
    user_id = current_user(request)
    invoices = get_invoice_service(request).list_invoices(user_id)
    if not q:
        return search_invoices(invoices, q, status)
    client_names = {c.id: c.full_name for c in get_client_service(request).list_clients(user_id)}
    event_titles = {e.id: e.title for e in get_event_service(request).list_events(user_id)}
    return search_invoices(invoices, q, status, client_names, event_titles)


@router.post("/totals")
async def invoice_totals(request: Request, body: TotalsIn) -> InvoiceTotals:
    return get_invoice_service(request).preview_totals(_items(body), body.tax_rate, body.discount)


@router.post("", status_code=201)
async def invoice_create(request: Request, body: InvoiceIn) -> Invoice:
    return get_invoice_service(request).create_invoice(current_user(request), _to_invoice(body))


@router.post("/mark-overdue")
async def invoice_mark_overdue(request: Request) -> list[Invoice]:
    return get_invoice_service(request).mark_overdue(current_user(request))


@router.get("/{invoice_id}")
async def invoice_detail(request: Request, invoice_id: int) -> Invoice:
    return get_invoice_service(request).get_invoice(current_user(request), invoice_id)


@router.put("/{invoice_id}")
async def invoice_update(request: Request, invoice_id: int, body: InvoiceIn) -> Invoice:
    service = get_invoice_service(request)
    user_id = current_user(request)
    existing = service.get_invoice(user_id, invoice_id)
    invoice = _to_invoice(body)
    invoice.id = existing.id
    invoice.uuid = existing.uuid
    invoice.pdf_path = existing.pdf_path
    return service.update_invoice(user_id, invoice)


@router.post("/{invoice_id}/status")
async def invoice_status(request: Request, invoice_id: int, body: InvoiceStatusIn) -> Invoice:
    return get_invoice_service(request).set_status(current_user(request), invoice_id, body.status)


@router.get("/{invoice_id}/pdf")
async def invoice_pdf(request: Request, invoice_id: int, currency: str | None = None) -> Response:
    service = get_invoice_service(request)
    user_id = current_user(request)
    invoice = service.get_invoice(user_id, invoice_id)
    pdf_bytes = service.render_pdf(user_id, invoice_id, _currency(request, currency))
    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={"Content-Disposition": f'inline; filename="{invoice.invoice_number}.pdf"'},
    )


@router.post("/{invoice_id}/export")
async def invoice_export(request: Request, invoice_id: int, currency: str | None = None) -> dict:
    service = get_invoice_service(request)
    user_id = current_user(request)
    path = service.export_pdf(user_id, invoice_id, _currency(request, currency))
    return {"invoice_id": invoice_id, "pdf_path": path, "url": service.get_pdf_url(user_id, invoice_id)}


@router.delete("/{invoice_id}", status_code=204)
async def invoice_delete(request: Request, invoice_id: int) -> Response:
    get_invoice_service(request).delete_invoice(current_user(request), invoice_id)
    return Response(status_code=204)
