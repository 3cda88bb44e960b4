from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from datetime import date

from eventra.constants import now as current_time
from eventra.exceptions import NotFoundError
from eventra.models.client import Client
from eventra.models.event import Event
from eventra.models.invoice import DiscountSpec, Invoice, InvoiceStatus, InvoiceTotals, LineItem
from eventra.pdf.invoice import InvoicePDF
from eventra.repositories.base import ClientRepository, EventRepository, InvoiceRepository
from eventra.settings import settings
from eventra.storage.base import StorageBackend
from eventra.totals import compute_totals

logger = logging.getLogger(__name__)

_NUMBER_SUFFIX = re.compile(r"^\d{4,}$")


def _storage_key(invoice_uuid: str) -> str:
    prefix = settings.storage_prefix
    if prefix:
        return f"{prefix}/{invoice_uuid}.pdf"
    return f"{invoice_uuid}.pdf"


class InvoiceService:
    def __init__(
        self,
        repo: InvoiceRepository,
        client_repo: ClientRepository,
        event_repo: EventRepository,
        storage: StorageBackend | None = None,
    ) -> None:
        self.repo = repo
        self.client_repo = client_repo
        self.event_repo = event_repo
        self.storage = storage
        self.pdf_generator = InvoicePDF()

    @staticmethod
    def preview_totals(items: Iterable[LineItem], tax_rate: float, discount: DiscountSpec) -> InvoiceTotals:
        return compute_totals(list(items), tax_rate, discount)

    def _owned_client(self, user_id: str, client_id: int) -> Client:
        client = self.client_repo.get_by_id(client_id)
        if client is None or client.user_id != user_id:
            raise NotFoundError("client", client_id)
        return client

    def _owned_event(self, user_id: str, event_id: int | None) -> Event | None:
        if event_id is None:
            return None
        event = self.event_repo.get_by_id(event_id)
        if event is None or event.user_id != user_id:
            raise NotFoundError("event", event_id)
        return event

    def _recompute(self, invoice: Invoice) -> None:
        for i, item in enumerate(invoice.items):
            item.sort_order = i
        totals = compute_totals(invoice.items, invoice.tax_rate, invoice.discount)
        invoice.apply_totals(totals)
        if totals.grand_total < 0:
            logger.warning(
                "Invoice %s grand total is negative (%.2f): discount %.2f exceeds subtotal plus tax",
                invoice.invoice_number or "<new>",
                totals.grand_total,
                totals.discount_amount,
            )

    def next_invoice_number(self, user_id: str, issue_date: date) -> str:
        """Next ``INV-YYMM-NNNN`` number for the issue month, sequential per user.

        Deleted invoices still hold their numbers, so a number is never reissued.
        """
        prefix = f"INV-{issue_date:%y%m}-"
        highest = 0
        for number in self.repo.numbers_with_prefix(user_id, prefix):
            if not number.startswith(prefix):
                continue
            suffix = number[len(prefix) :]
            if _NUMBER_SUFFIX.match(suffix):
                highest = max(highest, int(suffix))
        return f"{prefix}{highest + 1:04d}"

    def create_invoice(self, user_id: str, invoice: Invoice) -> Invoice:
        self._owned_client(user_id, invoice.client_id)
        self._owned_event(user_id, invoice.event_id)
        invoice.user_id = user_id
        if not invoice.invoice_number:
            invoice.invoice_number = self.next_invoice_number(user_id, invoice.issue_date)
        self._recompute(invoice)
        result = self.repo.create(invoice)
        logger.info(
            "Invoice created: id=%s, number=%s, items=%d, total=%.2f",
            result.id,
            result.invoice_number,
            len(result.items),
            result.amount,
        )
        return result

    def list_invoices(self, user_id: str) -> list[Invoice]:
        result = self.repo.list_for_user(user_id)
        logger.debug("Listed %d invoices for user=%s", len(result), user_id)
        return result

    def list_for_client(self, user_id: str, client_id: int) -> list[Invoice]:
        self._owned_client(user_id, client_id)
        return [inv for inv in self.repo.list_for_client(client_id) if inv.user_id == user_id]

    def list_for_event(self, user_id: str, event_id: int) -> list[Invoice]:
        self._owned_event(user_id, event_id)
        return [inv for inv in self.repo.list_for_event(event_id) if inv.user_id == user_id]

    def get_invoice(self, user_id: str, invoice_id: int) -> Invoice:
        result = self.repo.get_by_id(invoice_id)
        logger.debug("get_invoice id=%s found=%s", invoice_id, result is not None)
        if result is None or result.user_id != user_id:
            raise NotFoundError("invoice", invoice_id)
        return result

    def get_invoice_by_uuid(self, user_id: str, uuid: str) -> Invoice:
        result = self.repo.get_by_uuid(uuid)
        if result is None or result.user_id != user_id:
            raise NotFoundError("invoice", uuid)
        return result

    def update_invoice(self, user_id: str, invoice: Invoice) -> Invoice:
        if invoice.id is None:
            raise ValueError("Cannot update invoice without an id")
        existing = self.get_invoice(user_id, invoice.id)
        self._owned_client(user_id, invoice.client_id)
        self._owned_event(user_id, invoice.event_id)
        invoice.user_id = user_id
        if not invoice.invoice_number:
            invoice.invoice_number = existing.invoice_number
        self._recompute(invoice)
        result = self.repo.update(invoice)
        logger.info("Invoice updated: id=%s, number=%s, total=%.2f", result.id, result.invoice_number, result.amount)
        return result

    def set_status(self, user_id: str, invoice_id: int, status: InvoiceStatus) -> Invoice:
        invoice = self.get_invoice(user_id, invoice_id)
        self.repo.update_status(invoice_id, status)
        logger.info("Invoice %s status %s -> %s", invoice.invoice_number, invoice.status.value, status.value)
        invoice.status = status
        return invoice

    def mark_overdue(self, user_id: str, today: date | None = None) -> list[Invoice]:
        """Flag unpaid or partially paid invoices past their due date as Overdue."""
        today = today or current_time().date()
        changed = []
        for invoice in self.repo.list_for_user(user_id):
            if invoice.status != InvoiceStatus.OVERDUE and invoice.is_overdue(today):
                self.repo.update_status(invoice.id, InvoiceStatus.OVERDUE)
                invoice.status = InvoiceStatus.OVERDUE
                changed.append(invoice)
        if changed:
            logger.info("Marked %d invoices overdue for user=%s", len(changed), user_id)
        return changed

    def delete_invoice(self, user_id: str, invoice_id: int) -> None:
        self.get_invoice(user_id, invoice_id)
        self.repo.delete(invoice_id)
        logger.info("Invoice %s soft-deleted", invoice_id)

    def render_pdf(self, user_id: str, invoice_id: int, currency: str | None = None) -> bytes:
        invoice = self.get_invoice(user_id, invoice_id)
        client = self.client_repo.get_by_id(invoice.client_id)
        event = self.event_repo.get_by_id(invoice.event_id) if invoice.event_id is not None else None
        return self.pdf_generator.generate(invoice, client, event, currency or settings.default_currency)

    def export_pdf(self, user_id: str, invoice_id: int, currency: str | None = None) -> str:
        """Render the PDF, store it and record where it went. Returns the storage path."""
        if self.storage is None:
            raise ValueError("No storage backend configured for PDF export")
        pdf_bytes = self.render_pdf(user_id, invoice_id, currency)
        invoice = self.get_invoice(user_id, invoice_id)
        key = _storage_key(invoice.uuid)
        path = self.storage.save(key, pdf_bytes)
        self.repo.update_pdf_path(invoice_id, path)
        logger.info("PDF stored at %s for invoice %s", key, invoice.invoice_number)
        return path

    def get_pdf_url(self, user_id: str, invoice_id: int, currency: str | None = None) -> str:
        if self.storage is None:
            raise ValueError("No storage backend configured for PDF export")
        invoice = self.get_invoice(user_id, invoice_id)
        if not invoice.pdf_path:
            self.export_pdf(user_id, invoice_id, currency)
        return self.storage.get_url(_storage_key(invoice.uuid))
