from __future__ import annotations

import logging

from fpdf import FPDF

from eventra.currency import format_currency
from eventra.models.client import Client
from eventra.models.event import Event
from eventra.models.invoice import DiscountType, Invoice

logger = logging.getLogger(__name__)

PRIMARY = (55, 48, 163)
PRIMARY_LIGHT = (238, 240, 255)
TEXT = (33, 37, 41)
MUTED = (108, 117, 125)
WHITE = (255, 255, 255)


def _latin1(value: str) -> str:
    # Core PDF fonts only cover Latin-1.
    return value.encode("latin-1", "replace").decode("latin-1")


class InvoicePDF:
    def generate(
        self,
        invoice: Invoice,
        client: Client | None = None,
        event: Event | None = None,
        currency: str = "USD",
    ) -> bytes:
        self._currency = currency

        pdf = FPDF()
        pdf.add_page()
        pdf.set_auto_page_break(auto=True, margin=20)
        page_w = pdf.w - pdf.l_margin - pdf.r_margin

        self._draw_header(pdf, page_w, invoice)
        self._draw_parties(pdf, page_w, client, event)
        self._draw_items(pdf, page_w, invoice)
        self._draw_totals(pdf, page_w, invoice)
        if invoice.notes:
            self._draw_notes(pdf, page_w, invoice.notes)

        output = bytes(pdf.output())
        logger.debug(
            "PDF generated: invoice=%s items=%d size=%d bytes",
            invoice.invoice_number,
            len(invoice.items),
            len(output),
        )
        return output

    def _money(self, amount: float) -> str:
        return format_currency(amount, self._currency, use_symbol=False)

    def _draw_header(self, pdf: FPDF, page_w: float, invoice: Invoice) -> None:
        x = pdf.l_margin
        y = pdf.get_y()
        pdf.set_fill_color(*PRIMARY)
        pdf.rect(x, y, page_w, 32, "F")

        pdf.set_xy(x + 8, y + 7)
        pdf.set_text_color(*WHITE)
        pdf.set_font("Helvetica", "B", 24)
        pdf.cell(page_w / 2, 12, "INVOICE")
        pdf.set_font("Helvetica", "", 10)
        pdf.cell(page_w / 2 - 16, 6, _latin1(invoice.invoice_number), align="R", new_x="LEFT", new_y="NEXT")
        pdf.set_x(x + 8 + page_w / 2)
        pdf.cell(page_w / 2 - 16, 6, f"Status: {invoice.status.value}", align="R")

        pdf.set_y(y + 40)
        pdf.set_text_color(*TEXT)
        pdf.set_font("Helvetica", "", 10)
        pdf.cell(page_w / 2, 6, f"Issue date: {invoice.issue_date.isoformat()}")
        pdf.cell(page_w / 2, 6, f"Due date: {invoice.due_date.isoformat()}", align="R", new_x="LMARGIN", new_y="NEXT")
        pdf.ln(6)

    def _draw_parties(self, pdf: FPDF, page_w: float, client: Client | None, event: Event | None) -> None:
        if client is None and event is None:
            return
        pdf.set_font("Helvetica", "B", 9)
        pdf.set_text_color(*MUTED)
        pdf.cell(page_w / 2, 6, "BILL TO")
        pdf.cell(page_w / 2, 6, "EVENT" if event else "", new_x="LMARGIN", new_y="NEXT")

        left = []
        if client is not None:
            left = [client.full_name, client.company, client.email, client.phone]
        right = []
        if event is not None:
            right = [event.title, event.date.strftime("%Y-%m-%d %H:%M"), event.location]
        left = [line for line in left if line]
        right = [line for line in right if line]

        pdf.set_font("Helvetica", "", 10)
        pdf.set_text_color(*TEXT)
        for i in range(max(len(left), len(right))):
            pdf.cell(page_w / 2, 6, _latin1(left[i]) if i < len(left) else "")
            pdf.cell(page_w / 2, 6, _latin1(right[i]) if i < len(right) else "", new_x="LMARGIN", new_y="NEXT")
        pdf.ln(6)

    def _draw_items(self, pdf: FPDF, page_w: float, invoice: Invoice) -> None:
        col_desc = page_w * 0.46
        col_qty = page_w * 0.12
        col_price = page_w * 0.21
        col_amount = page_w * 0.21
        line_h = 9

        pdf.set_fill_color(*PRIMARY)
        pdf.set_text_color(*WHITE)
        pdf.set_font("Helvetica", "B", 9)
        pdf.cell(col_desc, line_h, "  Description", fill=True)
        pdf.cell(col_qty, line_h, "Qty", fill=True, align="C")
        pdf.cell(col_price, line_h, "Unit price", fill=True, align="R")
        pdf.cell(col_amount, line_h, "Amount  ", fill=True, align="R", new_x="LMARGIN", new_y="NEXT")

        pdf.set_text_color(*TEXT)
        pdf.set_font("Helvetica", "", 10)
        for i, item in enumerate(invoice.items):
            pdf.set_fill_color(*(PRIMARY_LIGHT if i % 2 == 0 else WHITE))
            quantity = f"{item.quantity:g}"
            pdf.cell(col_desc, line_h, f"  {_latin1(item.description)}", fill=True)
            pdf.cell(col_qty, line_h, quantity, fill=True, align="C")
            pdf.cell(col_price, line_h, self._money(item.unit_price), fill=True, align="R")
            pdf.cell(
                col_amount,
                line_h,
                f"{self._money(item.amount)}  ",
                fill=True,
                align="R",
                new_x="LMARGIN",
                new_y="NEXT",
            )

        if not invoice.items:
            pdf.set_text_color(*MUTED)
            pdf.cell(page_w, line_h, "  No line items", new_x="LMARGIN", new_y="NEXT")
            pdf.set_text_color(*TEXT)
        pdf.ln(4)

    def _draw_totals(self, pdf: FPDF, page_w: float, invoice: Invoice) -> None:
        col_label = page_w * 0.72
        col_amount = page_w * 0.28

        if invoice.discount.type == DiscountType.PERCENTAGE:
            discount_label = f"Discount ({invoice.discount.value:g}%)"
        else:
            discount_label = "Discount"
        rows = [
            ("Subtotal", invoice.subtotal),
            (f"Tax ({invoice.tax_rate:g}%)", invoice.tax_amount),
            (discount_label, -invoice.discount_amount),
        ]
        pdf.set_font("Helvetica", "", 10)
        for label, amount in rows:
            pdf.cell(col_label, 7, f"{label}  ", align="R")
            pdf.cell(col_amount, 7, f"{self._money(amount)}  ", align="R", new_x="LMARGIN", new_y="NEXT")

        pdf.ln(2)
        pdf.set_fill_color(*PRIMARY)
        pdf.set_text_color(*WHITE)
        pdf.set_font("Helvetica", "B", 12)
        pdf.cell(col_label, 12, "TOTAL  ", fill=True, align="R")
        pdf.cell(col_amount, 12, f"{self._money(invoice.amount)}  ", fill=True, align="R", new_x="LMARGIN", new_y="NEXT")
        pdf.set_text_color(*TEXT)

    def _draw_notes(self, pdf: FPDF, page_w: float, notes: str) -> None:
        pdf.ln(10)
        pdf.set_font("Helvetica", "B", 8)
        pdf.set_text_color(*MUTED)
        pdf.cell(0, 6, "NOTES", new_x="LMARGIN", new_y="NEXT")
        pdf.set_font("Helvetica", "", 10)
        pdf.set_text_color(*TEXT)
        pdf.multi_cell(page_w, 6, _latin1(notes))
