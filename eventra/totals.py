"""Invoice total computation.

Amounts are never rounded here; rounding happens only when a value is
formatted for display (see ``eventra.currency.format_currency``).
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Protocol

from eventra.models.invoice import DiscountSpec, DiscountType, InvoiceTotals


class Priced(Protocol):
    quantity: float
    unit_price: float


def line_amount(item: Priced) -> float:
    return item.quantity * item.unit_price


def compute_totals(items: Iterable[Priced], tax_rate_percent: float, discount: DiscountSpec) -> InvoiceTotals:
    """Compute subtotal, tax, discount and grand total for a set of line items.

    A fixed discount is not clamped to the subtotal, so the grand total may be
    negative; callers decide whether to accept that.
    """
    subtotal = sum((line_amount(item) for item in items), 0.0)
    tax_amount = subtotal * tax_rate_percent / 100
    if discount.type == DiscountType.PERCENTAGE:
        discount_amount = subtotal * discount.value / 100
    else:
        discount_amount = discount.value
    return InvoiceTotals(
        subtotal=subtotal,
        tax_amount=tax_amount,
        discount_amount=discount_amount,
        grand_total=subtotal + tax_amount - discount_amount,
    )
