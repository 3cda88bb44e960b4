from __future__ import annotations

from datetime import date, datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator


class InvoiceStatus(str, Enum):
    DRAFT = "Draft"
    UNPAID = "Unpaid"
    PAID = "Paid"
    PARTIAL = "Partial"
    OVERDUE = "Overdue"


class DiscountType(str, Enum):
    PERCENTAGE = "percentage"
    FIXED = "fixed"


class LineItem(BaseModel):
    id: int | None = None
    invoice_id: int | None = None
    description: str = Field(min_length=1)
    quantity: float = Field(default=1, ge=1)
    unit_price: float = Field(default=0.0, ge=0)
    sort_order: int = 0

    @property
    def amount(self) -> float:
        return self.quantity * self.unit_price


class DiscountSpec(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: DiscountType = DiscountType.PERCENTAGE
    value: float = Field(default=0.0, ge=0)

    @model_validator(mode="after")
    def _check_percentage(self) -> DiscountSpec:
        if self.type == DiscountType.PERCENTAGE and self.value > 100:
            raise ValueError("Percentage discount cannot exceed 100")
        return self


class InvoiceTotals(BaseModel):
    model_config = ConfigDict(frozen=True)

    subtotal: float = 0.0
    tax_amount: float = 0.0
    discount_amount: float = 0.0
    grand_total: float = 0.0


class Invoice(BaseModel):
    id: int | None = None
    uuid: str = ""
    user_id: str = ""
    invoice_number: str = ""
    client_id: int
    event_id: int | None = None
    issue_date: date
    due_date: date
    status: InvoiceStatus = InvoiceStatus.DRAFT
    items: list[LineItem] = Field(default_factory=list)
    tax_rate: float = Field(default=0.0, ge=0)
    discount: DiscountSpec = DiscountSpec()
    subtotal: float = 0.0
    tax_amount: float = 0.0
    discount_amount: float = 0.0
    amount: float = 0.0  # grand total
    notes: str = ""
    pdf_path: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    deleted_at: datetime | None = None

    def apply_totals(self, totals: InvoiceTotals) -> None:
        self.subtotal = totals.subtotal
        self.tax_amount = totals.tax_amount
        self.discount_amount = totals.discount_amount
        self.amount = totals.grand_total

    def is_overdue(self, today: date) -> bool:
        if self.status not in (InvoiceStatus.UNPAID, InvoiceStatus.PARTIAL, InvoiceStatus.OVERDUE):
            return False
        return today > self.due_date
