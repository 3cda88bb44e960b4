"""Request bodies for the JSON API.

Server-owned fields (ids, owner, timestamps, computed totals) are not
accepted from callers.
"""

from __future__ import annotations

from datetime import date, datetime

from pydantic import BaseModel, Field

from eventra.models.event import EventStatus
from eventra.models.invoice import DiscountSpec, InvoiceStatus


class ClientIn(BaseModel):
    first_name: str = Field(min_length=1)
    last_name: str = Field(min_length=1)
    email: str = ""
    phone: str = Field(default="", pattern=r"^[\d\s+\-()]*$")
    company: str = ""
    type: str = ""
    address: str = ""
    city: str = ""
    state: str = ""
    zip_code: str = Field(default="", pattern=r"^[\d\s\-]*$")
    country: str = ""
    notes: str = ""


class VendorIn(BaseModel):
    name: str = Field(min_length=1)
    contact_name: str = ""
    email: str = ""
    phone: str = ""
    website: str = ""
    address: str = ""
    city: str = ""
    state: str = ""
    zip_code: str = ""
    type: str = ""
    rate: float | None = Field(default=None, ge=0)
    notes: str = ""


class TaskIn(BaseModel):
    description: str = Field(min_length=1)
    completed: bool = False


class EventIn(BaseModel):
    title: str = Field(min_length=1)
    type: str = ""
    date: datetime
    end_time: datetime | None = None
    location: str = ""
    description: str = ""
    client_id: int | None = None
    budget: float = Field(default=0.0, ge=0)
    status: EventStatus = EventStatus.TENTATIVE
    vendor_ids: list[int] = []
    tasks: list[TaskIn] = []
    notes: str = ""


class EventStatusIn(BaseModel):
    status: EventStatus


class TaskCompletionIn(BaseModel):
    completed: bool = True


class LineItemIn(BaseModel):
    description: str = Field(min_length=1)
    quantity: float = Field(default=1, ge=1)
    unit_price: float = Field(default=0.0, ge=0)


class TotalsIn(BaseModel):
    items: list[LineItemIn] = []
    tax_rate: float = Field(default=0.0, ge=0)
    discount: DiscountSpec = DiscountSpec()


class InvoiceIn(TotalsIn):
    invoice_number: str = ""
    client_id: int
    event_id: int | None = None
    issue_date: date
    due_date: date
    status: InvoiceStatus = InvoiceStatus.DRAFT
    notes: str = ""


class InvoiceStatusIn(BaseModel):
    status: InvoiceStatus


class PreferencesIn(BaseModel):
    currency: str | None = None
    country: str | None = None
