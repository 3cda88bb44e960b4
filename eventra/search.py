"""Client-side search and filter over small record lists.

Search terms are matched case-insensitively as substrings; filters compare
exactly, with ``"all"`` (or an empty value) meaning no filter.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from enum import Enum
from typing import Any

from eventra.models.client import Client
from eventra.models.event import Event
from eventra.models.invoice import Invoice
from eventra.models.vendor import Vendor

ALL = "all"


def _matches(term: str, *values: str | None) -> bool:
    if not term:
        return True
    needle = term.lower()
    return any(needle in (value or "").lower() for value in values)


def _passes(selected: str | None, value: Any) -> bool:
    if not selected or selected == ALL:
        return True
    if isinstance(value, Enum):
        value = value.value
    return value == selected


def distinct_values(records: Iterable[Any], field: str) -> list[str]:
    """Unique non-empty values of ``field`` in first-seen order."""
    seen: dict[str, None] = {}
    for record in records:
        value = getattr(record, field, None)
        if isinstance(value, Enum):
            value = value.value
        if value:
            seen.setdefault(value, None)
    return list(seen)


def search_clients(clients: Iterable[Client], term: str = "", client_type: str = ALL) -> list[Client]:
    term = term.strip()
    return [
        c
        for c in clients
        if (_matches(term, c.full_name, c.email, c.company) or (term and term in c.phone))
        and _passes(client_type, c.type)
    ]


def search_vendors(vendors: Iterable[Vendor], term: str = "", vendor_type: str = ALL) -> list[Vendor]:
    term = term.strip()
    return [
        v
        for v in vendors
        if (_matches(term, v.name, v.email, v.contact_name) or (term and term in v.phone))
        and _passes(vendor_type, v.type)
    ]


def search_events(
    events: Iterable[Event],
    term: str = "",
    status: str = ALL,
    event_type: str = ALL,
) -> list[Event]:
    term = term.strip()
    return [
        e
        for e in events
        if _matches(term, e.title, e.client_name, e.location) and _passes(status, e.status) and _passes(event_type, e.type)
    ]


def search_invoices(
    invoices: Iterable[Invoice],
    term: str = "",
    status: str = ALL,
    client_names: Mapping[int, str] | None = None,
    event_titles: Mapping[int, str] | None = None,
) -> list[Invoice]:
    """Search invoices by number, client name or event title.

    Invoices only hold ids, so names and titles come from the lookups.
    """
    term = term.strip()
    client_names = client_names or {}
    event_titles = event_titles or {}
    return [
        inv
        for inv in invoices
        if _matches(
            term,
            inv.invoice_number,
            client_names.get(inv.client_id),
            event_titles.get(inv.event_id) if inv.event_id is not None else None,
        )
        and _passes(status, inv.status)
    ]
