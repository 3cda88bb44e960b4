from __future__ import annotations

from typing import NamedTuple

import questionary
from rich.console import Console

from eventra.cli.client_menu import create_client_menu, list_clients_menu
from eventra.cli.dashboard_menu import dashboard_menu
from eventra.cli.event_menu import create_event_menu, list_events_menu
from eventra.cli.invoice_menu import create_invoice_menu, list_invoices_menu
from eventra.cli.preferences_menu import preferences_menu
from eventra.cli.vendor_menu import create_vendor_menu, list_vendors_menu
from eventra.repositories.factory import (
    get_client_repository,
    get_event_repository,
    get_invoice_repository,
    get_preference_repository,
    get_vendor_repository,
)
from eventra.services.client_service import ClientService
from eventra.services.dashboard_service import DashboardService
from eventra.services.event_service import EventService
from eventra.services.invoice_service import InvoiceService
from eventra.services.preference_service import PreferenceService
from eventra.services.vendor_service import VendorService
from eventra.storage.factory import get_storage

console = Console()


class Services(NamedTuple):
    clients: ClientService
    vendors: VendorService
    events: EventService
    invoices: InvoiceService
    dashboard: DashboardService
    preferences: PreferenceService


def _build_services() -> Services:
    client_repo = get_client_repository()
    vendor_repo = get_vendor_repository()
    event_repo = get_event_repository()
    invoice_repo = get_invoice_repository()
    return Services(
        clients=ClientService(client_repo, event_repo),
        vendors=VendorService(vendor_repo),
        events=EventService(event_repo, client_repo, vendor_repo),
        invoices=InvoiceService(invoice_repo, client_repo, event_repo, get_storage()),
        dashboard=DashboardService(client_repo, event_repo, invoice_repo),
        preferences=PreferenceService(get_preference_repository()),
    )


MENU_CHOICES = [
    "Dashboard",
    "List Events",
    "New Event",
    "List Clients",
    "New Client",
    "List Vendors",
    "New Vendor",
    "List Invoices",
    "New Invoice",
    "Preferences",
    "Exit",
]


def main_menu(user_id: str) -> None:
    services = _build_services()
    currency = services.preferences.get_currency(user_id)

    console.print()
    console.print("[bold]Eventra[/bold]", style="cyan")
    console.print(f"[dim]Signed in as {user_id}[/dim]")
    console.print()

    while True:
        choice = questionary.select("Main Menu", choices=MENU_CHOICES).ask()

        if choice is None or choice == "Exit":
            console.print("[bold]Goodbye![/bold]")
            break
        elif choice == "Dashboard":
            dashboard_menu(services.dashboard, user_id, currency)
        elif choice == "List Events":
            list_events_menu(services.events, user_id, currency)
        elif choice == "New Event":
            create_event_menu(services.events, services.clients, services.vendors, user_id)
        elif choice == "List Clients":
            list_clients_menu(services.clients, user_id, currency)
        elif choice == "New Client":
            create_client_menu(services.clients, user_id)
        elif choice == "List Vendors":
            list_vendors_menu(services.vendors, user_id, currency)
        elif choice == "New Vendor":
            create_vendor_menu(services.vendors, user_id)
        elif choice == "List Invoices":
            services.invoices.mark_overdue(user_id)
            list_invoices_menu(services.invoices, services.clients, services.events, user_id, currency)
        elif choice == "New Invoice":
            create_invoice_menu(services.invoices, services.clients, services.events, user_id, currency)
        elif choice == "Preferences":
            currency = preferences_menu(services.preferences, user_id).currency
