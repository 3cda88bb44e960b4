from __future__ import annotations

import questionary
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from eventra.cli.prompts import ask_amount
from eventra.currency import format_currency
from eventra.models.vendor import Vendor
from eventra.search import search_vendors
from eventra.services.vendor_service import VendorService

console = Console()

VENDOR_TYPES = ["Catering", "Venue", "Photography", "Music", "Decoration", "Transportation", "Other"]


def create_vendor_menu(vendor_service: VendorService, user_id: str) -> Vendor | None:
    console.print()
    console.print("[bold]New Vendor[/bold]", style="cyan")

    name = questionary.text("Vendor name:").ask()
    if not name:
        console.print("[yellow]Cancelled.[/yellow]")
        return None

    data = {
        "name": name,
        "contact_name": questionary.text("Contact name (optional):").ask() or "",
        "email": questionary.text("Email (optional):").ask() or "",
        "phone": questionary.text("Phone (optional):").ask() or "",
        "website": questionary.text("Website (optional):").ask() or "",
        "type": questionary.select("Type:", choices=VENDOR_TYPES).ask() or "",
        "rate": ask_amount("Rate (optional):"),
        "notes": questionary.text("Notes (optional):").ask() or "",
    }
    try:
        vendor = Vendor(**data)
    except ValidationError as exc:
        console.print(f"[red]Invalid vendor: {exc.errors()[0]['msg']}[/red]")
        return None

    vendor = vendor_service.create_vendor(user_id, vendor)
    console.print(f"[green bold]Vendor '{vendor.name}' created.[/green bold]")
    return vendor


def list_vendors_menu(vendor_service: VendorService, user_id: str, currency: str = "USD") -> None:
    vendors = vendor_service.list_vendors(user_id)
    if not vendors:
        console.print("[yellow]No vendors yet.[/yellow]")
        return

    term = questionary.text("Search (name, email, contact, phone; empty for all):").ask() or ""
    matches = search_vendors(vendors, term)
    if not matches:
        console.print("[yellow]No vendors match.[/yellow]")
        return

    table = Table(title="Vendors")
    table.add_column("#", style="dim")
    table.add_column("Name", style="bold")
    table.add_column("Type")
    table.add_column("Contact")
    table.add_column("Rate", justify="right")
    for v in matches:
        rate = format_currency(v.rate, currency) if v.rate is not None else "-"
        table.add_row(str(v.id), v.name, v.type, v.contact_name or v.email, rate)
    console.print()
    console.print(table)
    console.print()

    vendor_choices = {f"{v.id} - {v.name}": v for v in matches}
    choice = questionary.select("Select a vendor:", choices=[*vendor_choices, "Back"]).ask()
    if choice is None or choice == "Back":
        return
    vendor = vendor_choices[choice]

    action = questionary.select("Actions:", choices=["Delete", "Back"]).ask()
    if action == "Delete" and questionary.confirm(f"Delete '{vendor.name}'?", default=False).ask():
        vendor_service.delete_vendor(user_id, vendor.id)
        console.print("[green]Vendor deleted.[/green]")
