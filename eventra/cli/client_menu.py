from __future__ import annotations

import questionary
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from eventra.currency import format_currency
from eventra.models.client import Client
from eventra.search import distinct_values, search_clients
from eventra.services.client_service import ClientService

console = Console()

CLIENT_TYPES = ["Individual", "Corporate", "Non-profit", "Government"]


def _client_form(existing: Client | None = None) -> dict | None:
    first_name = questionary.text("First name:", default=existing.first_name if existing else "").ask()
    if not first_name:
        return None
    last_name = questionary.text("Last name:", default=existing.last_name if existing else "").ask()
    if not last_name:
        return None
    return {
        "first_name": first_name,
        "last_name": last_name,
        "email": questionary.text("Email (optional):", default=existing.email if existing else "").ask() or "",
        "phone": questionary.text("Phone (optional):", default=existing.phone if existing else "").ask() or "",
        "company": questionary.text("Company (optional):", default=existing.company if existing else "").ask() or "",
        "type": questionary.select("Type:", choices=CLIENT_TYPES).ask() or "",
        "city": questionary.text("City (optional):", default=existing.city if existing else "").ask() or "",
        "notes": questionary.text("Notes (optional):", default=existing.notes if existing else "").ask() or "",
    }


def create_client_menu(client_service: ClientService, user_id: str) -> Client | None:
    console.print()
    console.print("[bold]New Client[/bold]", style="cyan")

    data = _client_form()
    if data is None:
        console.print("[yellow]Cancelled.[/yellow]")
        return None
    try:
        client = Client(**data)
    except ValidationError as exc:
        console.print(f"[red]Invalid client: {exc.errors()[0]['msg']}[/red]")
        return None

    client = client_service.create_client(user_id, client)
    console.print(f"[green bold]Client '{client.full_name}' created.[/green bold]")
    return client


def _render_clients(clients: list[Client]) -> None:
    table = Table(title="Clients")
    table.add_column("#", style="dim")
    table.add_column("Name", style="bold")
    table.add_column("Company")
    table.add_column("Email")
    table.add_column("Phone")
    table.add_column("Type")
    for c in clients:
        table.add_row(str(c.id), c.full_name, c.company, c.email, c.phone, c.type)
    console.print()
    console.print(table)
    console.print()


def list_clients_menu(client_service: ClientService, user_id: str, currency: str = "USD") -> None:
    clients = client_service.list_clients(user_id)
    if not clients:
        console.print("[yellow]No clients yet.[/yellow]")
        return

    term = questionary.text("Search (name, email, company, phone; empty for all):").ask() or ""
    type_filter = "all"
    types = distinct_values(clients, "type")
    if types:
        type_filter = questionary.select("Type:", choices=["all", *types]).ask() or "all"

    matches = search_clients(clients, term, type_filter)
    if not matches:
        console.print("[yellow]No clients match.[/yellow]")
        return
    _render_clients(matches)

    client_choices = {f"{c.id} - {c.full_name}": c for c in matches}
    choice = questionary.select("Select a client:", choices=[*client_choices, "Back"]).ask()
    if choice is None or choice == "Back":
        return
    _client_detail_menu(client_choices[choice], client_service, user_id, currency)


def _client_detail_menu(client: Client, client_service: ClientService, user_id: str, currency: str) -> None:
    while True:
        console.print()
        console.print(f"[bold cyan]{client.full_name}[/bold cyan] {client.company}")
        revenue = client_service.client_revenue(user_id, client.id)
        console.print(f"  Confirmed revenue: [bold]{format_currency(revenue, currency)}[/bold]")

        choice = questionary.select("Actions:", choices=["Edit", "Delete", "Back"]).ask()
        if choice is None or choice == "Back":
            break
        elif choice == "Edit":
            data = _client_form(client)
            if data is None:
                continue
            try:
                updated = Client.model_validate({**client.model_dump(), **data})
            except ValidationError as exc:
                console.print(f"[red]Invalid client: {exc.errors()[0]['msg']}[/red]")
                continue
            client = client_service.update_client(user_id, updated)
            console.print("[green]Client updated.[/green]")
        elif choice == "Delete":
            if questionary.confirm(f"Delete '{client.full_name}'?", default=False).ask():
                client_service.delete_client(user_id, client.id)
                console.print("[green]Client deleted.[/green]")
                break
