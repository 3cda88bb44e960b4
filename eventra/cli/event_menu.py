from __future__ import annotations

import questionary
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from eventra.cli.prompts import ask_amount, ask_datetime
from eventra.currency import format_currency
from eventra.models.event import Event, EventStatus, EventTask
from eventra.search import ALL, distinct_values, search_events
from eventra.services.client_service import ClientService
from eventra.services.event_service import EventService
from eventra.services.vendor_service import VendorService

console = Console()

EVENT_TYPES = ["Wedding", "Corporate", "Birthday", "Conference", "Party", "Other"]

STATUS_STYLES = {
    EventStatus.TENTATIVE: "yellow",
    EventStatus.CONFIRMED: "green",
    EventStatus.CANCELLED: "red",
    EventStatus.COMPLETED: "blue",
}


def create_event_menu(
    event_service: EventService,
    client_service: ClientService,
    vendor_service: VendorService,
    user_id: str,
) -> Event | None:
    console.print()
    console.print("[bold]New Event[/bold]", style="cyan")

    title = questionary.text("Title:").ask()
    if not title:
        console.print("[yellow]Cancelled.[/yellow]")
        return None

    event_type = questionary.select("Type:", choices=EVENT_TYPES).ask() or ""
    date = ask_datetime("Date and time (YYYY-MM-DD HH:MM):")
    if date is None:
        console.print("[yellow]An event needs a date. Cancelled.[/yellow]")
        return None
    location = questionary.text("Location (optional):").ask() or ""

    client_id = None
    clients = client_service.list_clients(user_id)
    if clients:
        client_choices = {f"{c.id} - {c.full_name}": c.id for c in clients}
        picked = questionary.select("Client:", choices=["No client", *client_choices]).ask()
        client_id = client_choices.get(picked)

    vendor_ids: list[int] = []
    vendors = vendor_service.list_vendors(user_id)
    if vendors:
        vendor_choices = {f"{v.id} - {v.name}": v.id for v in vendors}
        picked_vendors = questionary.checkbox("Vendors:", choices=list(vendor_choices)).ask() or []
        vendor_ids = [vendor_choices[label] for label in picked_vendors]

    budget = ask_amount("Budget:", default=0.0)
    status_value = questionary.select("Status:", choices=[s.value for s in EventStatus]).ask()

    tasks: list[EventTask] = []
    while questionary.confirm("Add a task?", default=False).ask():
        description = questionary.text("  Task:").ask()
        if description:
            tasks.append(EventTask(description=description))

    try:
        event = Event(
            title=title,
            type=event_type,
            date=date,
            location=location,
            client_id=client_id,
            vendor_ids=vendor_ids,
            budget=budget or 0.0,
            status=EventStatus(status_value or EventStatus.TENTATIVE.value),
            tasks=tasks,
        )
    except ValidationError as exc:
        console.print(f"[red]Invalid event: {exc.errors()[0]['msg']}[/red]")
        return None

    event = event_service.create_event(user_id, event)
    console.print(f"[green bold]Event '{event.title}' created.[/green bold]")
    return event


def _render_events(events: list[Event], currency: str) -> None:
    table = Table(title="Events")
    table.add_column("#", style="dim")
    table.add_column("Date")
    table.add_column("Title", style="bold")
    table.add_column("Type")
    table.add_column("Client")
    table.add_column("Budget", justify="right")
    table.add_column("Status")
    for e in events:
        style = STATUS_STYLES.get(e.status, "")
        table.add_row(
            str(e.id),
            e.date.strftime("%Y-%m-%d %H:%M"),
            e.title,
            e.type,
            e.client_name,
            format_currency(e.budget, currency),
            f"[{style}]{e.status.value}[/{style}]",
        )
    console.print()
    console.print(table)
    console.print()


def list_events_menu(event_service: EventService, user_id: str, currency: str = "USD") -> None:
    events = event_service.list_events(user_id)
    if not events:
        console.print("[yellow]No events yet.[/yellow]")
        return

    term = questionary.text("Search (title, client, location; empty for all):").ask() or ""
    status = questionary.select("Status:", choices=[ALL, *(s.value for s in EventStatus)]).ask() or ALL
    types = distinct_values(events, "type")
    event_type = questionary.select("Type:", choices=[ALL, *types]).ask() if types else ALL

    matches = search_events(events, term, status, event_type or ALL)
    if not matches:
        console.print("[yellow]No events match.[/yellow]")
        return
    _render_events(matches, currency)

    event_choices = {f"{e.id} - {e.title}": e for e in matches}
    choice = questionary.select("Select an event:", choices=[*event_choices, "Back"]).ask()
    if choice is None or choice == "Back":
        return
    _event_detail_menu(event_choices[choice], event_service, user_id)


def _event_detail_menu(event: Event, event_service: EventService, user_id: str) -> None:
    while True:
        console.print()
        console.print(f"[bold cyan]{event.title}[/bold cyan] ({event.status.value})")
        for i, task in enumerate(event.tasks):
            mark = "[green]x[/green]" if task.completed else " "
            console.print(f"  [{mark}] {i + 1}. {task.description}")

        choice = questionary.select(
            "Actions:",
            choices=["Change status", "Toggle task", "Delete", "Back"],
        ).ask()
        if choice is None or choice == "Back":
            break
        elif choice == "Change status":
            status_value = questionary.select("New status:", choices=[s.value for s in EventStatus]).ask()
            if status_value:
                event = event_service.set_status(user_id, event.id, EventStatus(status_value))
                console.print(f"[green]Status set to {event.status.value}.[/green]")
        elif choice == "Toggle task":
            if not event.tasks:
                console.print("[yellow]This event has no tasks.[/yellow]")
                continue
            task_choices = {f"{i + 1}. {t.description}": i for i, t in enumerate(event.tasks)}
            picked = questionary.select("Task:", choices=list(task_choices)).ask()
            if picked is not None:
                index = task_choices[picked]
                event = event_service.set_task_completed(user_id, event.id, index, not event.tasks[index].completed)
        elif choice == "Delete":
            if questionary.confirm(f"Delete '{event.title}'?", default=False).ask():
                event_service.delete_event(user_id, event.id)
                console.print("[green]Event deleted.[/green]")
                break
