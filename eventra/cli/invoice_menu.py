from __future__ import annotations

from datetime import timedelta

import questionary
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from eventra.cli.prompts import ask_amount, ask_date
from eventra.constants import now as current_time
from eventra.currency import format_currency
from eventra.models.invoice import DiscountSpec, DiscountType, Invoice, InvoiceStatus, InvoiceTotals, LineItem
from eventra.search import ALL, search_invoices
from eventra.services.client_service import ClientService
from eventra.services.event_service import EventService
from eventra.services.invoice_service import InvoiceService

console = Console()

DEFAULT_PAYMENT_TERMS_DAYS = 30


def _print_totals(totals: InvoiceTotals, currency: str) -> None:
    console.print(
        f"  Subtotal {format_currency(totals.subtotal, currency)}"
        f" | Tax {format_currency(totals.tax_amount, currency)}"
        f" | Discount -{format_currency(totals.discount_amount, currency)}"
        f" | [bold]Total {format_currency(totals.grand_total, currency)}[/bold]"
    )


def _ask_items(invoice_service: InvoiceService, currency: str) -> list[LineItem]:
    items: list[LineItem] = []
    console.print()
    console.print("Add line items:")
    while questionary.confirm("Add item?", default=True).ask():
        description = questionary.text("  Description:").ask()
        if not description:
            continue
        quantity = ask_amount("  Quantity:", default=1.0, minimum=1.0)
        unit_price = ask_amount("  Unit price:", default=0.0)
        if quantity is None or unit_price is None:
            continue
        items.append(LineItem(description=description, quantity=quantity, unit_price=unit_price))
        _print_totals(invoice_service.preview_totals(items, 0.0, DiscountSpec()), currency)
    return items


def _ask_discount() -> DiscountSpec | None:
    kind = questionary.select("Discount type:", choices=[t.value for t in DiscountType]).ask()
    if kind is None:
        return None
    while True:
        value = ask_amount("Discount:", default=0.0)
        if value is None:
            return DiscountSpec()
        try:
            return DiscountSpec(type=DiscountType(kind), value=value)
        except ValidationError:
            console.print("[red]A percentage discount must be between 0 and 100.[/red]")


def create_invoice_menu(
    invoice_service: InvoiceService,
    client_service: ClientService,
    event_service: EventService,
    user_id: str,
    currency: str = "USD",
) -> Invoice | None:
    console.print()
    console.print("[bold]New Invoice[/bold]", style="cyan")

    clients = client_service.list_clients(user_id)
    if not clients:
        console.print("[yellow]Create a client before invoicing.[/yellow]")
        return None
    client_choices = {f"{c.id} - {c.full_name}": c.id for c in clients}
    picked = questionary.select("Client:", choices=[*client_choices, "Cancel"]).ask()
    if picked is None or picked == "Cancel":
        console.print("[yellow]Cancelled.[/yellow]")
        return None
    client_id = client_choices[picked]

    event_id = None
    events = event_service.list_for_client(user_id, client_id)
    if events:
        event_choices = {f"{e.id} - {e.title}": e.id for e in events}
        picked_event = questionary.select("Event:", choices=["No event", *event_choices]).ask()
        event_id = event_choices.get(picked_event)

    today = current_time().date()
    issue_date = ask_date("Issue date (YYYY-MM-DD):", default=today) or today
    due_date = ask_date("Due date (YYYY-MM-DD):", default=issue_date + timedelta(days=DEFAULT_PAYMENT_TERMS_DAYS))

    items = _ask_items(invoice_service, currency)
    if not items:
        console.print("[yellow]No items added. Invoice not created.[/yellow]")
        return None

    tax_rate = ask_amount("Tax rate (%):", default=0.0) or 0.0
    discount = _ask_discount() or DiscountSpec()
    totals = invoice_service.preview_totals(items, tax_rate, discount)
    console.print()
    _print_totals(totals, currency)

    status_value = questionary.select("Status:", choices=[s.value for s in InvoiceStatus]).ask()
    notes = questionary.text("Notes (optional):").ask() or ""

    if not questionary.confirm("Save invoice?", default=True).ask():
        console.print("[yellow]Cancelled.[/yellow]")
        return None

    invoice = Invoice(
        client_id=client_id,
        event_id=event_id,
        issue_date=issue_date,
        due_date=due_date or issue_date,
        status=InvoiceStatus(status_value or InvoiceStatus.DRAFT.value),
        items=items,
        tax_rate=tax_rate,
        discount=discount,
        notes=notes,
    )
    invoice = invoice_service.create_invoice(user_id, invoice)
    console.print(
        f"[green bold]Invoice {invoice.invoice_number} created: "
        f"{format_currency(invoice.amount, currency)}[/green bold]"
    )
    return invoice


def list_invoices_menu(
    invoice_service: InvoiceService,
    client_service: ClientService,
    event_service: EventService,
    user_id: str,
    currency: str = "USD",
) -> None:
    invoices = invoice_service.list_invoices(user_id)
    if not invoices:
        console.print("[yellow]No invoices yet.[/yellow]")
        return

    client_names = {c.id: c.full_name for c in client_service.list_clients(user_id)}
    event_titles = {e.id: e.title for e in event_service.list_events(user_id)}

    term = questionary.text("Search (number, client, event; empty for all):").ask() or ""
    status = questionary.select("Status:", choices=[ALL, *(s.value for s in InvoiceStatus)]).ask() or ALL
    matches = search_invoices(invoices, term, status, client_names, event_titles)
    if not matches:
        console.print("[yellow]No invoices match.[/yellow]")
        return

    today = current_time().date()
    table = Table(title="Invoices")
    table.add_column("Number", style="bold")
    table.add_column("Client")
    table.add_column("Issued")
    table.add_column("Due")
    table.add_column("Amount", justify="right")
    table.add_column("Status")
    for inv in matches:
        status_label = inv.status.value
        if inv.is_overdue(today) and inv.status != InvoiceStatus.OVERDUE:
            status_label = f"{status_label} [red](overdue)[/red]"
        table.add_row(
            inv.invoice_number,
            client_names.get(inv.client_id, "-"),
            inv.issue_date.isoformat(),
            inv.due_date.isoformat(),
            format_currency(inv.amount, currency),
            status_label,
        )
    console.print()
    console.print(table)
    console.print()

    invoice_choices = {inv.invoice_number: inv for inv in matches}
    choice = questionary.select("Select an invoice:", choices=[*invoice_choices, "Back"]).ask()
    if choice is None or choice == "Back":
        return
    _invoice_detail_menu(invoice_choices[choice], invoice_service, user_id, currency)


def _invoice_detail_menu(invoice: Invoice, invoice_service: InvoiceService, user_id: str, currency: str) -> None:
    while True:
        console.print()
        console.print(f"[bold cyan]Invoice {invoice.invoice_number}[/bold cyan] ({invoice.status.value})")
        table = Table()
        table.add_column("Description")
        table.add_column("Qty", justify="right")
        table.add_column("Unit price", justify="right")
        table.add_column("Amount", justify="right")
        for item in invoice.items:
            table.add_row(
                item.description,
                f"{item.quantity:g}",
                format_currency(item.unit_price, currency),
                format_currency(item.amount, currency),
            )
        console.print(table)
        _print_totals(
            InvoiceTotals(
                subtotal=invoice.subtotal,
                tax_amount=invoice.tax_amount,
                discount_amount=invoice.discount_amount,
                grand_total=invoice.amount,
            ),
            currency,
        )

        choice = questionary.select("Actions:", choices=["Change status", "Export PDF", "Delete", "Back"]).ask()
        if choice is None or choice == "Back":
            break
        elif choice == "Change status":
            status_value = questionary.select("New status:", choices=[s.value for s in InvoiceStatus]).ask()
            if status_value:
                invoice = invoice_service.set_status(user_id, invoice.id, InvoiceStatus(status_value))
                console.print(f"[green]Status set to {invoice.status.value}.[/green]")
        elif choice == "Export PDF":
            path = invoice_service.export_pdf(user_id, invoice.id, currency)
            console.print(f"[green]PDF saved: {path}[/green]")
        elif choice == "Delete":
            if questionary.confirm(f"Delete invoice {invoice.invoice_number}?", default=False).ask():
                invoice_service.delete_invoice(user_id, invoice.id)
                console.print("[green]Invoice deleted.[/green]")
                break
