from __future__ import annotations

from rich.console import Console
from rich.table import Table

from eventra.currency import format_currency
from eventra.models.dashboard import DashboardSummary, MonthBucket
from eventra.services.dashboard_service import DashboardService

console = Console()

BAR_WIDTH = 30


def _bar_chart(title: str, buckets: list[MonthBucket], label) -> Table:
    table = Table(title=title, show_header=False, box=None)
    table.add_column("Month", style="dim")
    table.add_column("Bar")
    table.add_column("Value", justify="right")
    peak = max((b.value for b in buckets), default=0.0)
    for bucket in buckets:
        width = round(bucket.value / peak * BAR_WIDTH) if peak > 0 else 0
        table.add_row(bucket.month, "[cyan]" + "█" * width + "[/cyan]", label(bucket.value))
    return table


def render_dashboard(summary: DashboardSummary, currency: str = "USD") -> None:
    stats = summary.stats
    overview = Table(title="Overview", show_header=False)
    overview.add_column("Metric", style="bold")
    overview.add_column("Value", justify="right")
    overview.add_row("Total events", str(stats.total_events))
    overview.add_row("Upcoming events", str(stats.upcoming_events))
    overview.add_row("Clients", str(stats.total_clients))
    overview.add_row("Invoiced revenue", format_currency(stats.total_revenue, currency))
    overview.add_row("Confirmed event revenue", format_currency(stats.confirmed_revenue, currency))
    console.print()
    console.print(overview)

    console.print(_bar_chart("Revenue by month", summary.revenue_by_month, lambda v: format_currency(v, currency)))
    console.print(_bar_chart("New clients by month", summary.client_growth, lambda v: f"{v:g}"))

    if summary.event_types:
        types = Table(title="Events by type")
        types.add_column("Type")
        types.add_column("Count", justify="right")
        for name, count in summary.event_types.items():
            types.add_row(name, str(count))
        console.print(types)

    if summary.upcoming:
        upcoming = Table(title="Upcoming events")
        upcoming.add_column("Date")
        upcoming.add_column("Title", style="bold")
        upcoming.add_column("Client")
        upcoming.add_column("Status")
        for event in summary.upcoming:
            upcoming.add_row(event.date.strftime("%Y-%m-%d %H:%M"), event.title, event.client_name, event.status.value)
        console.print(upcoming)
    else:
        console.print("[dim]No upcoming events.[/dim]")

    if summary.recent_clients:
        console.print("[bold]Recent clients:[/bold] " + ", ".join(c.full_name for c in summary.recent_clients))
    console.print()


def dashboard_menu(dashboard_service: DashboardService, user_id: str, currency: str = "USD") -> None:
    render_dashboard(dashboard_service.summary(user_id), currency)
