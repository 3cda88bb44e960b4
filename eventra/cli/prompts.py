from __future__ import annotations

from datetime import date, datetime

import questionary
from rich.console import Console

from eventra.currency import parse_amount
from eventra.records import to_datetime

console = Console()


def ask_amount(prompt: str, default: float | None = None, minimum: float = 0.0) -> float | None:
    """Prompt until a valid amount is typed. Empty input returns ``default``."""
    while True:
        raw = questionary.text(prompt, default="" if default is None else f"{default:g}").ask()
        if raw is None:
            return None
        if not raw.strip():
            return default
        parsed = parse_amount(raw)
        if parsed is not None and parsed >= minimum:
            return parsed
        console.print("[red]Invalid amount. Try again.[/red]")


def ask_date(prompt: str, default: date | None = None) -> date | None:
    while True:
        raw = questionary.text(prompt, default=default.isoformat() if default else "").ask()
        if not raw:
            return default
        try:
            return date.fromisoformat(raw.strip())
        except ValueError:
            console.print("[red]Use the YYYY-MM-DD format.[/red]")


def ask_datetime(prompt: str, default: datetime | None = None) -> datetime | None:
    while True:
        raw = questionary.text(prompt, default=default.strftime("%Y-%m-%d %H:%M") if default else "").ask()
        if not raw:
            return default
        try:
            return to_datetime(datetime.fromisoformat(raw.strip()))
        except ValueError:
            console.print("[red]Use the YYYY-MM-DD HH:MM format.[/red]")
