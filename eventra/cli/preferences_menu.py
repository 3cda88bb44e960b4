from __future__ import annotations

import questionary
from rich.console import Console

from eventra.currency import COUNTRY_TO_CURRENCY, available_currencies
from eventra.models.preferences import Preferences
from eventra.services.preference_service import PreferenceService

console = Console()


def preferences_menu(preference_service: PreferenceService, user_id: str) -> Preferences:
    prefs = preference_service.get_preferences(user_id)
    console.print()
    console.print(f"[bold cyan]Preferences[/bold cyan]  currency={prefs.currency} country={prefs.country or '-'}")

    choice = questionary.select("Change:", choices=["Currency", "Country", "Back"]).ask()
    if choice == "Currency":
        options = {f"{c['code']} - {c['name']} ({c['symbol']})": c["code"] for c in available_currencies()}
        picked = questionary.select("Currency:", choices=list(options)).ask()
        if picked:
            prefs = preference_service.set_currency(user_id, options[picked])
            console.print(f"[green]Currency set to {prefs.currency}.[/green]")
    elif choice == "Country":
        picked = questionary.select("Country:", choices=sorted(COUNTRY_TO_CURRENCY)).ask()
        if picked:
            prefs = preference_service.set_country(user_id, picked)
            console.print(f"[green]Country set to {prefs.country}, currency {prefs.currency}.[/green]")
    return prefs
