"""Currency presentation helpers.

The core always works in raw numbers; these helpers are only used when a value
is shown to a person (CLI tables, PDF, web payloads that ask for labels).
"""

from __future__ import annotations

from typing import NamedTuple


class CurrencyInfo(NamedTuple):
    symbol: str
    name: str
    thousands_sep: str = ","
    decimal_sep: str = "."
    decimals: int = 2


CURRENCY_CONFIG: dict[str, CurrencyInfo] = {
    "USD": CurrencyInfo("$", "US Dollar"),
    "EUR": CurrencyInfo("€", "Euro", ".", ","),
    "GBP": CurrencyInfo("£", "British Pound"),
    "CAD": CurrencyInfo("C$", "Canadian Dollar"),
    "AUD": CurrencyInfo("A$", "Australian Dollar"),
    "INR": CurrencyInfo("₹", "Indian Rupee"),
    "JPY": CurrencyInfo("¥", "Japanese Yen", decimals=0),
    "CNY": CurrencyInfo("¥", "Chinese Yuan"),
    "BRL": CurrencyInfo("R$", "Brazilian Real", ".", ","),
    "MXN": CurrencyInfo("Mex$", "Mexican Peso"),
}

COUNTRY_TO_CURRENCY: dict[str, str] = {
    "US": "USD",
    "DE": "EUR",
    "FR": "EUR",
    "IT": "EUR",
    "ES": "EUR",
    "GB": "GBP",
    "CA": "CAD",
    "AU": "AUD",
    "IN": "INR",
    "JP": "JPY",
    "CN": "CNY",
    "BR": "BRL",
    "MX": "MXN",
}

DEFAULT_CURRENCY = "USD"


def _info(currency: str) -> CurrencyInfo:
    return CURRENCY_CONFIG.get(currency.upper(), CURRENCY_CONFIG[DEFAULT_CURRENCY])


def format_currency(amount: float, currency: str = DEFAULT_CURRENCY, use_symbol: bool = True) -> str:
    """Format a raw amount for display: 1234.5 -> '$1,234.50'.

    With ``use_symbol=False`` the ISO code is used instead ('USD 1,234.50'),
    which is safe for Latin-1 only outputs such as the PDF core fonts.
    """
    info = _info(currency)
    rounded = round(abs(amount), info.decimals)
    number = f"{rounded:,.{info.decimals}f}"
    number = number.replace(",", "X").replace(".", info.decimal_sep).replace("X", info.thousands_sep)
    sign = "-" if amount < 0 and rounded != 0 else ""
    if use_symbol:
        return f"{sign}{info.symbol}{number}"
    code = currency.upper() if currency.upper() in CURRENCY_CONFIG else DEFAULT_CURRENCY
    return f"{sign}{code} {number}"


def currency_symbol(currency: str) -> str:
    return _info(currency).symbol


def currency_for_country(country: str) -> str:
    return COUNTRY_TO_CURRENCY.get(country.upper(), DEFAULT_CURRENCY)


def available_currencies() -> list[dict[str, str]]:
    return [{"code": code, "name": info.name, "symbol": info.symbol} for code, info in CURRENCY_CONFIG.items()]


def parse_amount(text: str) -> float | None:
    """Parse a user-typed amount. Returns None on invalid input.

    Accepts formats like '2850', '2850.50', '2,850.50' and '2.850,50'.
    """
    text = text.strip().lstrip("$€£¥₹").strip()
    if not text:
        return None
    if "," in text and "." in text:
        if text.rfind(",") > text.rfind("."):
            text = text.replace(".", "").replace(",", ".")
        else:
            text = text.replace(",", "")
    elif "," in text:
        head, _, tail = text.rpartition(",")
        if len(tail) == 3 and head:
            text = text.replace(",", "")
        else:
            text = text.replace(",", ".")
    try:
        return float(text)
    except ValueError:
        return None
