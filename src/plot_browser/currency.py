"""Fixed-rate currency conversion and price formatting.

Plot prices are stored in USD. Everything in this module is presentation
math layered on top of that stored value; nothing here mutates a record.
"""

from typing import Final

from plot_browser.models import Currency

# USD -> EUR
CONVERSION_RATE: Final = 0.9524

CURRENCY_SYMBOLS: Final[dict[Currency, str]] = {
    Currency.USD: "$",
    Currency.EUR: "€",
}


def convert(amount: float, currency: Currency | str, *, rate: float = CONVERSION_RATE) -> float:
    """Convert a USD amount into the display currency.

    No rounding is applied; see ``format_price`` for display output.

    Args:
        amount: Amount in the base currency (USD).
        currency: Target currency.
        rate: USD to EUR rate.

    Raises:
        ValueError: If ``currency`` is not a supported currency code.
    """
    if Currency(currency) is Currency.EUR:
        return amount * rate
    return amount


def toggle_currency(currency: Currency | str) -> Currency:
    """Return the other supported currency."""
    return Currency.EUR if Currency(currency) is Currency.USD else Currency.USD


def format_price(amount: float, currency: Currency | str) -> str:
    """Format a display amount with symbol and thousands separators.

    >>> format_price(166670.0, "EUR")
    '€166,670'
    >>> format_price(1234.5, "USD")
    '$1,234.50'
    """
    symbol = CURRENCY_SYMBOLS[Currency(currency)]
    text = f"{amount:,.2f}"
    if text.endswith(".00"):
        text = text[:-3]
    return f"{symbol}{text}"
