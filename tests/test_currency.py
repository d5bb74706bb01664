"""Tests for currency conversion and price formatting."""

import pytest

from plot_browser.currency import CONVERSION_RATE, convert, format_price, toggle_currency
from plot_browser.models import Currency


class TestConvert:
    def test_usd_is_identity(self) -> None:
        assert convert(175000, Currency.USD) == 175000

    def test_eur_applies_rate(self) -> None:
        assert convert(175000, Currency.EUR) == 175000 * 0.9524

    def test_rate_constant(self) -> None:
        assert CONVERSION_RATE == 0.9524

    def test_accepts_plain_strings(self) -> None:
        assert convert(100, "USD") == 100
        assert convert(100, "EUR") == 100 * CONVERSION_RATE

    def test_custom_rate(self) -> None:
        assert convert(200, Currency.EUR, rate=0.5) == 100

    def test_no_rounding(self) -> None:
        assert convert(1, Currency.EUR) == 0.9524

    def test_unknown_currency_raises(self) -> None:
        with pytest.raises(ValueError):
            convert(100, "GBP")


class TestToggleCurrency:
    def test_usd_to_eur(self) -> None:
        assert toggle_currency(Currency.USD) is Currency.EUR

    def test_eur_to_usd(self) -> None:
        assert toggle_currency("EUR") is Currency.USD


class TestFormatPrice:
    def test_usd_whole_amount(self) -> None:
        assert format_price(175000, Currency.USD) == "$175,000"

    def test_eur_symbol(self) -> None:
        assert format_price(166670.0, Currency.EUR) == "€166,670"

    def test_fraction_rounded_to_cents(self) -> None:
        assert format_price(1234.567, "USD") == "$1,234.57"

    def test_small_amount(self) -> None:
        assert format_price(0.5, "EUR") == "€0.50"
