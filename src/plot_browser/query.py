"""FilterSpec model and raw query parameter normalization."""

from __future__ import annotations

import math
import re
from collections.abc import Mapping
from typing import Final

from pydantic import BaseModel, ConfigDict, field_validator

from plot_browser.currency import format_price
from plot_browser.models import Currency

# Raw parameter names as they appear in the query string
PARAM_MIN_PRICE: Final = "minPrice"
PARAM_MAX_PRICE: Final = "maxPrice"
PARAM_LOCATION: Final = "location"
PARAM_CURRENCY: Final = "currency"

_NON_DIGITS: Final = re.compile(r"[^0-9]")
_CURRENCY_CODES: Final = frozenset(c.value for c in Currency)


def _parse_optional_price(value: str | None) -> float | None:
    """Strip non-digits and parse as base-10.

    Returns None when nothing is left or the digits overflow to infinity.
    """
    if value is None:
        return None
    cleaned = _NON_DIGITS.sub("", str(value))
    if not cleaned:
        return None
    price = float(cleaned)
    return price if math.isfinite(price) else None


def _format_param(value: float) -> str:
    return str(int(value)) if value.is_integer() else str(value)


class FilterSpec(BaseModel):
    """Validated filter parameters for one evaluation of the catalog.

    Prices are in the currency the user is viewing. Validators coerce raw
    strings and silently discard invalid values; nothing here raises for
    user input. ``min_price > max_price`` is allowed and matches nothing.
    """

    model_config = ConfigDict(frozen=True)

    min_price: float | None = None
    max_price: float | None = None
    location_query: str | None = None
    currency: Currency = Currency.USD

    # --- validators ---

    @field_validator("min_price", "max_price", mode="before")
    @classmethod
    def coerce_price(cls, v: object) -> float | None:
        if v is None:
            return None
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return v if math.isfinite(v) and v >= 0 else None
        return _parse_optional_price(str(v))

    @field_validator("location_query", mode="before")
    @classmethod
    def clean_location(cls, v: object) -> str | None:
        if v is None:
            return None
        s = str(v).strip()
        return s if s else None

    @field_validator("currency", mode="before")
    @classmethod
    def validate_currency(cls, v: object) -> Currency:
        if isinstance(v, Currency):
            return v
        # Exact, case-sensitive match on the code
        if isinstance(v, str) and v in _CURRENCY_CODES:
            return Currency(v)
        return Currency.USD

    # --- convenience methods ---

    def active_filter_chips(self) -> list[dict[str, str]]:
        """Build filter chip descriptors for template rendering."""
        chips: list[dict[str, str]] = []
        if self.min_price is not None:
            chips.append(
                {"key": PARAM_MIN_PRICE, "label": f"Min {format_price(self.min_price, self.currency)}"}
            )
        if self.max_price is not None:
            chips.append(
                {"key": PARAM_MAX_PRICE, "label": f"Max {format_price(self.max_price, self.currency)}"}
            )
        if self.location_query:
            chips.append({"key": PARAM_LOCATION, "label": self.location_query})
        return chips

    def to_params(self) -> dict[str, str]:
        """Canonical raw parameters for this spec, e.g. for building links."""
        params: dict[str, str] = {}
        if self.min_price is not None:
            params[PARAM_MIN_PRICE] = _format_param(self.min_price)
        if self.max_price is not None:
            params[PARAM_MAX_PRICE] = _format_param(self.max_price)
        if self.location_query:
            params[PARAM_LOCATION] = self.location_query
        params[PARAM_CURRENCY] = self.currency.value
        return params


def normalize_query(params: Mapping[str, str | None]) -> FilterSpec:
    """Parse a snapshot of raw query parameters into a FilterSpec.

    Unrecognized keys are ignored. Never raises for any string input.
    """
    return FilterSpec.model_validate(
        {
            "min_price": params.get(PARAM_MIN_PRICE),
            "max_price": params.get(PARAM_MAX_PRICE),
            "location_query": params.get(PARAM_LOCATION),
            "currency": params.get(PARAM_CURRENCY),
        }
    )
