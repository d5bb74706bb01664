"""Filter pipeline: apply a FilterSpec to the catalog.

Every function here is pure. Prices are converted to the display currency
first, and the price bounds are compared in that currency, since the user
typed them while looking at converted prices.
"""

import unicodedata
from collections.abc import Mapping, Sequence

from plot_browser.currency import CONVERSION_RATE, convert
from plot_browser.logging import get_logger
from plot_browser.models import PlotRecord, ResultItem
from plot_browser.query import FilterSpec, normalize_query

logger = get_logger(__name__)


def normalize_text(text: str) -> str:
    """Fold text for matching: strip diacritics, lower-case.

    >>> normalize_text("Lüneburger Heide")
    'luneburger heide'
    """
    decomposed = unicodedata.normalize("NFD", text)
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return stripped.lower()


def matches_location(location: str, query: str | None) -> bool:
    """Substring match ignoring case and diacritics. An empty query matches everything."""
    if not query:
        return True
    return normalize_text(query) in normalize_text(location)


def evaluate(
    catalog: Sequence[PlotRecord],
    spec: FilterSpec,
    *,
    rate: float = CONVERSION_RATE,
) -> list[ResultItem]:
    """Filter the catalog and attach display prices.

    Args:
        catalog: Plots in display order.
        spec: Normalized filters.
        rate: USD to EUR rate used for the display price.

    Returns:
        Matching plots in catalog order. An empty list means no matches.
    """
    results: list[ResultItem] = []
    for plot in catalog:
        display_price = convert(plot.price, spec.currency, rate=rate)
        if spec.min_price is not None and display_price < spec.min_price:
            continue
        if spec.max_price is not None and display_price > spec.max_price:
            continue
        if not matches_location(plot.location, spec.location_query):
            continue
        results.append(ResultItem(plot=plot, display_price=display_price, currency=spec.currency))

    logger.debug(
        "filter_pipeline_complete",
        total_plots=len(catalog),
        matching=len(results),
        min_price=spec.min_price,
        max_price=spec.max_price,
        location=spec.location_query,
        currency=spec.currency.value,
    )
    return results


def search(
    catalog: Sequence[PlotRecord],
    params: Mapping[str, str | None],
    *,
    rate: float = CONVERSION_RATE,
) -> list[ResultItem]:
    """Normalize raw query parameters and evaluate them against the catalog."""
    return evaluate(catalog, normalize_query(params), rate=rate)


def location_suggestions(catalog: Sequence[PlotRecord], query: str | None) -> list[str]:
    """Distinct catalog locations matching a partial location query.

    Used for the location dropdown; an empty query suggests nothing.
    """
    if not query or not query.strip():
        return []
    needle = query.strip()
    seen: dict[str, None] = {}
    for plot in catalog:
        if plot.location not in seen and matches_location(plot.location, needle):
            seen[plot.location] = None
    return list(seen)
