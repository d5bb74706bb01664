"""Command-line entry point: print filtered plots or serve the dashboard."""

import argparse
import logging
import sys

from plot_browser.catalog import CatalogError, load_catalog
from plot_browser.config import Settings
from plot_browser.currency import convert, format_price
from plot_browser.logging import configure_logging, get_logger
from plot_browser.models import PlotRecord, ResultItem
from plot_browser.pipeline import search
from plot_browser.query import (
    PARAM_CURRENCY,
    PARAM_LOCATION,
    PARAM_MAX_PRICE,
    PARAM_MIN_PRICE,
    normalize_query,
)

logger = get_logger(__name__)


def print_results(results: list[ResultItem]) -> None:
    """Print result items as a plain-text listing."""
    print(f"\n{'=' * 60}")
    print(f"Found {len(results)} plots")
    print(f"{'=' * 60}\n")

    for item in results:
        _print_plot(item)


def _print_plot(item: ResultItem) -> None:
    plot = item.plot
    print(f"[{plot.id}] {plot.title}")
    print(f"  Price: {format_price(item.display_price, item.currency)} | Size: {plot.size:,.0f} m²")
    print(f"  Location: {plot.location}")
    print(f"  Project type: {plot.project_type.value}")
    print()


def _print_detail(plot: PlotRecord, item: ResultItem) -> None:
    _print_plot(item)
    print(f"  Owner: {plot.owner} <{plot.contact}>")
    print(f"  Description: {plot.description}")


def main(argv: list[str] | None = None) -> None:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Plot Browser - land plots for ecological restoration projects"
    )
    parser.add_argument("--min-price", default=None, help="Minimum price in the display currency")
    parser.add_argument("--max-price", default=None, help="Maximum price in the display currency")
    parser.add_argument("--location", default=None, help="Location substring (accents optional)")
    parser.add_argument("--currency", default=None, help="Display currency: USD (default) or EUR")
    parser.add_argument("--plot-id", default=None, help="Show a single plot by id")
    parser.add_argument(
        "--serve",
        action="store_true",
        help="Start the web dashboard",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug-level logging for troubleshooting",
    )
    args = parser.parse_args(argv)

    try:
        settings = Settings()
    except Exception as e:
        print(f"Error: Failed to load settings. {e}")
        sys.exit(1)

    configure_logging(
        json_output=settings.json_logs,
        level=logging.DEBUG if args.debug else logging.INFO,
    )

    try:
        catalog = load_catalog(settings.catalog_path)
    except CatalogError as e:
        logger.error("failed_to_load_catalog", error=str(e))
        print(f"Error: {e}")
        sys.exit(1)

    if args.serve:
        import uvicorn

        from plot_browser.web.app import create_app

        app = create_app(settings, catalog=catalog)
        uvicorn.run(app, host=settings.web_host, port=settings.web_port, log_level="info")
        return

    params = {
        PARAM_MIN_PRICE: args.min_price,
        PARAM_MAX_PRICE: args.max_price,
        PARAM_LOCATION: args.location,
        PARAM_CURRENCY: args.currency,
    }

    if args.plot_id is not None:
        plot = catalog.find(args.plot_id)
        if plot is None:
            print(f"Plot {args.plot_id!r} not found")
            sys.exit(1)
        currency = normalize_query(params).currency
        item = ResultItem(
            plot=plot,
            display_price=convert(plot.price, currency, rate=settings.eur_conversion_rate),
            currency=currency,
        )
        _print_detail(plot, item)
        return

    print_results(search(catalog.all(), params, rate=settings.eur_conversion_rate))


if __name__ == "__main__":
    main()
