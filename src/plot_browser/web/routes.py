"""Web dashboard and JSON API routes."""

from pathlib import Path
from typing import Any
from urllib.parse import urlencode

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse, JSONResponse
from fastapi.templating import Jinja2Templates

from plot_browser.catalog import PlotCatalog
from plot_browser.currency import convert, format_price, toggle_currency
from plot_browser.logging import get_logger
from plot_browser.models import PlotRecord, ResultItem
from plot_browser.pipeline import evaluate, location_suggestions
from plot_browser.query import PARAM_CURRENCY, PARAM_LOCATION, FilterSpec, normalize_query

logger = get_logger(__name__)

router = APIRouter()
templates = Jinja2Templates(directory=Path(__file__).parent / "templates")
templates.env.filters["price"] = format_price


def _get_catalog(request: Request) -> PlotCatalog:
    return request.app.state.catalog  # type: ignore[no-any-return]


def _get_rate(request: Request) -> float:
    return request.app.state.settings.eur_conversion_rate  # type: ignore[no-any-return]


def _parse_request(request: Request) -> FilterSpec:
    # Snapshot of the query string; the core never sees the request itself
    return normalize_query(dict(request.query_params))


def _priced(request: Request, plot: PlotRecord, spec: FilterSpec) -> ResultItem:
    return ResultItem(
        plot=plot,
        display_price=convert(plot.price, spec.currency, rate=_get_rate(request)),
        currency=spec.currency,
    )


def _toggle_url(path: str, spec: FilterSpec) -> str:
    """Link to the same view in the other currency, keeping every other filter."""
    params = {**spec.to_params(), PARAM_CURRENCY: toggle_currency(spec.currency).value}
    return f"{path}?{urlencode(params)}"


def _chip_remove_url(spec: FilterSpec, key: str) -> str:
    params = spec.to_params()
    params.pop(key, None)
    return f"/?{urlencode(params)}"


@router.get("/health")
async def health_check(request: Request) -> JSONResponse:
    """Health check endpoint."""
    return JSONResponse({"status": "ok", "plots": len(_get_catalog(request))})


@router.get("/", response_class=HTMLResponse)
async def dashboard(request: Request) -> HTMLResponse:
    """Listing page with filter form, currency toggle and plot cards."""
    spec = _parse_request(request)
    catalog = _get_catalog(request)

    try:
        results = evaluate(catalog.all(), spec, rate=_get_rate(request))
    except Exception:
        logger.error("dashboard_query_failed", exc_info=True)
        return templates.TemplateResponse(
            request,
            "error.html",
            {"message": "Failed to load plots. Please try again."},
            status_code=500,
        )

    chips = [
        {**chip, "remove_url": _chip_remove_url(spec, chip["key"])}
        for chip in spec.active_filter_chips()
    ]
    context: dict[str, Any] = {
        "results": results,
        "total": len(results),
        "spec": spec,
        "chips": chips,
        "currency": spec.currency.value,
        "toggle_currency": toggle_currency(spec.currency).value,
        "toggle_url": _toggle_url("/", spec),
        "detail_query": urlencode({PARAM_CURRENCY: spec.currency.value}),
        "locations": catalog.locations(),
    }

    # HTMX partial rendering
    if request.headers.get("HX-Request"):
        return templates.TemplateResponse(request, "_results.html", context)

    return templates.TemplateResponse(request, "dashboard.html", context)


@router.get("/plots/{plot_id}", response_class=HTMLResponse)
async def plot_detail(request: Request, plot_id: str) -> HTMLResponse:
    """Plot detail page, or the modal fragment for HTMX requests."""
    spec = _parse_request(request)
    plot = _get_catalog(request).find(plot_id)

    if plot is None:
        logger.info("plot_not_found", plot_id=plot_id)
        return templates.TemplateResponse(
            request,
            "error.html",
            {"message": "Plot not found."},
            status_code=404,
        )

    item = _priced(request, plot, spec)
    context: dict[str, Any] = {
        "item": item,
        "currency": spec.currency.value,
        "toggle_currency": toggle_currency(spec.currency).value,
        "toggle_url": _toggle_url(f"/plots/{plot_id}", spec),
    }

    if request.headers.get("HX-Request"):
        return templates.TemplateResponse(request, "_plot_modal.html", context)

    return templates.TemplateResponse(request, "plot_detail.html", context)


@router.get("/api/plots")
async def api_plots(request: Request) -> JSONResponse:
    """Filtered plots as JSON."""
    spec = _parse_request(request)
    results = evaluate(_get_catalog(request).all(), spec, rate=_get_rate(request))
    return JSONResponse(
        {
            "currency": spec.currency.value,
            "count": len(results),
            "filters": spec.active_filter_chips(),
            "plots": [item.to_dict() for item in results],
        }
    )


@router.get("/api/plots/{plot_id}")
async def api_plot_detail(request: Request, plot_id: str) -> JSONResponse:
    """A single plot as JSON, priced in the requested currency."""
    spec = _parse_request(request)
    plot = _get_catalog(request).find(plot_id)
    if plot is None:
        logger.info("plot_not_found", plot_id=plot_id)
        return JSONResponse({"error": "not found"}, status_code=404)

    item = _priced(request, plot, spec)
    return JSONResponse(item.to_dict())


@router.get("/locations", response_class=HTMLResponse)
async def location_options(request: Request) -> HTMLResponse:
    """Datalist options for the location input, narrowed as the user types."""
    catalog = _get_catalog(request)
    query = request.query_params.get(PARAM_LOCATION)
    # A blank input offers every location again
    if query and query.strip():
        locations = location_suggestions(catalog.all(), query)
    else:
        locations = catalog.locations()
    return templates.TemplateResponse(
        request, "_location_options.html", {"locations": locations}
    )


@router.get("/api/locations")
async def api_locations(request: Request) -> JSONResponse:
    """Location suggestions for the location dropdown."""
    query = request.query_params.get(PARAM_LOCATION)
    return JSONResponse(
        {"locations": location_suggestions(_get_catalog(request).all(), query)}
    )
