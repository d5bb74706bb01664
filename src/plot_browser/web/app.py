"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from plot_browser.catalog import PlotCatalog, load_catalog
from plot_browser.config import Settings
from plot_browser.logging import configure_logging, get_logger

logger = get_logger(__name__)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add security headers to all responses."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        return response


def create_app(
    settings: Settings | None = None,
    *,
    catalog: PlotCatalog | None = None,
) -> FastAPI:
    """Create the FastAPI application.

    Args:
        settings: Application settings. Loaded from env if not provided.
        catalog: Plot catalog. Loaded from ``settings.catalog_path`` if not provided.

    Raises:
        CatalogError: If the configured catalog file cannot be loaded.
    """
    if settings is None:
        settings = Settings()

    configure_logging(json_output=settings.json_logs, level=logging.INFO)

    if catalog is None:
        catalog = load_catalog(settings.catalog_path)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info(
            "web_server_started",
            plots=len(catalog),
            eur_conversion_rate=settings.eur_conversion_rate,
        )
        yield
        logger.info("web_server_stopped")

    app = FastAPI(title="Plot Browser", lifespan=lifespan)
    app.state.settings = settings
    app.state.catalog = catalog

    # Security headers
    app.add_middleware(SecurityHeadersMiddleware)

    # Register routes
    from plot_browser.web.routes import router

    app.include_router(router)

    return app
