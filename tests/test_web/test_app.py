"""Tests for the FastAPI application factory."""

import json
from pathlib import Path
from unittest.mock import patch

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from plot_browser.catalog import CatalogError, PlotCatalog
from plot_browser.config import Settings
from plot_browser.models import PlotRecord
from plot_browser.web.app import SecurityHeadersMiddleware, create_app


@pytest.fixture
def settings() -> Settings:
    return Settings()


class TestCreateApp:
    def test_returns_fastapi_instance(self, settings: Settings) -> None:
        app = create_app(settings)
        assert isinstance(app, FastAPI)
        assert app.title == "Plot Browser"

    def test_has_routes(self, settings: Settings) -> None:
        app = create_app(settings)
        with TestClient(app) as client:
            for path in ("/", "/health", "/plots/1", "/locations", "/api/plots", "/api/locations"):
                assert client.get(path).status_code == 200, path

    def test_default_settings_if_none(self) -> None:
        with patch("plot_browser.web.app.Settings") as mock_settings:
            mock_settings.return_value = Settings()
            app = create_app(None)
            assert isinstance(app, FastAPI)
            assert app.state.settings is mock_settings.return_value

    def test_seed_catalog_by_default(self, settings: Settings) -> None:
        app = create_app(settings)
        assert len(app.state.catalog) == 5

    def test_explicit_catalog(self, settings: Settings, sample_plot: PlotRecord) -> None:
        app = create_app(settings, catalog=PlotCatalog([sample_plot]))
        with TestClient(app) as client:
            assert client.get("/health").json() == {"status": "ok", "plots": 1}

    def test_catalog_path_from_settings(self, tmp_path: Path, sample_plot: PlotRecord) -> None:
        path = tmp_path / "plots.json"
        path.write_text(json.dumps([sample_plot.model_dump(by_alias=True)]), encoding="utf-8")
        app = create_app(Settings(catalog_path=str(path)))
        with TestClient(app) as client:
            data = client.get("/api/plots").json()
        assert [p["id"] for p in data["plots"]] == ["42"]

    def test_bad_catalog_path_raises(self, tmp_path: Path) -> None:
        with pytest.raises(CatalogError):
            create_app(Settings(catalog_path=str(tmp_path / "missing.json")))


class TestSecurityHeaders:
    def test_headers_present(self) -> None:
        test_app = FastAPI()
        test_app.add_middleware(SecurityHeadersMiddleware)

        @test_app.get("/ping")
        async def ping() -> dict[str, str]:
            return {"ok": "yes"}

        resp = TestClient(test_app).get("/ping")
        assert resp.headers["X-Content-Type-Options"] == "nosniff"
        assert resp.headers["X-Frame-Options"] == "DENY"
        assert resp.headers["Referrer-Policy"] == "strict-origin-when-cross-origin"

    def test_app_responses_carry_headers(self, settings: Settings) -> None:
        with TestClient(create_app(settings)) as client:
            resp = client.get("/health")
        assert resp.headers["X-Frame-Options"] == "DENY"
