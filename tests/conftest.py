"""Shared pytest fixtures."""

import os

import pytest
from hypothesis import HealthCheck, settings

from plot_browser.catalog import SEED_PLOTS, PlotCatalog
from plot_browser.config import Settings
from plot_browser.models import PlotRecord, ProjectType

# Hypothesis settings profiles for different environments
settings.register_profile("fast", max_examples=25)
settings.register_profile(
    "ci",
    max_examples=200,
    suppress_health_check=[HealthCheck.too_slow],
)
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "fast"))


@pytest.fixture(autouse=True)
def _isolate_settings_from_dotenv(monkeypatch: pytest.MonkeyPatch) -> None:
    """Prevent a local .env file from leaking into test Settings instances."""
    monkeypatch.setattr(
        Settings,
        "model_config",
        {**Settings.model_config, "env_file": None},
    )


@pytest.fixture
def seed_plots() -> list[PlotRecord]:
    """The five sample plots in catalog order."""
    return list(SEED_PLOTS)


@pytest.fixture
def catalog() -> PlotCatalog:
    return PlotCatalog()


@pytest.fixture
def sample_plot() -> PlotRecord:
    """A valid plot outside the seed catalog."""
    return PlotRecord(
        id="42",
        title="Müritz Uferwiese",
        size=1500,
        price=120000,
        location="Müritz, Mecklenburg-Vorpommern",
        description="Feuchtwiese am Seeufer",
        project_type=ProjectType.MOORE,
        owner="Lena Vogel",
        contact="lena@vogel.com",
    )
