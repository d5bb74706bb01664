"""Application configuration using pydantic-settings."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from plot_browser.currency import CONVERSION_RATE


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="PLOT_BROWSER_",
        extra="ignore",
    )

    # Currency
    eur_conversion_rate: float = Field(
        default=CONVERSION_RATE,
        gt=0,
        description="Fixed USD to EUR rate applied to display prices",
    )

    # Catalog source
    catalog_path: str = Field(
        default="",
        description="JSON file with plot records. Empty uses the built-in seed catalog",
    )

    # Web dashboard
    web_port: int = Field(default=8000, description="Web server port")
    web_host: str = Field(default="0.0.0.0", description="Web server host")

    # Logging
    json_logs: bool = Field(
        default=False,
        description="Emit JSON log lines instead of coloured console output",
    )
