"""Pydantic models for plots and filter results."""

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Currency(StrEnum):
    """Supported display currencies. USD is the base currency."""

    USD = "USD"
    EUR = "EUR"


class ProjectType(StrEnum):
    """Ecological restoration category of a plot."""

    MOORE = "Moore"
    FELDHECKEN = "Feldhecken"
    WAELDER = "Wälder"
    STREUOBSTWIESEN = "Streuobstwiesen"


class PlotRecord(BaseModel):
    """A land plot offered in the catalog."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(min_length=1, description="Unique identifier, stable ordering key")
    title: str
    size: float = Field(gt=0, description="Area in square metres")
    price: float = Field(gt=0, description="Price in USD")
    location: str
    description: str
    project_type: ProjectType = Field(alias="projectType")
    owner: str
    contact: str

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v: object) -> object:
        """Accept numeric ids from hand-written JSON catalogs."""
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v


class ResultItem(BaseModel):
    """A plot paired with its price in the active display currency."""

    model_config = ConfigDict(frozen=True)

    plot: PlotRecord
    display_price: float
    currency: Currency

    def to_dict(self) -> dict[str, Any]:
        """Flatten into a single JSON-ready mapping for rendering."""
        return {
            **self.plot.model_dump(mode="json", by_alias=True),
            "displayPrice": self.display_price,
            "currency": self.currency.value,
        }
