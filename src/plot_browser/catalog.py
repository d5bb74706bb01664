"""Static plot catalog and optional JSON-file catalog loading."""

import json
from collections.abc import Iterable, Sequence
from pathlib import Path
from typing import Final

from pydantic import TypeAdapter, ValidationError

from plot_browser.logging import get_logger
from plot_browser.models import PlotRecord, ProjectType

logger = get_logger(__name__)


class CatalogError(RuntimeError):
    """Raised when a catalog file cannot be read or contains invalid records."""


SEED_PLOTS: Final[tuple[PlotRecord, ...]] = (
    PlotRecord(
        id="1",
        title="Schwarzwald Naturgrundstück",
        size=2500,
        price=175000,
        location="Schwarzwald, Baden-Württemberg",
        description="Waldgrundstück mit hoher Artenvielfalt und altem Baumbestand",
        project_type=ProjectType.WAELDER,
        owner="Max Mustermann",
        contact="max@mustermann.com",
    ),
    PlotRecord(
        id="2",
        title="Lüneburger Heide Biotop",
        size=3000,
        price=145000,
        location="Lüneburger Heide, Niedersachsen",
        description="Heidefläche mit seltenen Pflanzenarten und Insektenpopulationen",
        project_type=ProjectType.FELDHECKEN,
        owner="Sabine Schmidt",
        contact="sabine@schmidt.com",
    ),
    PlotRecord(
        id="3",
        title="Spreewald Feuchtgebiet",
        size=1800,
        price=160000,
        location="Spreewald, Brandenburg",
        description="Naturbelassenes Feuchtgebiet mit reichem Vogelvorkommen",
        project_type=ProjectType.MOORE,
        owner="Jürgen Müller",
        contact="juergen@mueller.com",
    ),
    PlotRecord(
        id="4",
        title="Bayerischer Streuobstwiese",
        size=2200,
        price=190000,
        location="Allgäu, Bayern",
        description="Traditionelle Streuobstwiese mit alten Obstsorten und Wildblumen",
        project_type=ProjectType.STREUOBSTWIESEN,
        owner="Anna Weber",
        contact="anna@weber.com",
    ),
    PlotRecord(
        id="5",
        title="Eifel Naturschutzfläche",
        size=2800,
        price=168000,
        location="Eifel, Rheinland-Pfalz",
        description="Artenreiches Grünland mit Quellgebieten und Schmetterlingshabitaten",
        project_type=ProjectType.FELDHECKEN,
        owner="Oliver Klein",
        contact="oliver@klein.com",
    ),
)

_PLOT_LIST_ADAPTER: Final = TypeAdapter(list[PlotRecord])


class PlotCatalog:
    """Read-only, ordered collection of plots.

    This is the one seam where a real data source would replace the seed
    list; everything downstream only sees ``all()``.
    """

    def __init__(self, plots: Iterable[PlotRecord] = SEED_PLOTS) -> None:
        self._plots: tuple[PlotRecord, ...] = tuple(plots)
        ids = [p.id for p in self._plots]
        if len(set(ids)) != len(ids):
            raise CatalogError("Plot ids must be unique")

    def __len__(self) -> int:
        return len(self._plots)

    def all(self) -> list[PlotRecord]:
        """Return every plot in catalog order."""
        return list(self._plots)

    def locations(self) -> list[str]:
        """Distinct plot locations in catalog order."""
        return list(dict.fromkeys(p.location for p in self._plots))

    def find(self, plot_id: str) -> PlotRecord | None:
        return find_by_id(self._plots, plot_id)


def find_by_id(catalog: Sequence[PlotRecord], plot_id: str) -> PlotRecord | None:
    """Look up a plot by id.

    Returns:
        The matching plot, or None when no plot has that id.
    """
    for plot in catalog:
        if plot.id == plot_id:
            return plot
    return None


def load_catalog(path: str | Path | None = None) -> PlotCatalog:
    """Build a catalog from a JSON file, or from the seed list when no path is given.

    The file must hold a JSON array of objects using the plot field names
    (``projectType`` for the project type).

    Raises:
        CatalogError: If the file is missing, not JSON, or has invalid records.
    """
    if not path:
        logger.debug("catalog_loaded", source="seed", plots=len(SEED_PLOTS))
        return PlotCatalog()

    catalog_path = Path(path)
    try:
        raw = json.loads(catalog_path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise CatalogError(f"Failed to load {catalog_path}: {e}") from e

    try:
        plots = _PLOT_LIST_ADAPTER.validate_python(raw)
    except ValidationError as e:
        raise CatalogError(f"Invalid plot records in {catalog_path}: {e}") from e

    catalog = PlotCatalog(plots)
    logger.info("catalog_loaded", source=str(catalog_path), plots=len(catalog))
    return catalog
