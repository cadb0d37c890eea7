"""
Destination Catalog - Immutable in-memory snapshot of the destination dataset
"""
import csv
import logging
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

from fastapi import Request

from app.models.destination import Destination
from app.utils.errors import CatalogNotLoaded, NotFound

logger = logging.getLogger(__name__)


class DestinationCatalog:
    """
    Read-only collection of destinations with stable 1-based ids.

    Built once at start-up and shared by every request; nothing mutates it
    after construction.
    """

    def __init__(self, destinations: Iterable[Destination]):
        self._destinations: Tuple[Destination, ...] = tuple(destinations)

    @classmethod
    def from_rows(cls, rows: Iterable[dict]) -> "DestinationCatalog":
        """Assign ids in row order, trimming header names and skipping blank rows"""
        destinations = []
        for row in rows:
            trimmed = {
                key.strip(): value
                for key, value in row.items()
                if key is not None
            }
            if not any((value or "").strip() for value in trimmed.values()):
                continue
            destinations.append(Destination.from_csv_row(len(destinations) + 1, trimmed))
        return cls(destinations)

    @classmethod
    def load(cls, path: Path) -> "DestinationCatalog":
        """Load the catalog from a CSV file"""
        logger.info(f"Loading destinations from {path}")
        with open(path, newline="", encoding="utf-8-sig") as handle:
            catalog = cls.from_rows(csv.DictReader(handle))
        logger.info(f"Loaded {len(catalog)} destinations")
        return catalog

    def __len__(self) -> int:
        return len(self._destinations)

    def __iter__(self):
        return iter(self._destinations)

    def get(self, destination_id: int) -> Destination:
        if destination_id < 1 or destination_id > len(self._destinations):
            raise NotFound(f"Destination {destination_id} not found")
        return self._destinations[destination_id - 1]

    def find(self, destination_id: int) -> Optional[Destination]:
        """Like get(), but returns None for unknown ids"""
        try:
            return self.get(destination_id)
        except NotFound:
            return None

    def contains(self, destination_id: int) -> bool:
        return self.find(destination_id) is not None

    def countries(self) -> List[str]:
        """Distinct non-blank countries in catalog order"""
        seen = {}
        for destination in self._destinations:
            if destination.country:
                seen.setdefault(destination.country, None)
        return list(seen)

    def coordinates(self, destination_id: int) -> Tuple[float, float]:
        destination = self.get(destination_id)
        if not destination.has_coordinates:
            raise NotFound(f"Coordinates not available for destination {destination_id}")
        return destination.latitude, destination.longitude


def peek_catalog(request: Request) -> Optional[DestinationCatalog]:
    """The loaded catalog, or None before start-up has loaded it"""
    return getattr(request.app.state, "catalog", None)


def get_catalog(request: Request) -> DestinationCatalog:
    """
    Dependency that provides the destination catalog
    Usage: catalog: DestinationCatalog = Depends(get_catalog)
    """
    catalog = peek_catalog(request)
    if catalog is None or len(catalog) == 0:
        raise CatalogNotLoaded("Destination data is not yet loaded")
    return catalog
