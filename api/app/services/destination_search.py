"""
Destination Search - Fuzzy filtering of the catalog by name, region and country
"""
import logging
from typing import Any, List, Optional

from app.models.destination import Destination
from app.services.destination_catalog import DestinationCatalog
from app.services.text_matching import is_match
from app.utils.errors import CatalogNotLoaded, InvalidRequest, NotFound

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 5


def parse_limit(value: Any, default: int = DEFAULT_LIMIT) -> int:
    """Accept a positive integer (or its string form); absent means default"""
    if value is None or value == "":
        return default
    if isinstance(value, bool):
        raise InvalidRequest("Invalid value for n. Must be a positive number.")
    try:
        limit = int(str(value).strip())
    except ValueError:
        raise InvalidRequest("Invalid value for n. Must be a positive number.")
    if limit < 1:
        raise InvalidRequest("Invalid value for n. Must be a positive number.")
    return limit


def search_destinations(
    catalog: Optional[DestinationCatalog],
    name: Optional[str] = None,
    region: Optional[str] = None,
    country: Optional[str] = None,
    limit: Any = None,
) -> List[Destination]:
    """
    Return up to `limit` destinations matching every given filter, in
    catalog order. Empty filters match everything, but at least one filter
    must be set.
    """
    if not name and not region and not country:
        raise InvalidRequest(
            "At least one search criterion (name, region, or country) must be provided"
        )

    limit = parse_limit(limit)

    if catalog is None or len(catalog) == 0:
        raise CatalogNotLoaded("Destination data is not yet loaded")

    logger.debug(
        f"Search criteria: name={name or '(empty)'} region={region or '(empty)'} "
        f"country={country or '(empty)'} limit={limit}"
    )

    matches = []
    for destination in catalog:
        if (
            is_match(name, destination.name)
            and is_match(region, destination.region)
            and is_match(country, destination.country)
        ):
            matches.append(destination)
            if len(matches) == limit:
                break

    if not matches:
        raise NotFound(
            "No matching destinations found",
            context={
                "name": name or None,
                "region": region or None,
                "country": country or None,
                "limit": limit,
            },
        )

    return matches
