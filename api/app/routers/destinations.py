"""
Destination Search & Information Endpoints
"""
from fastapi import APIRouter, Depends, Query
from typing import List, Optional
import logging

from app.config import settings
from app.schemas.destination import CoordinatesResponse, DestinationResponse
from app.services.destination_catalog import DestinationCatalog, get_catalog, peek_catalog
from app.services.destination_search import search_destinations
from app.utils.errors import InvalidRequest

router = APIRouter()
logger = logging.getLogger(__name__)


def _parse_destination_id(raw_id: str, catalog: DestinationCatalog) -> int:
    """Ids run from 1 to the catalog size; anything else is a bad request"""
    try:
        destination_id = int(raw_id)
    except ValueError:
        raise InvalidRequest("Invalid destination ID")
    if destination_id < 1 or destination_id > len(catalog):
        raise InvalidRequest("Invalid destination ID")
    return destination_id


@router.get("/countries", response_model=List[str])
async def list_countries(catalog: DestinationCatalog = Depends(get_catalog)):
    """
    Distinct countries present in the catalog
    """
    return catalog.countries()


@router.get("/search", response_model=List[DestinationResponse])
async def search(
    name: Optional[str] = Query(None, description="Destination name (typo tolerant)"),
    region: Optional[str] = Query(None, description="Region (typo tolerant)"),
    country: Optional[str] = Query(None, description="Country (typo tolerant)"),
    n: Optional[str] = Query(None, description="Maximum number of results (default 5)"),
    catalog: Optional[DestinationCatalog] = Depends(peek_catalog),
):
    """
    Search destinations by name, region and/or country.
    Results keep catalog order and are cut off after `n` matches.
    """
    limit = n if n else settings.SEARCH_DEFAULT_LIMIT
    matches = search_destinations(catalog, name=name, region=region, country=country, limit=limit)
    logger.info(f"Search returned {len(matches)} destinations")
    return [DestinationResponse.model_validate(d) for d in matches]


@router.get("/{destination_id}", response_model=DestinationResponse)
async def get_destination(
    destination_id: str,
    catalog: DestinationCatalog = Depends(get_catalog),
):
    """
    Get one destination by id
    """
    destination = catalog.get(_parse_destination_id(destination_id, catalog))
    return DestinationResponse.model_validate(destination)


@router.get("/{destination_id}/coordinates", response_model=CoordinatesResponse)
async def get_destination_coordinates(
    destination_id: str,
    catalog: DestinationCatalog = Depends(get_catalog),
):
    """
    Get latitude and longitude for a destination
    """
    latitude, longitude = catalog.coordinates(_parse_destination_id(destination_id, catalog))
    return CoordinatesResponse(latitude=latitude, longitude=longitude)
