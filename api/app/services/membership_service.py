"""
Membership Service - destination ids held by a list
"""
from typing import Any, Iterable, List, Optional
import logging

from app.models.destination import Destination
from app.models.user import User
from app.repositories.list_repository import ListRepository
from app.services.destination_catalog import DestinationCatalog
from app.services.list_service import check_readable
from app.utils.errors import Duplicate, Forbidden, InvalidRequest, NotFound

logger = logging.getLogger(__name__)


def coerce_destination_id(value: Any) -> int:
    """Accept an int or a digit string; anything else is an invalid id"""
    if value is None or value == "":
        raise InvalidRequest("Destination ID is required")
    if isinstance(value, bool):
        raise InvalidRequest(f"Invalid destination ID: {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    raise InvalidRequest(f"Invalid destination ID: {value!r}")


class MembershipService:
    """
    Adds and removes destination ids on lists with set semantics
    """

    def __init__(self, repository: ListRepository, catalog: DestinationCatalog):
        self.repository = repository
        self.catalog = catalog

    async def add_destination(self, name: str, destination_id: Any) -> List[int]:
        destination_id = coerce_destination_id(destination_id)

        travel_list = await self.repository.get(name)
        if travel_list is None:
            raise NotFound(f'List "{name}" not found.')
        self._require_in_catalog([destination_id])
        if destination_id in travel_list.destinations:
            raise Duplicate("Destination already in list")

        updated = await self.repository.add_destinations(name, [destination_id])
        if updated is None:
            raise NotFound(f'List "{name}" not found.')
        if updated.destinations == travel_list.destinations:
            raise Duplicate("Destination already in list")

        logger.info(f"Destination {destination_id} added to list {name}")
        return updated.destinations

    async def merge_destinations(self, name: str, destination_ids: Any) -> List[int]:
        """
        Add many ids at once, skipping ids already present and repeats
        within the batch
        """
        if not isinstance(destination_ids, list):
            raise InvalidRequest("Destination IDs must be an array")
        batch = list(dict.fromkeys(coerce_destination_id(d) for d in destination_ids))
        self._require_in_catalog(batch)

        updated = await self.repository.add_destinations(name, batch)
        if updated is None:
            raise NotFound(f'List "{name}" not found.')

        logger.info(f"List {name} merged {len(batch)} destination ids")
        return updated.destinations

    async def remove_destination(self, name: str, destination_id: Any, requester: User) -> List[int]:
        """
        Remove an id from a list; removing a non-member leaves the list unchanged
        """
        destination_id = coerce_destination_id(destination_id)

        travel_list = await self.repository.get(name)
        if travel_list is None:
            raise NotFound(f'List "{name}" not found.')
        if not travel_list.is_owned_by(requester.email):
            raise Forbidden("You do not have permission to modify this list.")

        if destination_id not in travel_list.destinations:
            return travel_list.destinations

        updated = await self.repository.remove_destination(name, destination_id)
        if updated is None:
            raise NotFound(f'List "{name}" not found.')
        logger.info(f"Destination {destination_id} removed from list {name}")
        return updated.destinations

    async def destination_details(self, name: str, requester: Optional[User] = None) -> List[Destination]:
        """Full records for the list's members; ids unknown to the catalog are dropped"""
        travel_list = await self.repository.get(name)
        if travel_list is None:
            raise NotFound(f'List "{name}" not found.')
        check_readable(travel_list, requester)
        details = []
        for destination_id in travel_list.destinations:
            destination = self.catalog.find(destination_id)
            if destination is not None:
                details.append(destination)
        return details

    def _require_in_catalog(self, destination_ids: Iterable[int]):
        for destination_id in destination_ids:
            if not self.catalog.contains(destination_id):
                raise NotFound(f"Destination {destination_id} not found")
