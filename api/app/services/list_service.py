"""
List Service - creation, editing, renaming and deletion of travel lists
"""
from typing import List, Optional
import logging

from app.models.travel_list import TravelList, utcnow
from app.models.user import User
from app.repositories.list_repository import ListRepository
from app.utils.errors import Forbidden, InvalidName, NotFound

logger = logging.getLogger(__name__)

MAX_NAME_LENGTH = 50


def validate_list_name(name) -> str:
    """List names are the document key: non-empty, at most 50 chars, no '/'"""
    if not name or not isinstance(name, str) or len(name) > MAX_NAME_LENGTH or "/" in name:
        raise InvalidName(
            'Invalid list name. Must be a string, up to 50 characters long, and cannot contain "/".'
        )
    return name


def check_readable(travel_list: TravelList, requester: Optional[User]) -> TravelList:
    """Private lists are only readable by their creator"""
    if not travel_list.is_visible and (
        requester is None or not travel_list.is_owned_by(requester.email)
    ):
        raise Forbidden(f'List "{travel_list.name}" is private.')
    return travel_list


class ListService:
    """
    Service for list CRUD with ownership checks
    """

    def __init__(self, repository: ListRepository):
        self.repository = repository

    async def create_list(
        self,
        name: str,
        requester: User,
        description: Optional[str] = None,
        is_visible: bool = False,
    ) -> TravelList:
        """
        Create an empty list owned by the requester
        """
        validate_list_name(name)
        now = utcnow()
        travel_list = TravelList(
            name=name,
            description=description or "",
            creator_email=requester.email,
            creator_nickname=requester.display_name,
            is_visible=bool(is_visible),
            creation_date=now,
            updated_date=now,
        )
        await self.repository.insert(travel_list)
        logger.info(f"List created: {name} by {requester.email}")
        return travel_list

    async def get_list(self, name: str, requester: Optional[User] = None) -> TravelList:
        """
        Get a list; private lists are only readable by their creator
        """
        return check_readable(await self._get_existing(name), requester)

    async def list_lists(self, requester: Optional[User] = None, limit: Optional[int] = None) -> List[TravelList]:
        """
        Public lists plus the requester's own private ones, most recently updated first
        """
        lists = await self.repository.list_all()
        visible = [
            l for l in lists
            if l.is_visible or (requester is not None and l.is_owned_by(requester.email))
        ]
        visible.sort(key=lambda l: l.updated_date or l.creation_date, reverse=True)
        if limit is not None:
            visible = visible[:limit]
        logger.debug(f"Retrieved {len(visible)} of {len(lists)} lists")
        return visible

    async def update_list(
        self,
        name: str,
        requester: User,
        new_name: Optional[str] = None,
        description: Optional[str] = None,
        is_visible: Optional[bool] = None,
    ) -> TravelList:
        """
        Partially update description/visibility, renaming when `new_name`
        differs from the current name. The modification date is refreshed
        on every call.
        """
        travel_list = await self._get_owned(name, requester, action="edit")

        fields = {"updated_date": utcnow()}
        if description is not None:
            fields["description"] = description
        if is_visible is not None:
            fields["is_visible"] = bool(is_visible)

        if new_name is not None and new_name != name:
            validate_list_name(new_name)
            return await self.repository.rename(travel_list, new_name, fields)

        updated = await self.repository.update_fields(name, fields)
        if updated is None:
            raise NotFound(f'List "{name}" not found.')
        logger.info(f"List updated: {name}")
        return updated

    async def set_visibility(self, name: str, requester: User, is_visible: bool = True) -> TravelList:
        await self._get_owned(name, requester, action="edit")
        updated = await self.repository.update_fields(
            name, {"is_visible": bool(is_visible), "updated_date": utcnow()}
        )
        if updated is None:
            raise NotFound(f'List "{name}" not found.')
        return updated

    async def delete_list(self, name: str, requester: User) -> None:
        await self._get_owned(name, requester, action="delete")
        if not await self.repository.delete(name):
            raise NotFound(f'List "{name}" not found.')
        logger.info(f"List deleted: {name} by {requester.email}")

    async def _get_existing(self, name: str) -> TravelList:
        travel_list = await self.repository.get(name)
        if travel_list is None:
            raise NotFound(f'List "{name}" not found.')
        return travel_list

    async def _get_owned(self, name: str, requester: User, action: str) -> TravelList:
        travel_list = await self._get_existing(name)
        if not travel_list.is_owned_by(requester.email):
            raise Forbidden(f"You do not have permission to {action} this list.")
        return travel_list
