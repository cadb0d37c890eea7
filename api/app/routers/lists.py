"""
Travel List, Membership & Review Endpoints
"""
from fastapi import APIRouter, Depends, Query, status
from typing import List, Optional
import logging

from app.dependencies import get_list_service, get_membership_service, get_review_service
from app.routers.auth import get_current_user, get_current_user_optional
from app.models.user import User
from app.schemas.destination import DestinationResponse
from app.schemas.travel_list import (
    DestinationAdd,
    DestinationMerge,
    ListCreate,
    ListResponse,
    ListUpdate,
    MembershipResponse,
    ReviewCreate,
    ReviewCreatedResponse,
    ReviewResponse,
    VisibilityUpdate,
)
from app.services.list_service import ListService
from app.services.membership_service import MembershipService
from app.services.review_service import ReviewService

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("", response_model=List[ListResponse])
async def list_lists(
    limit: Optional[int] = Query(None, ge=1, description="Maximum number of lists"),
    current_user: Optional[User] = Depends(get_current_user_optional),
    lists: ListService = Depends(get_list_service),
):
    """
    Public lists, plus the caller's private lists, most recently updated first
    """
    result = await lists.list_lists(requester=current_user, limit=limit)
    return [ListResponse.from_list(l) for l in result]


@router.post("", response_model=ListResponse, status_code=status.HTTP_201_CREATED)
async def create_list(
    payload: ListCreate,
    current_user: User = Depends(get_current_user),
    lists: ListService = Depends(get_list_service),
):
    """
    Create a new, empty list owned by the caller
    """
    travel_list = await lists.create_list(
        payload.name,
        requester=current_user,
        description=payload.description,
        is_visible=payload.is_visible,
    )
    return ListResponse.from_list(travel_list)


@router.get("/{name}", response_model=ListResponse)
async def get_list(
    name: str,
    current_user: Optional[User] = Depends(get_current_user_optional),
    lists: ListService = Depends(get_list_service),
):
    """
    Get a list by name
    """
    travel_list = await lists.get_list(name, requester=current_user)
    return ListResponse.from_list(travel_list)


@router.put("/{name}", response_model=ListResponse)
async def update_list(
    name: str,
    payload: ListUpdate,
    current_user: User = Depends(get_current_user),
    lists: ListService = Depends(get_list_service),
):
    """
    Update description/visibility; a different `name` renames the list
    """
    travel_list = await lists.update_list(
        name,
        requester=current_user,
        new_name=payload.name,
        description=payload.description,
        is_visible=payload.is_visible,
    )
    return ListResponse.from_list(travel_list)


@router.delete("/{name}")
async def delete_list(
    name: str,
    current_user: User = Depends(get_current_user),
    lists: ListService = Depends(get_list_service),
):
    """
    Delete a list (creator only)
    """
    await lists.delete_list(name, requester=current_user)
    return {"message": f'List "{name}" deleted successfully'}


@router.put("/{name}/visibility", response_model=ListResponse)
async def set_list_visibility(
    name: str,
    payload: VisibilityUpdate = VisibilityUpdate(),
    current_user: User = Depends(get_current_user),
    lists: ListService = Depends(get_list_service),
):
    """
    Make a list public (default) or private
    """
    travel_list = await lists.set_visibility(name, requester=current_user, is_visible=payload.is_visible)
    return ListResponse.from_list(travel_list)


@router.get("/{name}/details", response_model=List[DestinationResponse])
async def get_list_details(
    name: str,
    current_user: Optional[User] = Depends(get_current_user_optional),
    membership: MembershipService = Depends(get_membership_service),
):
    """
    Full destination records for every member of a list
    """
    details = await membership.destination_details(name, requester=current_user)
    return [DestinationResponse.model_validate(d) for d in details]


@router.put("/{name}/destinations", response_model=MembershipResponse)
async def merge_destinations(
    name: str,
    payload: DestinationMerge,
    current_user: User = Depends(get_current_user),
    membership: MembershipService = Depends(get_membership_service),
):
    """
    Add several destinations at once, ignoring ones already in the list
    """
    destinations = await membership.merge_destinations(name, payload.destination_ids)
    return MembershipResponse(name=name, destinations=destinations)


@router.post("/{name}/destinations", response_model=MembershipResponse)
async def add_destination(
    name: str,
    payload: DestinationAdd,
    current_user: User = Depends(get_current_user),
    membership: MembershipService = Depends(get_membership_service),
):
    """
    Add one destination to a list
    """
    destinations = await membership.add_destination(name, payload.destination_id)
    return MembershipResponse(name=name, destinations=destinations)


@router.delete("/{name}/destinations/{destination_id}", response_model=MembershipResponse)
async def remove_destination(
    name: str,
    destination_id: str,
    current_user: User = Depends(get_current_user),
    membership: MembershipService = Depends(get_membership_service),
):
    """
    Remove a destination from a list (creator only)
    """
    destinations = await membership.remove_destination(name, destination_id, requester=current_user)
    return MembershipResponse(name=name, destinations=destinations)


@router.get("/{name}/reviews", response_model=List[ReviewResponse])
async def list_reviews(
    name: str,
    current_user: Optional[User] = Depends(get_current_user_optional),
    reviews: ReviewService = Depends(get_review_service),
):
    """
    Visible reviews of a list
    """
    visible = await reviews.list_reviews(name, requester=current_user)
    return [ReviewResponse.model_validate(r) for r in visible]


@router.post("/{name}/reviews", response_model=ReviewCreatedResponse, status_code=status.HTTP_201_CREATED)
async def add_review(
    name: str,
    payload: ReviewCreate,
    current_user: User = Depends(get_current_user),
    reviews: ReviewService = Depends(get_review_service),
):
    """
    Rate and comment on a list
    """
    review, average = await reviews.add_review(name, payload.rating, payload.comment, author=current_user)
    return ReviewCreatedResponse(review=ReviewResponse.model_validate(review), average_rating=average)
