"""
Administration Endpoints - user and review moderation
"""
from fastapi import APIRouter, Depends
from typing import List
import logging

from app.dependencies import get_admin_service, get_review_service
from app.routers.auth import get_current_admin
from app.models.user import User
from app.schemas.travel_list import ModerationReviewResponse, ReviewResponse, VisibilityUpdate
from app.schemas.user import AdminUpdate, StatusUpdate, UserResponse
from app.services.review_service import ReviewService
from app.services.user_service import AdminService

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/users", response_model=List[UserResponse])
async def list_users(
    admin: User = Depends(get_current_admin),
    admin_service: AdminService = Depends(get_admin_service),
):
    """
    All accounts with their admin and activation flags
    """
    return await admin_service.list_users()


@router.put("/users/{email}/status", response_model=UserResponse)
async def set_user_status(
    email: str,
    payload: StatusUpdate,
    admin: User = Depends(get_current_admin),
    admin_service: AdminService = Depends(get_admin_service),
):
    """
    Deactivate or reactivate an account
    """
    return await admin_service.set_deactivated(email, payload.is_deactivated)


@router.put("/users/{email}/admin", response_model=UserResponse)
async def set_user_admin(
    email: str,
    payload: AdminUpdate,
    admin: User = Depends(get_current_admin),
    admin_service: AdminService = Depends(get_admin_service),
):
    """
    Grant or revoke admin status
    """
    return await admin_service.set_admin(admin, email, payload.is_admin)


@router.get("/reviews", response_model=List[ModerationReviewResponse])
async def list_all_reviews(
    admin: User = Depends(get_current_admin),
    reviews: ReviewService = Depends(get_review_service),
):
    """
    Every review of every list, hidden ones included
    """
    entries = await reviews.all_reviews()
    return [
        ModerationReviewResponse(
            id=entry["id"],
            list_name=entry["list_name"],
            **ReviewResponse.model_validate(entry["review"]).model_dump(),
        )
        for entry in entries
    ]


@router.put("/reviews/{name}/{index}/visibility", response_model=ReviewResponse)
async def set_review_visibility(
    name: str,
    index: int,
    payload: VisibilityUpdate,
    admin: User = Depends(get_current_admin),
    reviews: ReviewService = Depends(get_review_service),
):
    """
    Hide or show a review without deleting it
    """
    review = await reviews.set_visibility(name, index, payload.is_visible)
    return ReviewResponse.model_validate(review)
