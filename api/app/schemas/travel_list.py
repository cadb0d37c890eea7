"""
Travel List & Review Schemas
"""
from pydantic import BaseModel, Field
from typing import Any, List, Optional
from datetime import datetime


class ListCreate(BaseModel):
    """Schema for creating a list"""
    name: Optional[str] = None
    description: Optional[str] = None
    is_visible: bool = False


class ListUpdate(BaseModel):
    """Schema for updating a list; `name` renames it"""
    name: Optional[str] = None
    description: Optional[str] = None
    is_visible: Optional[bool] = None


class VisibilityUpdate(BaseModel):
    """Schema for showing or hiding a list or review"""
    is_visible: bool = True


class DestinationAdd(BaseModel):
    """Schema for adding one destination to a list"""
    destination_id: Optional[Any] = None


class DestinationMerge(BaseModel):
    """Schema for adding many destinations to a list"""
    destination_ids: Optional[Any] = None


class MembershipResponse(BaseModel):
    """Schema for a list's destination ids"""
    name: str
    destinations: List[int] = []


class ReviewCreate(BaseModel):
    """Schema for reviewing a list"""
    rating: Optional[Any] = None
    comment: Optional[str] = None


class ReviewResponse(BaseModel):
    """Schema for review response"""
    rating: float
    comment: str
    user_name: str
    created_date: Optional[datetime] = None
    is_visible: bool = True

    class Config:
        from_attributes = True


class ReviewCreatedResponse(BaseModel):
    """Schema for a newly added review and the list's new average"""
    message: str = "Review added successfully."
    review: ReviewResponse
    average_rating: float


class ModerationReviewResponse(ReviewResponse):
    """Schema for a review as seen by moderators"""
    id: int = Field(..., description="Index of the review within its list")
    list_name: str


class ListResponse(BaseModel):
    """Schema for list response; only visible reviews are included"""
    name: str
    description: str = ""
    creator_nickname: str
    creator_email: str
    is_visible: bool
    destinations: List[int] = []
    creation_date: Optional[datetime] = None
    updated_date: Optional[datetime] = None
    average_rating: float = 0
    reviews: List[ReviewResponse] = []

    @classmethod
    def from_list(cls, travel_list) -> "ListResponse":
        return cls(
            name=travel_list.name,
            description=travel_list.description,
            creator_nickname=travel_list.creator_nickname,
            creator_email=travel_list.creator_email,
            is_visible=travel_list.is_visible,
            destinations=travel_list.destinations,
            creation_date=travel_list.creation_date,
            updated_date=travel_list.updated_date,
            average_rating=travel_list.average_rating,
            reviews=[ReviewResponse.model_validate(r) for r in travel_list.visible_reviews],
        )
