"""
Review Service - list reviews, average rating upkeep and moderation
"""
from numbers import Real
from typing import Any, Dict, List, Optional, Tuple
import logging

from app.config import settings
from app.models.travel_list import Review, TravelList, average_rating
from app.models.user import User
from app.repositories.list_repository import ListRepository
from app.services.list_service import check_readable
from app.utils.errors import Conflict, InvalidComment, InvalidRating, NotFound

logger = logging.getLogger(__name__)

MIN_RATING = 0
MAX_RATING = 5


def validate_rating(rating: Any) -> float:
    if isinstance(rating, bool) or not isinstance(rating, Real):
        raise InvalidRating("Rating must be a number between 0 and 5.")
    if not MIN_RATING <= rating <= MAX_RATING:
        raise InvalidRating("Rating must be a number between 0 and 5.")
    return rating


def validate_comment(comment: Any) -> str:
    if not isinstance(comment, str) or not comment.strip():
        raise InvalidComment("Comment must be a non-empty string.")
    return comment.strip()


class ReviewService:
    """
    Appends reviews and keeps `average_rating` in step with them.

    The new review and the recomputed average are written together in one
    compare-and-set update of the list document.
    """

    def __init__(self, repository: ListRepository, write_attempts: Optional[int] = None):
        self.repository = repository
        self.write_attempts = (
            settings.REVIEW_WRITE_ATTEMPTS if write_attempts is None else write_attempts
        )

    async def add_review(self, name: str, rating: Any, comment: Any, author: User) -> Tuple[Review, float]:
        """
        Add a review to a list

        Returns:
            Tuple of (review, new_average_rating)
        """
        rating = validate_rating(rating)
        comment = validate_comment(comment)
        review = Review(rating=rating, comment=comment, user_name=author.display_name)

        for _ in range(self.write_attempts):
            travel_list = await self._get_existing(name)
            reviews = travel_list.reviews + [review]
            new_average = average_rating(r.rating for r in reviews)
            written = await self.repository.compare_and_set(
                travel_list,
                {
                    "reviews": [r.to_document() for r in reviews],
                    "average_rating": new_average,
                },
            )
            if written:
                logger.info(f"Review added to {name} by {author.email}; average now {new_average}")
                return review, new_average
            logger.debug(f"Concurrent write on list {name}, re-reading")

        raise Conflict(f'List "{name}" is being modified concurrently, try again.')

    async def list_reviews(self, name: str, requester: Optional[User] = None) -> List[Review]:
        """Visible reviews in insertion order; private lists only for their creator"""
        travel_list = check_readable(await self._get_existing(name), requester)
        return travel_list.visible_reviews

    async def set_visibility(self, name: str, index: int, is_visible: bool) -> Review:
        """
        Show or hide a review. Only the flag changes; the average keeps
        counting hidden reviews.
        """
        for _ in range(self.write_attempts):
            travel_list = await self._get_existing(name)
            if index < 0 or index >= len(travel_list.reviews):
                raise NotFound("Review not found")

            reviews = list(travel_list.reviews)
            reviews[index].is_visible = bool(is_visible)
            written = await self.repository.compare_and_set(
                travel_list, {"reviews": [r.to_document() for r in reviews]}
            )
            if written:
                logger.info(f"Review {index} on {name} visibility set to {is_visible}")
                return reviews[index]

        raise Conflict(f'List "{name}" is being modified concurrently, try again.')

    async def all_reviews(self) -> List[Dict[str, Any]]:
        """Every review of every list, hidden ones included, for moderation"""
        entries = []
        for travel_list in await self.repository.list_all():
            for index, review in enumerate(travel_list.reviews):
                entries.append({"list_name": travel_list.name, "id": index, "review": review})
        return entries

    async def _get_existing(self, name: str) -> TravelList:
        travel_list = await self.repository.get(name)
        if travel_list is None:
            raise NotFound(f'List "{name}" not found.')
        return travel_list
