"""Domain Models"""
from app.models.destination import Destination
from app.models.travel_list import TravelList, Review, average_rating
from app.models.user import User

__all__ = [
    "Destination", "TravelList", "Review", "User", "average_rating",
]
