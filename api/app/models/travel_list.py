"""
TravelList & Review Models - MongoDB documents in the `lists` collection
"""
from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, Iterable, List, Optional


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def average_rating(ratings: Iterable[float]) -> float:
    """Arithmetic mean rounded half-up to one decimal place; 0 when empty"""
    ratings = [float(r) for r in ratings]
    if not ratings:
        return 0
    mean = sum(ratings) / len(ratings)
    return float(Decimal(str(mean)).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


@dataclass
class Review:
    rating: float
    comment: str
    user_name: str
    created_date: datetime = field(default_factory=utcnow)
    is_visible: bool = True

    @classmethod
    def from_document(cls, doc: Dict[str, Any]) -> "Review":
        return cls(
            rating=doc["rating"],
            comment=doc["comment"],
            user_name=doc.get("user_name", ""),
            created_date=doc.get("created_date"),
            is_visible=doc.get("is_visible", True) is not False,
        )

    def to_document(self) -> Dict[str, Any]:
        return {
            "rating": self.rating,
            "comment": self.comment,
            "user_name": self.user_name,
            "created_date": self.created_date,
            "is_visible": self.is_visible,
        }


@dataclass
class TravelList:
    name: str
    creator_email: str
    creator_nickname: str
    description: str = ""
    is_visible: bool = False
    destinations: List[int] = field(default_factory=list)
    reviews: List[Review] = field(default_factory=list)
    average_rating: float = 0
    creation_date: datetime = field(default_factory=utcnow)
    updated_date: Optional[datetime] = None
    version: int = 0

    @classmethod
    def from_document(cls, doc: Dict[str, Any]) -> "TravelList":
        return cls(
            name=doc["_id"],
            creator_email=doc.get("creator_email", ""),
            creator_nickname=doc.get("creator_nickname", ""),
            description=doc.get("description", ""),
            is_visible=bool(doc.get("is_visible", False)),
            destinations=list(doc.get("destinations") or []),
            reviews=[Review.from_document(r) for r in doc.get("reviews") or []],
            average_rating=doc.get("average_rating", 0),
            creation_date=doc.get("creation_date"),
            updated_date=doc.get("updated_date"),
            version=doc.get("version", 0),
        )

    def to_document(self) -> Dict[str, Any]:
        return {
            "_id": self.name,
            "name": self.name,
            "description": self.description,
            "creator_email": self.creator_email,
            "creator_nickname": self.creator_nickname,
            "is_visible": self.is_visible,
            "destinations": list(self.destinations),
            "reviews": [r.to_document() for r in self.reviews],
            "average_rating": self.average_rating,
            "creation_date": self.creation_date,
            "updated_date": self.updated_date,
            "version": self.version,
        }

    def is_owned_by(self, email: str) -> bool:
        return self.creator_email == email

    @property
    def visible_reviews(self) -> List[Review]:
        return [r for r in self.reviews if r.is_visible]

    def __repr__(self):
        return f"<TravelList {self.name} by {self.creator_email}>"
