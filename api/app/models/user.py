"""
User Model - MongoDB documents in the `users` collection, keyed by email
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional

from app.models.travel_list import utcnow


@dataclass
class User:
    email: str
    nickname: str
    password_hash: str = ""
    is_admin: bool = False
    is_deactivated: bool = False
    created_date: Optional[datetime] = field(default_factory=utcnow)

    @property
    def display_name(self) -> str:
        return self.nickname or self.email

    @classmethod
    def from_document(cls, doc: Dict[str, Any]) -> "User":
        return cls(
            email=doc["_id"],
            nickname=doc.get("nickname", ""),
            password_hash=doc.get("password_hash", ""),
            is_admin=bool(doc.get("is_admin", False)),
            is_deactivated=bool(doc.get("is_deactivated", False)),
            created_date=doc.get("created_date"),
        )

    def to_document(self) -> Dict[str, Any]:
        return {
            "_id": self.email,
            "email": self.email,
            "nickname": self.nickname,
            "password_hash": self.password_hash,
            "is_admin": self.is_admin,
            "is_deactivated": self.is_deactivated,
            "created_date": self.created_date,
        }

    def __repr__(self):
        return f"<User {self.email}>"
