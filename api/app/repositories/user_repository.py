"""
User Repository - account documents keyed by lower-cased email
"""
from typing import Any, Dict, List, Optional

from motor.motor_asyncio import AsyncIOMotorCollection, AsyncIOMotorDatabase
from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError

from app.models.user import User
from app.utils.errors import Conflict
from app.utils.mongodb import USERS_COLLECTION


def normalize_email(email: str) -> str:
    return email.strip().lower()


class UserRepository:
    """Data access for the `users` collection"""

    def __init__(self, db: AsyncIOMotorDatabase):
        self.collection: AsyncIOMotorCollection = db[USERS_COLLECTION]

    async def find_by_email(self, email: str) -> Optional[User]:
        doc = await self.collection.find_one({"_id": normalize_email(email)})
        return User.from_document(doc) if doc else None

    async def create(self, user: User) -> User:
        try:
            await self.collection.insert_one(user.to_document())
        except DuplicateKeyError:
            raise Conflict(f"User {user.email} already exists.")
        return user

    async def list_all(self) -> List[User]:
        docs = await self.collection.find({}).sort("_id", 1).to_list(length=None)
        return [User.from_document(doc) for doc in docs]

    async def update(self, email: str, updates: Dict[str, Any]) -> Optional[User]:
        doc = await self.collection.find_one_and_update(
            {"_id": normalize_email(email)},
            {"$set": updates},
            return_document=ReturnDocument.AFTER,
        )
        return User.from_document(doc) if doc else None
