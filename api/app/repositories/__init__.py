"""MongoDB Repositories"""
from .list_repository import ListRepository
from .user_repository import UserRepository, normalize_email

__all__ = [
    "ListRepository",
    "UserRepository",
    "normalize_email",
]
