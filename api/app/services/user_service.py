"""
Account & Administration Services
"""
from typing import List, Optional, Tuple
import logging

from app.config import settings
from app.models.user import User
from app.repositories.user_repository import UserRepository, normalize_email
from app.utils.errors import Forbidden, InvalidRequest, NotFound, Unauthenticated
from app.utils.security import (
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6


def validate_password(password: Optional[str], label: str = "Password") -> str:
    if not password or len(password.strip()) < MIN_PASSWORD_LENGTH:
        raise InvalidRequest(f"{label} must be at least {MIN_PASSWORD_LENGTH} characters.")
    return password


class AccountService:
    """Registration, login and the identity behind bearer tokens"""

    def __init__(self, user_repository: UserRepository):
        self.user_repo = user_repository

    async def register(self, email: str, nickname: str, password: str) -> User:
        validate_password(password)
        if not nickname or not nickname.strip():
            raise InvalidRequest("Nickname is required.")

        email = normalize_email(email)
        user = User(
            email=email,
            nickname=nickname.strip(),
            password_hash=hash_password(password),
            is_admin=email in settings.ADMIN_EMAILS,
        )
        await self.user_repo.create(user)
        logger.info(f"User registered: {email} (admin={user.is_admin})")
        return user

    async def login(self, email: str, password: str) -> Tuple[str, User]:
        """
        Check credentials and issue an access token

        Returns:
            Tuple of (access_token, user)
        """
        user = await self.user_repo.find_by_email(email)
        if not user or not verify_password(password, user.password_hash):
            raise Unauthenticated("Invalid email or password.")
        if user.is_deactivated:
            raise Forbidden("Account is deactivated.")

        token = create_access_token(data={"sub": user.email})
        logger.info(f"User logged in: {user.email}")
        return token, user

    async def resolve_token(self, token: str) -> User:
        """Identity for an authenticated request"""
        payload = decode_access_token(token)
        if not payload or not payload.get("sub"):
            raise Unauthenticated("Invalid or expired token.")

        user = await self.user_repo.find_by_email(payload["sub"])
        if not user:
            raise Unauthenticated("User not found.")
        if user.is_deactivated:
            raise Forbidden("Account is deactivated.")
        return user

    async def change_password(self, user: User, current_password: str, new_password: str) -> None:
        validate_password(new_password, label="New password")
        if not verify_password(current_password or "", user.password_hash):
            raise Unauthenticated("Current password is incorrect.")
        await self.user_repo.update(user.email, {"password_hash": hash_password(new_password)})
        logger.info(f"Password updated for {user.email}")


class AdminService:
    """User moderation for administrators"""

    def __init__(self, user_repository: UserRepository):
        self.user_repo = user_repository

    async def list_users(self) -> List[User]:
        return await self.user_repo.list_all()

    async def set_deactivated(self, email: str, is_deactivated: bool) -> User:
        user = await self.user_repo.update(email, {"is_deactivated": bool(is_deactivated)})
        if not user:
            raise NotFound("User not found")
        logger.info(f"User {user.email} {'deactivated' if is_deactivated else 'activated'}")
        return user

    async def set_admin(self, acting_admin: User, email: str, is_admin: bool) -> User:
        if normalize_email(email) == acting_admin.email and not is_admin:
            raise InvalidRequest("Administrators cannot remove their own admin status")

        user = await self.user_repo.update(email, {"is_admin": bool(is_admin)})
        if not user:
            raise NotFound("User not found")
        logger.info(f"Updated admin status for {user.email} to {is_admin}")
        return user
