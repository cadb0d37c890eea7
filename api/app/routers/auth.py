"""
Authentication Endpoints & current-user dependencies
"""
from fastapi import APIRouter, Depends, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from typing import Optional
import logging

from app.config import settings
from app.dependencies import get_account_service
from app.models.user import User
from app.schemas.user import LoginRequest, TokenResponse, UserCreate, UserResponse
from app.services.user_service import AccountService
from app.utils.errors import Forbidden, Unauthenticated

router = APIRouter()
logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    accounts: AccountService = Depends(get_account_service),
) -> User:
    """
    Validate the bearer token and return the current user
    """
    if credentials is None or not credentials.credentials:
        raise Unauthenticated("Unauthorized access. Token is missing.")
    return await accounts.resolve_token(credentials.credentials)


async def get_current_user_optional(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    accounts: AccountService = Depends(get_account_service),
) -> Optional[User]:
    """
    Optional authentication - returns None if no usable token is provided
    """
    if credentials is None or not credentials.credentials:
        return None
    try:
        return await accounts.resolve_token(credentials.credentials)
    except (Unauthenticated, Forbidden):
        return None


async def get_current_admin(current_user: User = Depends(get_current_user)) -> User:
    if not current_user.is_admin:
        raise Forbidden("Access denied. Admin privileges required.")
    return current_user


@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def register(
    payload: UserCreate,
    accounts: AccountService = Depends(get_account_service),
):
    """
    Register a new account
    """
    user = await accounts.register(payload.email, payload.nickname, payload.password)
    return user


@router.post("/login", response_model=TokenResponse)
async def login(
    payload: LoginRequest,
    accounts: AccountService = Depends(get_account_service),
):
    """
    Exchange email and password for a bearer token
    """
    token, user = await accounts.login(payload.email, payload.password)
    return TokenResponse(
        access_token=token,
        expires_in=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        user=UserResponse.model_validate(user),
    )
