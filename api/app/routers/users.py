"""
User Profile Endpoints
"""
from fastapi import APIRouter, Depends
import logging

from app.dependencies import get_account_service
from app.routers.auth import get_current_user
from app.models.user import User
from app.schemas.user import PasswordUpdate, UserResponse
from app.services.user_service import AccountService

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/me", response_model=UserResponse)
async def get_profile(current_user: User = Depends(get_current_user)):
    """
    Get current user profile
    """
    return current_user


@router.put("/me/password")
async def update_password(
    payload: PasswordUpdate,
    current_user: User = Depends(get_current_user),
    accounts: AccountService = Depends(get_account_service),
):
    """
    Change the current user's password
    """
    await accounts.change_password(current_user, payload.current_password, payload.new_password)
    return {"message": "Password updated successfully."}
