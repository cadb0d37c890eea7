"""
User Schemas
"""
from pydantic import BaseModel, EmailStr, Field
from typing import Optional


class UserCreate(BaseModel):
    """Schema for user registration"""
    email: EmailStr
    nickname: str = Field(..., min_length=1, max_length=50)
    password: str = Field(..., max_length=72)


class LoginRequest(BaseModel):
    """Schema for login"""
    email: EmailStr
    password: str


class PasswordUpdate(BaseModel):
    """Schema for changing the current user's password"""
    current_password: str
    new_password: str = Field(..., max_length=72)


class UserResponse(BaseModel):
    """Schema for user response"""
    email: str
    nickname: str
    is_admin: bool = False
    is_deactivated: bool = False

    class Config:
        from_attributes = True


class TokenResponse(BaseModel):
    """Schema for authentication token response"""
    access_token: str
    token_type: str = "bearer"
    expires_in: int
    user: UserResponse


class StatusUpdate(BaseModel):
    """Schema for (de)activating an account"""
    is_deactivated: bool


class AdminUpdate(BaseModel):
    """Schema for granting or revoking admin status"""
    is_admin: bool
