"""
Authentication Use Case DTOs (Data Transfer Objects)

All Command and Response classes for the auth domain.
"""

from datetime import datetime

from pydantic import BaseModel


# ============================================================================
# Commands
# ============================================================================


class SignupCommand(BaseModel):
    """Signup command - validated intent to register a password account"""

    email: str
    password: str
    name: str


# ============================================================================
# Response DTOs
# ============================================================================


class SignupResponse(BaseModel):
    """Response for signup use case"""

    success: bool
    message: str


class UserInfo(BaseModel):
    """User information in authentication responses"""

    id: str
    email: str
    name: str
    auth_type: str
    email_verified: bool
    is_premium: bool


class LoginResponse(BaseModel):
    """Response for password and Google login use cases"""

    success: bool
    user: UserInfo
    access_token: str
    access_token_expires_at: datetime
    refresh_token: str
    refresh_token_expires_at: datetime


class RefreshTokenResponse(BaseModel):
    """Response for refresh token use case"""

    success: bool
    access_token: str
    access_token_expires_at: datetime


class LogoutResponse(BaseModel):
    """Response for logout use case"""

    success: bool
    message: str
