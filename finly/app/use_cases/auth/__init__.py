"""
Authentication Use Cases

Signup, login, token refresh and logout.
"""

from .signup_use_case import SignupUseCase
from .login_use_case import LoginUseCase
from .google_signin_use_case import GoogleSignInUseCase
from .refresh_token_use_case import RefreshTokenUseCase
from .logout_use_case import LogoutUseCase
from .dtos import (
    SignupCommand,
    SignupResponse,
    UserInfo,
    LoginResponse,
    RefreshTokenResponse,
    LogoutResponse,
)

__all__ = [
    # Use Cases
    "SignupUseCase",
    "LoginUseCase",
    "GoogleSignInUseCase",
    "RefreshTokenUseCase",
    "LogoutUseCase",
    # DTOs - Commands
    "SignupCommand",
    # DTOs - Responses
    "SignupResponse",
    "LoginResponse",
    "RefreshTokenResponse",
    "LogoutResponse",
    # DTOs - Nested Models
    "UserInfo",
]
