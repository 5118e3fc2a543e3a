"""
Password Reset Use Cases
"""

from .request_password_reset_use_case import RequestPasswordResetUseCase
from .confirm_password_reset_use_case import ConfirmPasswordResetUseCase
from .dtos import RequestPasswordResetResponse, ConfirmPasswordResetResponse

__all__ = [
    "RequestPasswordResetUseCase",
    "ConfirmPasswordResetUseCase",
    "RequestPasswordResetResponse",
    "ConfirmPasswordResetResponse",
]
