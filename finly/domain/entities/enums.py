"""
Finly Domain Enums

All enumeration types used across domain entities.
"""

from enum import Enum


class AuthType(str, Enum):
    """How a user account authenticates"""

    username_password = "USERNAME_PASSWORD"
    google = "GOOGLE"
