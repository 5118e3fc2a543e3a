"""
User Entity

Represents a person owning categories, credit cards and one session.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, SQLModel

from finly.domain.base import utcnow

from .enums import AuthType


class User(SQLModel, table=True):
    """
    User entity - an account holder.

    Business Rules:
    - Email must be unique across all users
    - Password stored as bcrypt hash; empty for accounts created via Google
    - auth_type decides which login flow the account accepts
    """

    __tablename__ = "users"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    email: str = Field(unique=True, index=True, max_length=255)
    name: str = Field(max_length=255)
    password_hash: Optional[str] = Field(default=None, max_length=60)

    auth_type: AuthType = Field(default=AuthType.username_password)
    email_verified: bool = Field(default=False)
    is_premium: bool = Field(default=False)

    created_at: datetime = Field(
        default_factory=utcnow, sa_column=Column(DateTime(timezone=True))
    )
