"""
Session Entity

Binds one owner (user email) to the current refresh/access token pair.
"""

from datetime import datetime
from typing import Optional

from sqlmodel import Column, DateTime, Field, SQLModel

from finly.domain.base import as_utc, generate_uuid, utcnow


def _is_token_valid(token: str, expires_at: Optional[datetime], now: datetime) -> bool:
    # An empty token is never valid, whatever its expiry says.
    if not token:
        return False
    expires_at = as_utc(expires_at)
    if expires_at is None:
        return False
    return expires_at > now


class Session(SQLModel, table=True):
    """
    Session entity - one authenticated client relationship per owner.

    Business Rules:
    - At most one live session per owner (upsert-on-login, not a storage constraint)
    - The id changes on every rotation and is the subject of both tokens
    - Refresh and access tokens expire independently
    - Deleted on logout
    """

    __tablename__ = "sessions"

    id: str = Field(default_factory=generate_uuid, primary_key=True, max_length=36)
    owner_identity: str = Field(index=True, max_length=255)

    created_at: datetime = Field(
        default_factory=utcnow, sa_column=Column(DateTime(timezone=True))
    )

    refresh_token: str = Field(default="")
    refresh_token_expires_at: Optional[datetime] = Field(
        default=None, sa_column=Column(DateTime(timezone=True))
    )
    current_access_token: str = Field(default="")
    current_access_token_expires_at: Optional[datetime] = Field(
        default=None, sa_column=Column(DateTime(timezone=True))
    )

    def is_refresh_token_valid(self, now: datetime) -> bool:
        return _is_token_valid(self.refresh_token, self.refresh_token_expires_at, now)

    def is_current_access_token_valid(self, now: datetime) -> bool:
        return _is_token_valid(
            self.current_access_token, self.current_access_token_expires_at, now
        )
