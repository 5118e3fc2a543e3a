"""
ResetPassword Entity

One password reset request; its id is the subject of the reset token.
"""

from datetime import datetime

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from finly.domain.base import as_utc, generate_uuid, utcnow


class ResetPassword(SQLModel, table=True):
    """
    ResetPassword entity - pending or completed password reset request.

    Business Rules:
    - Expires 30 minutes after it was sent
    - Only one unexpired, unused request per email at a time
    - Single-use: is_password_reset flips once the password is changed
    """

    __tablename__ = "reset_passwords"

    id: str = Field(default_factory=generate_uuid, primary_key=True, max_length=36)
    user_email: str = Field(max_length=255)

    sent_at: datetime = Field(
        default_factory=utcnow, sa_column=Column(DateTime(timezone=True))
    )
    expires_at: datetime = Field(sa_column=Column(DateTime(timezone=True)))
    is_password_reset: bool = Field(default=False)

    __table_args__ = (
        Index("idx_reset_password_user_email", "user_email"),
    )

    def is_expired(self, now: datetime) -> bool:
        return as_utc(self.expires_at) <= now
