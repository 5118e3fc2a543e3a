from datetime import datetime
from typing import Optional

from sqlmodel import select, update
from sqlmodel.ext.asyncio.session import AsyncSession

from finly.app.repositories.reset_password_repository import IResetPasswordRepository
from finly.domain.entities import ResetPassword


class ResetPasswordRepository(IResetPasswordRepository):
    """Password reset request repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, reset_password: ResetPassword) -> ResetPassword:
        self.session.add(reset_password)
        await self.session.flush()
        await self.session.refresh(reset_password)
        return reset_password

    async def get_by_id(self, reset_id: str) -> Optional[ResetPassword]:
        stmt = select(ResetPassword).where(ResetPassword.id == reset_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_pending_by_email(
        self, email: str, now: datetime
    ) -> Optional[ResetPassword]:
        stmt = (
            select(ResetPassword)
            .where(
                ResetPassword.user_email == email,
                ResetPassword.is_password_reset == False,  # noqa: E712
                ResetPassword.expires_at > now,
            )
            .order_by(ResetPassword.expires_at.desc())
        )
        result = await self.session.exec(stmt)
        return result.first()

    async def mark_as_used(self, reset_id: str) -> None:
        stmt = (
            update(ResetPassword)
            .where(ResetPassword.id == reset_id)
            .values(is_password_reset=True)
        )
        await self.session.exec(stmt)
        await self.session.flush()
