from typing import Optional

from sqlalchemy import delete
from sqlmodel import select, update
from sqlmodel.ext.asyncio.session import AsyncSession

from finly.app.repositories.session_repository import ISessionRepository
from finly.domain.entities import Session


class SessionRepository(ISessionRepository):
    """Session repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, session_id: str) -> Optional[Session]:
        stmt = select(Session).where(Session.id == session_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_owner(self, owner_identity: str) -> Optional[Session]:
        stmt = (
            select(Session)
            .where(Session.owner_identity == owner_identity)
            .order_by(Session.created_at.desc())
        )
        result = await self.session.exec(stmt)
        return result.first()

    async def create(self, session_obj: Session) -> Session:
        self.session.add(session_obj)
        await self.session.flush()
        await self.session.refresh(session_obj)
        return session_obj

    async def reset_by_owner(self, session_obj: Session) -> None:
        """
        Overwrite the owner's row, primary key included.

        The instance is detached first so the ORM never flushes the id change
        against the previous identity.
        """
        if session_obj in self.session:
            self.session.expunge(session_obj)
        stmt = (
            update(Session)
            .where(Session.owner_identity == session_obj.owner_identity)
            .values(
                id=session_obj.id,
                refresh_token=session_obj.refresh_token,
                refresh_token_expires_at=session_obj.refresh_token_expires_at,
                current_access_token=session_obj.current_access_token,
                current_access_token_expires_at=session_obj.current_access_token_expires_at,
            )
            .execution_options(synchronize_session=False)
        )
        await self.session.exec(stmt)
        await self.session.flush()

    async def update_access_token(self, session_obj: Session) -> None:
        stmt = (
            update(Session)
            .where(Session.id == session_obj.id)
            .values(
                current_access_token=session_obj.current_access_token,
                current_access_token_expires_at=session_obj.current_access_token_expires_at,
            )
            .execution_options(synchronize_session=False)
        )
        await self.session.exec(stmt)
        await self.session.flush()

    async def delete_by_id(self, session_id: str) -> None:
        await self._delete(Session.id == session_id)

    async def delete_by_owner(self, owner_identity: str) -> None:
        await self._delete(Session.owner_identity == owner_identity)

    async def _delete(self, condition) -> None:
        stmt = delete(Session).where(condition).execution_options(synchronize_session=False)
        await self.session.exec(stmt)
        await self.session.flush()
