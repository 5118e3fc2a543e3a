"""
Session Manager

Owns the session lifecycle: creation, rotation on login, access token
renewal, lookup and removal. At most one row exists per owner; this is
enforced by read-then-write in the callers, not by the store, so two
concurrent logins for the same owner resolve as last writer wins.
"""

import logging
from dataclasses import dataclass
from datetime import timedelta
from typing import Optional

from finly.api.utils.jwt import TokenCodec
from finly.app.errors import Conflict
from finly.app.services.clock import Clock
from finly.app.services.unit_of_work import UnitOfWork
from finly.domain.base import expiry_after, generate_uuid
from finly.domain.entities import Session

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionPolicy:
    access_token_ttl: timedelta = timedelta(minutes=15)
    refresh_token_ttl: timedelta = timedelta(days=1)


class SessionManager:
    """
    Session lifecycle operations over the unit of work's session repository.

    Must be used inside ``async with uow``; committing is left to the caller.
    """

    def __init__(
        self,
        uow: UnitOfWork,
        token_codec: TokenCodec,
        clock: Clock,
        policy: SessionPolicy,
    ):
        self.uow = uow
        self.token_codec = token_codec
        self.clock = clock
        self.policy = policy

    async def create(self, owner_identity: str) -> Session:
        """
        Persist a new session with empty tokens.

        Raises:
            Conflict: the owner already has a session
        """
        existing = await self.uow.sessions.get_by_owner(owner_identity)
        if existing is not None:
            raise Conflict("session already exists", code="SESSION_EXISTS")

        session = Session(owner_identity=owner_identity, created_at=self.clock.now())
        return await self.uow.sessions.create(session)

    async def get_by_id(self, session_id: str) -> Optional[Session]:
        return await self.uow.sessions.get_by_id(session_id)

    async def get_by_owner(self, owner_identity: str) -> Optional[Session]:
        return await self.uow.sessions.get_by_owner(owner_identity)

    async def rotate(self, session: Session) -> None:
        """Give the session a new id and reissue both tokens, in place by owner."""
        now = self.clock.now()
        new_id = generate_uuid()
        refresh_expires_at = expiry_after(now, self.policy.refresh_token_ttl)
        access_expires_at = expiry_after(now, self.policy.access_token_ttl)

        session.id = new_id
        session.refresh_token = self.token_codec.sign_session_token(new_id, refresh_expires_at)
        session.refresh_token_expires_at = refresh_expires_at
        session.current_access_token = self.token_codec.sign_session_token(
            new_id, access_expires_at
        )
        session.current_access_token_expires_at = access_expires_at

        await self.uow.sessions.reset_by_owner(session)
        logger.info(f"Rotated session for {session.owner_identity}")

    async def renew_access_token(self, session: Session) -> None:
        """Reissue only the access token; id and refresh token stay untouched."""
        expires_at = expiry_after(self.clock.now(), self.policy.access_token_ttl)
        session.current_access_token = self.token_codec.sign_session_token(
            session.id, expires_at
        )
        session.current_access_token_expires_at = expires_at

        await self.uow.sessions.update_access_token(session)
        logger.info(f"Renewed access token of session {session.id}")

    async def delete(self, session_id: str) -> None:
        await self.uow.sessions.delete_by_id(session_id)
