"""
Refresh Token Use Case

Repairs an expired access token while the refresh token is still valid.
"""

from finly.api.utils.jwt import TokenClaims
from finly.app.errors import Unauthorized
from finly.app.services.session_manager import SessionManager
from finly.app.services.unit_of_work import UnitOfWork
from finly.domain.base import as_utc

from .dtos import RefreshTokenResponse


class RefreshTokenUseCase:
    """
    Use case for renewing the access token of a session.

    Business Rules:
    - The token subject is the session id; the session must exist
    - The presented token must be the session's current refresh token
    - An expired refresh token requires a new login
    - A still-valid access token is returned unchanged
    """

    def __init__(self, uow: UnitOfWork, session_manager: SessionManager):
        self.uow = uow
        self.session_manager = session_manager

    async def execute(self, claims: TokenClaims, refresh_token: str) -> RefreshTokenResponse:
        """
        Execute refresh token use case.

        Args:
            claims: Verified claims of the presented refresh token
            refresh_token: The presented token itself

        Raises:
            Unauthorized: unknown session, stale token or expired refresh token
        """
        async with self.uow:
            session = await self.session_manager.get_by_id(claims.subject)
            if session is None:
                raise Unauthorized("session not found", code="INVALID_SESSION")

            if session.refresh_token != refresh_token:
                raise Unauthorized("refresh token does not match session", code="INVALID_TOKEN")

            now = self.session_manager.clock.now()
            if not session.is_refresh_token_valid(now):
                raise Unauthorized("session expired", code="SESSION_EXPIRED")

            if not session.is_current_access_token_valid(now):
                await self.session_manager.renew_access_token(session)
                await self.uow.commit()

        return RefreshTokenResponse(
            success=True,
            access_token=session.current_access_token,
            access_token_expires_at=as_utc(session.current_access_token_expires_at),
        )
