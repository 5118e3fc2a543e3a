"""
Shared login steps: open or reuse the owner's session, then build the response.
"""

from finly.app.services.session_manager import SessionManager
from finly.domain.base import as_utc
from finly.domain.entities import Session, User

from .dtos import LoginResponse, UserInfo


async def open_session(session_manager: SessionManager, owner_identity: str) -> Session:
    """
    Create the owner's session if missing, then rotate it.

    Read-then-write: concurrent logins of one owner race and the last
    rotation wins.
    """
    session = await session_manager.get_by_owner(owner_identity)
    if session is None:
        session = await session_manager.create(owner_identity)
    await session_manager.rotate(session)
    return session


def build_login_response(user: User, session: Session) -> LoginResponse:
    return LoginResponse(
        success=True,
        user=UserInfo(
            id=str(user.id),
            email=user.email,
            name=user.name,
            auth_type=user.auth_type.value,
            email_verified=user.email_verified,
            is_premium=user.is_premium,
        ),
        access_token=session.current_access_token,
        access_token_expires_at=as_utc(session.current_access_token_expires_at),
        refresh_token=session.refresh_token,
        refresh_token_expires_at=as_utc(session.refresh_token_expires_at),
    )
