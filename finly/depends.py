import logging
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from finly.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from finly.api.utils.jwt import TokenClaims, TokenCodec, TokenError
from finly.app.errors import Unauthorized
from finly.app.services.clock import Clock
from finly.app.services.identity_provider import IIdentityProvider
from finly.app.services.password_hasher import IPasswordHasher
from finly.app.services.reset_password_notifier import IResetPasswordNotifier
from finly.app.services.session_manager import SessionManager
from finly.app.services.unit_of_work import UnitOfWork
from finly.domain.entities import Session, User

logger = logging.getLogger(__name__)

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)

# auto_error=False so a missing header is a 401 raised by the gates, not a 403
security = HTTPBearer(auto_error=False)


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


def get_clock(request: Request) -> Clock:
    return request.app.state.clock


def get_token_codec(request: Request) -> TokenCodec:
    return request.app.state.token_codec


def get_password_hasher(request: Request) -> IPasswordHasher:
    return request.app.state.password_hasher


def get_identity_provider(request: Request) -> IIdentityProvider:
    return request.app.state.identity_provider


def get_reset_password_notifier(request: Request) -> IResetPasswordNotifier:
    return request.app.state.reset_password_notifier


def get_session_manager(
    request: Request,
    uow: UnitOfWork = Depends(get_unit_of_work),
    token_codec: TokenCodec = Depends(get_token_codec),
    clock: Clock = Depends(get_clock),
) -> SessionManager:
    return SessionManager(uow, token_codec, clock, request.app.state.session_policy)


def _bearer_token(credentials: Optional[HTTPAuthorizationCredentials]) -> str:
    if credentials is None or not credentials.credentials:
        logger.warning("Rejected request: missing bearer token")
        raise Unauthorized("unauthorized", code="MISSING_TOKEN")
    return credentials.credentials


def _verify(token_codec: TokenCodec, token: str) -> TokenClaims:
    try:
        return token_codec.verify_session_token(token)
    except TokenError as e:
        logger.warning(f"Rejected request: {e.code}")
        raise


async def get_current_session(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    uow: UnitOfWork = Depends(get_unit_of_work),
    token_codec: TokenCodec = Depends(get_token_codec),
    clock: Clock = Depends(get_clock),
) -> Session:
    """
    Authentication gate.

    Verifies the bearer access token, resolves the session named by its
    subject and requires both the refresh and the access token of that
    session to be valid. The presented token must be the session's current
    access token.

    Raises:
        Unauthorized: on any failed step
    """
    token = _bearer_token(credentials)
    claims = _verify(token_codec, token)

    async with uow:
        session = await uow.sessions.get_by_id(claims.subject)

    if session is None:
        logger.warning("Rejected request: session not found")
        raise Unauthorized("unauthorized", code="INVALID_SESSION")

    now = clock.now()
    if not session.is_refresh_token_valid(now):
        logger.warning(f"Rejected request: refresh token of session {session.id} invalid")
        raise Unauthorized("unauthorized", code="SESSION_EXPIRED")
    if not session.is_current_access_token_valid(now) or session.current_access_token != token:
        logger.warning(f"Rejected request: access token of session {session.id} invalid")
        raise Unauthorized("unauthorized", code="INVALID_TOKEN")

    request.state.session = session
    return session


async def get_current_user(
    session: Session = Depends(get_current_session),
    uow: UnitOfWork = Depends(get_unit_of_work),
) -> User:
    """Owner of the authenticated session"""
    async with uow:
        user = await uow.users.get_by_email(session.owner_identity)
    if user is None:
        logger.warning(f"Rejected request: owner of session {session.id} no longer exists")
        raise Unauthorized("unauthorized", code="INVALID_SESSION")
    return user


async def get_refresh_claims(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    token_codec: TokenCodec = Depends(get_token_codec),
) -> TokenClaims:
    """
    Refresh gate: signature and expiry only, no session lookup.

    The refresh endpoint re-derives and repairs the session itself.
    """
    token = _bearer_token(credentials)
    claims = _verify(token_codec, token)
    request.state.claims = claims
    return claims
