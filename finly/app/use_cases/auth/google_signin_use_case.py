"""
Google Sign-In Use Case

Exchanges a Google id token for session tokens, registering the account on
first sign-in.
"""

from finly.app.errors import Unauthorized
from finly.app.services.identity_provider import IIdentityProvider
from finly.app.services.session_manager import SessionManager
from finly.app.services.unit_of_work import UnitOfWork
from finly.domain.entities import AuthType, User

from .dtos import LoginResponse
from .session_flow import build_login_response, open_session


class GoogleSignInUseCase:
    """
    Business Rules:
    - The identity provider is the only source of identity claims
    - Unknown email creates a GOOGLE account
    - An existing password account is refused (wrong auth method)
    """

    def __init__(
        self,
        uow: UnitOfWork,
        session_manager: SessionManager,
        identity_provider: IIdentityProvider,
    ):
        self.uow = uow
        self.session_manager = session_manager
        self.identity_provider = identity_provider

    async def execute(self, id_token: str) -> LoginResponse:
        claims = await self.identity_provider.verify(id_token)

        async with self.uow:
            user = await self.uow.users.get_by_email(claims.email)
            if user is None:
                user = await self.uow.users.create(
                    User(
                        email=claims.email,
                        name=claims.name,
                        auth_type=AuthType.google,
                        email_verified=claims.email_verified,
                    )
                )
            elif user.auth_type != AuthType.google:
                raise Unauthorized(
                    "account uses a different sign-in method", code="WRONG_AUTH_METHOD"
                )

            session = await open_session(self.session_manager, user.email)
            await self.uow.commit()

        return build_login_response(user, session)
