"""
Login Use Case

Authenticates an email/password account and issues session tokens.
"""

import logging

from finly.app.errors import Unauthorized
from finly.app.services.password_hasher import IPasswordHasher
from finly.app.services.session_manager import SessionManager
from finly.app.services.unit_of_work import UnitOfWork
from finly.domain.entities import AuthType

from .dtos import LoginResponse
from .session_flow import build_login_response, open_session

logger = logging.getLogger(__name__)


class LoginUseCase:
    """
    Use case for user login and token issuance.

    Business Rules:
    - Unknown email and wrong password fail the same way
    - Accounts created through another provider cannot log in with a password
    - The owner's session is created on first login and rotated on every login,
      so tokens from a previous login stop working
    """

    def __init__(
        self,
        uow: UnitOfWork,
        session_manager: SessionManager,
        password_hasher: IPasswordHasher,
    ):
        self.uow = uow
        self.session_manager = session_manager
        self.password_hasher = password_hasher

    async def execute(self, email: str, password: str) -> LoginResponse:
        """
        Execute login use case.

        Args:
            email: User email
            password: Plain text password

        Returns:
            LoginResponse with user info, tokens and their expiry instants

        Raises:
            Unauthorized: bad credentials or wrong auth method
        """
        async with self.uow:
            user = await self.uow.users.get_by_email(email)
            if user is None:
                raise Unauthorized("incorrect email or password", code="INVALID_CREDENTIALS")

            if user.auth_type != AuthType.username_password or not user.password_hash:
                logger.warning(f"Password login refused for {user.auth_type.value} account")
                raise Unauthorized(
                    "account uses a different sign-in method", code="WRONG_AUTH_METHOD"
                )

            if not await self.password_hasher.verify(password, user.password_hash):
                raise Unauthorized("incorrect email or password", code="INVALID_CREDENTIALS")

            session = await open_session(self.session_manager, user.email)
            await self.uow.commit()

        return build_login_response(user, session)
