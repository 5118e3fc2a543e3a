"""
Confirm Password Reset Use Case

Sets a new password from a one-time reset link.
"""

from finly.api.utils.jwt import TokenCodec
from finly.app.errors import Conflict, NotFound, Unauthorized, ValidationError
from finly.app.services.clock import Clock
from finly.app.services.password_hasher import IPasswordHasher
from finly.app.services.unit_of_work import UnitOfWork

from .dtos import ConfirmPasswordResetResponse

MIN_PASSWORD_LENGTH = 8


class ConfirmPasswordResetUseCase:
    """
    Use case for confirming a password reset.

    Business Rules:
    - Token must verify in the reset signing domain
    - The request must exist, be unused and unexpired
    - New password must be at least 8 characters
    - The request is marked used and the owner's session is removed
    """

    def __init__(
        self,
        uow: UnitOfWork,
        token_codec: TokenCodec,
        clock: Clock,
        password_hasher: IPasswordHasher,
    ):
        self.uow = uow
        self.token_codec = token_codec
        self.clock = clock
        self.password_hasher = password_hasher

    async def execute(self, token: str, new_password: str) -> ConfirmPasswordResetResponse:
        """
        Raises:
            ValidationError: password too short
            Unauthorized: bad token, unknown or expired request
            Conflict: request already used
            NotFound: the account no longer exists
        """
        if len(new_password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(
                f"password must be at least {MIN_PASSWORD_LENGTH} characters long",
                code="INVALID_PASSWORD",
            )

        claims = self.token_codec.verify_reset_token(token)

        async with self.uow:
            reset_password = await self.uow.reset_passwords.get_by_id(claims.subject)
            if reset_password is None:
                raise Unauthorized("invalid password reset token", code="INVALID_TOKEN")

            if reset_password.is_password_reset:
                raise Conflict("password reset link already used", code="TOKEN_ALREADY_USED")

            if reset_password.is_expired(self.clock.now()):
                raise Unauthorized("password reset link expired", code="TOKEN_EXPIRED")

            user = await self.uow.users.get_by_email(reset_password.user_email)
            if user is None:
                raise NotFound("user not found", code="USER_NOT_FOUND")

            user.password_hash = await self.password_hasher.hash(new_password)
            await self.uow.users.update(user)
            await self.uow.reset_passwords.mark_as_used(reset_password.id)
            await self.uow.sessions.delete_by_owner(user.email)

            await self.uow.commit()

        return ConfirmPasswordResetResponse(success=True, message="password has been reset")
