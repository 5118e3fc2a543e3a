"""
Request Password Reset Use Case

Records a reset request and hands a signed one-time link to the notifier.
"""

import logging
from datetime import timedelta

from finly.api.utils.jwt import TokenCodec
from finly.app.errors import Conflict
from finly.app.services.clock import Clock
from finly.app.services.reset_password_notifier import IResetPasswordNotifier
from finly.app.services.unit_of_work import UnitOfWork
from finly.domain.base import as_utc, expiry_after
from finly.domain.entities import ResetPassword

from .dtos import RequestPasswordResetResponse

logger = logging.getLogger(__name__)

RESET_REQUESTED_MESSAGE = "If the email exists, a password reset link has been sent"


class RequestPasswordResetUseCase:
    """
    Use case for requesting a password reset.

    Business Rules:
    - One pending (unused, unexpired) request per email; a second one is a
      Conflict whose message is the pending request's expiry instant
    - Request expires after the configured TTL (30 minutes by default)
    - The reset token subject is the request id, signed in the reset domain
    - Unknown emails get the same response and no record
    """

    def __init__(
        self,
        uow: UnitOfWork,
        token_codec: TokenCodec,
        clock: Clock,
        notifier: IResetPasswordNotifier,
        link_base: str,
        ttl: timedelta = timedelta(minutes=30),
    ):
        self.uow = uow
        self.token_codec = token_codec
        self.clock = clock
        self.notifier = notifier
        self.link_base = link_base
        self.ttl = ttl

    async def execute(self, email: str) -> RequestPasswordResetResponse:
        """
        Execute request password reset use case.

        Raises:
            Conflict: an unexpired reset request is already pending
        """
        now = self.clock.now()
        expires_at = expiry_after(now, self.ttl)

        async with self.uow:
            user = await self.uow.users.get_by_email(email)
            if user is None:
                logger.info("Password reset requested for unknown email")
                return RequestPasswordResetResponse(success=True, message=RESET_REQUESTED_MESSAGE)

            pending = await self.uow.reset_passwords.get_pending_by_email(email, now)
            if pending is not None:
                raise Conflict(
                    as_utc(pending.expires_at).isoformat(), code="RESET_ALREADY_REQUESTED"
                )

            reset_password = ResetPassword(
                user_email=email,
                sent_at=now,
                expires_at=expires_at,
            )
            await self.uow.reset_passwords.create(reset_password)

            token = self.token_codec.sign_reset_token(reset_password.id, expires_at)
            await self.uow.commit()

        await self.notifier.send_reset_link(email, f"{self.link_base}?token={token}")
        return RequestPasswordResetResponse(success=True, message=RESET_REQUESTED_MESSAGE)
