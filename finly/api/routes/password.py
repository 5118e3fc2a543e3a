from datetime import timedelta

from fastapi import APIRouter, Depends, Request, status
from pydantic import BaseModel, EmailStr, Field

from finly.api.utils.jwt import TokenCodec
from finly.app.services.clock import Clock
from finly.app.services.password_hasher import IPasswordHasher
from finly.app.services.reset_password_notifier import IResetPasswordNotifier
from finly.app.services.unit_of_work import UnitOfWork
from finly.app.use_cases.password import (
    ConfirmPasswordResetResponse,
    ConfirmPasswordResetUseCase,
    RequestPasswordResetResponse,
    RequestPasswordResetUseCase,
)
from finly.depends import (
    get_clock,
    get_password_hasher,
    get_reset_password_notifier,
    get_token_codec,
    get_unit_of_work,
)

router = APIRouter(prefix="/password", tags=["Password"])


class RequestPasswordResetRequest(BaseModel):
    """Request password reset HTTP request payload"""

    email: EmailStr = Field(..., description="User email address")


@router.post(
    "/request_reset",
    status_code=status.HTTP_200_OK,
    response_model=RequestPasswordResetResponse,
)
async def request_password_reset(
    request: Request,
    body: RequestPasswordResetRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    token_codec: TokenCodec = Depends(get_token_codec),
    clock: Clock = Depends(get_clock),
    notifier: IResetPasswordNotifier = Depends(get_reset_password_notifier),
):
    """
    Request Password Reset

    Sends a one-time reset link valid for 30 minutes. Unknown emails get the
    same response.

    Raises:
        - 409 Conflict: A reset link is already pending; message is its expiry
        - 500 Internal Server Error: Server error
    """
    config = request.app.state.config
    use_case = RequestPasswordResetUseCase(
        uow,
        token_codec,
        clock,
        notifier,
        link_base=config.RESET_PASSWORD_LINK_BASE,
        ttl=timedelta(minutes=config.RESET_TOKEN_TTL_MINUTES),
    )
    return await use_case.execute(body.email)


class ConfirmPasswordResetRequest(BaseModel):
    """Confirm password reset HTTP request payload"""

    token: str = Field(..., description="Token from the reset link")
    new_password: str = Field(..., description="New password (min 8 chars)")


@router.post(
    "/reset", status_code=status.HTTP_200_OK, response_model=ConfirmPasswordResetResponse
)
async def confirm_password_reset(
    body: ConfirmPasswordResetRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    token_codec: TokenCodec = Depends(get_token_codec),
    clock: Clock = Depends(get_clock),
    password_hasher: IPasswordHasher = Depends(get_password_hasher),
):
    """
    Confirm Password Reset

    Raises:
        - 400 Bad Request: Password shorter than 8 characters
        - 401 Unauthorized: Invalid or expired reset link
        - 409 Conflict: Reset link already used
    """
    use_case = ConfirmPasswordResetUseCase(uow, token_codec, clock, password_hasher)
    return await use_case.execute(body.token, body.new_password)
