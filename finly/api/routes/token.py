from typing import Optional

from fastapi import APIRouter, Depends, status
from fastapi.security import HTTPAuthorizationCredentials

from finly.api.utils.jwt import TokenClaims
from finly.app.services.session_manager import SessionManager
from finly.app.services.unit_of_work import UnitOfWork
from finly.app.use_cases.auth import RefreshTokenResponse, RefreshTokenUseCase
from finly.depends import get_refresh_claims, get_session_manager, get_unit_of_work, security

router = APIRouter(prefix="/token", tags=["Token"])


@router.post("/refresh", status_code=status.HTTP_200_OK, response_model=RefreshTokenResponse)
async def refresh(
    claims: TokenClaims = Depends(get_refresh_claims),
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    uow: UnitOfWork = Depends(get_unit_of_work),
    session_manager: SessionManager = Depends(get_session_manager),
):
    """
    Refresh Access Token

    Takes the refresh token as bearer token. Renews the access token when it
    has expired, otherwise returns the current one.

    Raises:
        - 401 Unauthorized: Invalid/expired refresh token or unknown session
        - 500 Internal Server Error: Server error
    """
    use_case = RefreshTokenUseCase(uow, session_manager)
    return await use_case.execute(claims, credentials.credentials)
