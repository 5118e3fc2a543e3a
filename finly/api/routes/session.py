import logging

from fastapi import APIRouter, Depends, status

from finly.app.services.session_manager import SessionManager
from finly.app.services.unit_of_work import UnitOfWork
from finly.app.use_cases.auth import LogoutResponse, LogoutUseCase
from finly.depends import get_current_session, get_session_manager, get_unit_of_work
from finly.domain.entities import Session

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/session", tags=["Sessions"])


@router.get("/ping", status_code=status.HTTP_200_OK)
async def ping(session: Session = Depends(get_current_session)):
    """Authenticated liveness check"""
    logger.info(f"Ping from session {session.id}")
    return {"success": True, "message": "pong"}


@router.post("/logout", status_code=status.HTTP_200_OK, response_model=LogoutResponse)
async def logout(
    session: Session = Depends(get_current_session),
    uow: UnitOfWork = Depends(get_unit_of_work),
    session_manager: SessionManager = Depends(get_session_manager),
):
    """
    Logout

    Deletes the caller's session; both of its tokens stop working.

    Raises:
        - 401 Unauthorized: Missing or invalid access token
    """
    use_case = LogoutUseCase(uow, session_manager)
    return await use_case.execute(session.id)
