from finly.app.services.session_manager import SessionManager
from finly.app.services.unit_of_work import UnitOfWork

from .dtos import LogoutResponse


class LogoutUseCase:
    """Terminates a session. Deleting an already removed session is not an error."""

    def __init__(self, uow: UnitOfWork, session_manager: SessionManager):
        self.uow = uow
        self.session_manager = session_manager

    async def execute(self, session_id: str) -> LogoutResponse:
        async with self.uow:
            await self.session_manager.delete(session_id)
            await self.uow.commit()

        return LogoutResponse(success=True, message="logged out")
