from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from finly.domain.entities import ResetPassword


class IResetPasswordRepository(ABC):
    """Password reset request repository interface - application layer"""

    @abstractmethod
    async def create(self, reset_password: ResetPassword) -> ResetPassword:
        """Create a new reset request"""
        pass

    @abstractmethod
    async def get_by_id(self, reset_id: str) -> Optional[ResetPassword]:
        """Get reset request by ID"""
        pass

    @abstractmethod
    async def get_pending_by_email(
        self, email: str, now: datetime
    ) -> Optional[ResetPassword]:
        """Get an unused reset request for the email that has not expired at ``now``"""
        pass

    @abstractmethod
    async def mark_as_used(self, reset_id: str) -> None:
        """Flag reset request as used"""
        pass
