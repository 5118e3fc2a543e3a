from abc import ABC, abstractmethod
from typing import Optional

from finly.domain.entities import Session


class ISessionRepository(ABC):
    """Session repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, session_id: str) -> Optional[Session]:
        """Get session by ID"""
        pass

    @abstractmethod
    async def get_by_owner(self, owner_identity: str) -> Optional[Session]:
        """Get the session of an owner, if any"""
        pass

    @abstractmethod
    async def create(self, session: Session) -> Session:
        """Insert a new session"""
        pass

    @abstractmethod
    async def reset_by_owner(self, session: Session) -> None:
        """Overwrite id and both tokens of the row keyed by owner identity"""
        pass

    @abstractmethod
    async def update_access_token(self, session: Session) -> None:
        """Persist only the access token and its expiry, keyed by session id"""
        pass

    @abstractmethod
    async def delete_by_id(self, session_id: str) -> None:
        """Delete a session by ID. No-op when absent."""
        pass

    @abstractmethod
    async def delete_by_owner(self, owner_identity: str) -> None:
        """Delete the session of an owner. No-op when absent."""
        pass
