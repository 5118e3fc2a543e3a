from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from finly.domain.entities import CreditCard, CreditCardBillingCycle


class ICreditCardRepository(ABC):
    """Credit card repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, card_id: UUID) -> Optional[CreditCard]:
        """Get credit card by ID regardless of owner or state"""
        pass

    @abstractmethod
    async def get_active_by_user(
        self, card_id: UUID, user_id: UUID
    ) -> Optional[CreditCard]:
        """Get an active credit card owned by the user"""
        pass

    @abstractmethod
    async def upsert(self, card: CreditCard) -> CreditCard:
        """Insert card, or update name/icon/limit when it exists. Closing day is kept."""
        pass

    @abstractmethod
    async def deactivate(self, card_id: UUID, user_id: UUID) -> bool:
        """Soft delete. Returns True if an active card was deactivated."""
        pass

    @abstractmethod
    async def list_active_by_user(self, user_id: UUID) -> List[CreditCard]:
        """List active credit cards of a user"""
        pass


class IBillingCycleRepository(ABC):
    """Credit card billing cycle repository interface - application layer"""

    @abstractmethod
    async def create(self, cycle: CreditCardBillingCycle) -> CreditCardBillingCycle:
        """Persist a computed billing cycle"""
        pass

    @abstractmethod
    async def list_by_card(
        self, card_id: UUID, user_id: UUID
    ) -> List[CreditCardBillingCycle]:
        """List cycles of an active card owned by the user"""
        pass
