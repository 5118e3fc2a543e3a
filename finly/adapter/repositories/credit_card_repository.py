from typing import List, Optional
from uuid import UUID

from sqlmodel import select, update
from sqlmodel.ext.asyncio.session import AsyncSession

from finly.app.repositories.credit_card_repository import (
    IBillingCycleRepository,
    ICreditCardRepository,
)
from finly.domain.base import utcnow
from finly.domain.entities import CreditCard, CreditCardBillingCycle


class CreditCardRepository(ICreditCardRepository):
    """Credit card repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, card_id: UUID) -> Optional[CreditCard]:
        stmt = select(CreditCard).where(CreditCard.id == card_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_active_by_user(
        self, card_id: UUID, user_id: UUID
    ) -> Optional[CreditCard]:
        stmt = select(CreditCard).where(
            CreditCard.id == card_id,
            CreditCard.user_id == user_id,
            CreditCard.is_active == True,  # noqa: E712
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def upsert(self, card: CreditCard) -> CreditCard:
        existing = await self.get_by_id(card.id)
        if existing is None:
            self.session.add(card)
            await self.session.flush()
            await self.session.refresh(card)
            return card

        existing.name = card.name
        existing.icon_name = card.icon_name
        existing.limit_value = card.limit_value
        existing.updated_at = utcnow()
        self.session.add(existing)
        await self.session.flush()
        await self.session.refresh(existing)
        return existing

    async def deactivate(self, card_id: UUID, user_id: UUID) -> bool:
        stmt = (
            update(CreditCard)
            .where(
                CreditCard.id == card_id,
                CreditCard.user_id == user_id,
                CreditCard.is_active == True,  # noqa: E712
            )
            .values(is_active=False, updated_at=utcnow())
        )
        result = await self.session.exec(stmt)
        await self.session.flush()
        return result.rowcount > 0

    async def list_active_by_user(self, user_id: UUID) -> List[CreditCard]:
        stmt = (
            select(CreditCard)
            .where(CreditCard.user_id == user_id, CreditCard.is_active == True)  # noqa: E712
            .order_by(CreditCard.created_at)
        )
        result = await self.session.exec(stmt)
        return list(result.all())


class BillingCycleRepository(IBillingCycleRepository):
    """Billing cycle repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, cycle: CreditCardBillingCycle) -> CreditCardBillingCycle:
        self.session.add(cycle)
        await self.session.flush()
        await self.session.refresh(cycle)
        return cycle

    async def list_by_card(
        self, card_id: UUID, user_id: UUID
    ) -> List[CreditCardBillingCycle]:
        stmt = (
            select(CreditCardBillingCycle)
            .join(CreditCard, CreditCard.id == CreditCardBillingCycle.credit_card_id)
            .where(
                CreditCardBillingCycle.credit_card_id == card_id,
                CreditCard.user_id == user_id,
                CreditCard.is_active == True,  # noqa: E712
            )
            .order_by(CreditCardBillingCycle.start_at)
        )
        result = await self.session.exec(stmt)
        return list(result.all())
