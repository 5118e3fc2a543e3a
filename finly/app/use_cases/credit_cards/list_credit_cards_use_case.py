from typing import List
from uuid import UUID

from finly.app.services.unit_of_work import UnitOfWork

from .dtos import CreditCardView


class ListCreditCardsUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: UUID) -> List[CreditCardView]:
        async with self.uow:
            cards = await self.uow.credit_cards.list_active_by_user(user_id)

        return [
            CreditCardView(
                id=str(card.id),
                name=card.name,
                icon_name=card.icon_name,
                limit_value=card.limit_value,
                closing_day=card.closing_day,
            )
            for card in cards
        ]
