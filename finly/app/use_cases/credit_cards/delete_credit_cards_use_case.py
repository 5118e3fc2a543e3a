from typing import List
from uuid import UUID

from finly.app.services.unit_of_work import UnitOfWork
from finly.app.use_cases.batch import BatchResult

from .upsert_credit_cards_use_case import parse_card_id


class DeleteCreditCardsUseCase:
    """Soft-deletes a batch of the caller's active cards; unknown ids go to errors"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: UUID, card_ids: List[str]) -> BatchResult:
        result = BatchResult()

        async with self.uow:
            for raw_id in card_ids:
                card_id = parse_card_id(raw_id)
                if card_id is None:
                    result.errors.append(raw_id)
                    continue

                if await self.uow.credit_cards.deactivate(card_id, user_id):
                    result.succeeded.append(raw_id)
                else:
                    result.errors.append(raw_id)

            await self.uow.commit()

        return result
