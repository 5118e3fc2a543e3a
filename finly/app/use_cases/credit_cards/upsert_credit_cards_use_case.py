"""
Upsert Credit Cards Use Case

Inserts or updates a batch of credit cards in one transaction. Validation
failures are collected per item; a persistence failure aborts the batch.
"""

import logging
from typing import List, Optional
from uuid import UUID

from finly.app.services.unit_of_work import UnitOfWork
from finly.app.use_cases.batch import BatchResult
from finly.domain.entities import CreditCard

from .dtos import CreditCardInput

logger = logging.getLogger(__name__)

# Largest value a signed 64-bit INTEGER column holds
MAX_LIMIT_VALUE = 2**63 - 1


def parse_card_id(value: str) -> Optional[UUID]:
    try:
        return UUID(value)
    except (TypeError, ValueError):
        return None


def is_valid_credit_card(item: CreditCardInput) -> bool:
    """Non-empty name and icon, limit in 0..MAX_LIMIT_VALUE, closing day in 1..31"""
    if not item.name or not item.icon_name:
        return False
    if not 0 <= item.limit_value <= MAX_LIMIT_VALUE:
        return False
    return 1 <= item.closing_day <= 31


class UpsertCreditCardsUseCase:
    """
    Business Rules:
    - Invalid items are reported in errors and skipped, the rest is written
    - An id that belongs to another user is reported in errors
    - Existing cards get name/icon/limit updated; closing day is kept
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: UUID, items: List[CreditCardInput]) -> BatchResult:
        result = BatchResult()

        async with self.uow:
            for item in items:
                card_id = parse_card_id(item.id)
                if card_id is None or not is_valid_credit_card(item):
                    result.errors.append(item.id)
                    continue

                existing = await self.uow.credit_cards.get_by_id(card_id)
                if existing is not None and existing.user_id != user_id:
                    logger.warning(f"Credit card {item.id} belongs to another user")
                    result.errors.append(item.id)
                    continue

                await self.uow.credit_cards.upsert(
                    CreditCard(
                        id=card_id,
                        user_id=user_id,
                        name=item.name,
                        icon_name=item.icon_name,
                        limit_value=item.limit_value,
                        closing_day=item.closing_day,
                    )
                )
                result.succeeded.append(item.id)

            await self.uow.commit()

        return result
