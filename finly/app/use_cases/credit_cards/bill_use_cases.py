"""
Billing Cycle Use Cases

Computes and persists the statement period of a card for a reference
timestamp, and lists the persisted periods.
"""

from datetime import datetime
from typing import List
from uuid import UUID

from finly.app.errors import NotFound, ValidationError
from finly.app.services.unit_of_work import UnitOfWork
from finly.domain.base import as_utc
from finly.domain.billing_cycle import compute_billing_cycle
from finly.domain.entities import CreditCardBillingCycle

from .dtos import BillingCycleView
from .upsert_credit_cards_use_case import parse_card_id


def parse_reference_date(value: str) -> datetime:
    """
    Parse an RFC 3339 timestamp. The offset is mandatory since it decides
    the owner's local midnight.

    Raises:
        ValidationError: unparsable value or missing offset
    """
    try:
        parsed = datetime.fromisoformat(value)
    except (TypeError, ValueError) as e:
        raise ValidationError("invalid date", code="INVALID_DATE") from e
    if parsed.tzinfo is None or parsed.utcoffset() is None:
        raise ValidationError("invalid date", code="INVALID_DATE")
    return parsed


def to_view(cycle: CreditCardBillingCycle) -> BillingCycleView:
    return BillingCycleView(
        id=str(cycle.id),
        credit_card_id=str(cycle.credit_card_id),
        start_at=as_utc(cycle.start_at),
        end_at=as_utc(cycle.end_at),
    )


class CreateBillOfDateUseCase:
    """
    Business Rules:
    - Card must be active and owned by the caller
    - Reference date and UTC offset both come from the given timestamp
    - Each call persists a new cycle record with a fresh id
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: UUID, credit_card_id: str, date: str) -> BillingCycleView:
        reference = parse_reference_date(date)
        card_id = parse_card_id(credit_card_id)
        if card_id is None:
            raise NotFound("credit card not found", code="CREDIT_CARD_NOT_FOUND")

        async with self.uow:
            card = await self.uow.credit_cards.get_active_by_user(card_id, user_id)
            if card is None:
                raise NotFound("credit card not found", code="CREDIT_CARD_NOT_FOUND")

            try:
                period = compute_billing_cycle(
                    card.closing_day, reference.date(), reference.utcoffset()
                )
            except ValueError as e:
                raise ValidationError("invalid date", code="INVALID_DATE") from e
            cycle = await self.uow.billing_cycles.create(
                CreditCardBillingCycle(
                    credit_card_id=card.id,
                    start_at=period.start_at,
                    end_at=period.end_at,
                )
            )
            await self.uow.commit()

        return to_view(cycle)


class ListBillsUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: UUID, credit_card_id: str) -> List[BillingCycleView]:
        card_id = parse_card_id(credit_card_id)
        if card_id is None:
            raise NotFound("credit card not found", code="CREDIT_CARD_NOT_FOUND")

        async with self.uow:
            card = await self.uow.credit_cards.get_active_by_user(card_id, user_id)
            if card is None:
                raise NotFound("credit card not found", code="CREDIT_CARD_NOT_FOUND")
            cycles = await self.uow.billing_cycles.list_by_card(card_id, user_id)

        return [to_view(cycle) for cycle in cycles]
