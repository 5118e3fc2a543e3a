"""
CreditCard and CreditCardBillingCycle Entities
"""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from finly.domain.base import utcnow


class CreditCard(SQLModel, table=True):
    """
    CreditCard entity - a card with a fixed monthly closing day.

    Business Rules:
    - limit_value is never negative
    - closing_day is in 1..31 and fixed once the card exists
    - Deletion is soft (is_active = False)
    """

    __tablename__ = "credit_cards"

    id: UUID = Field(primary_key=True)
    user_id: UUID = Field(foreign_key="users.id", index=True)
    name: str = Field(max_length=255)
    icon_name: str = Field(max_length=255)
    limit_value: int
    closing_day: int
    is_active: bool = Field(default=True)

    created_at: datetime = Field(
        default_factory=utcnow, sa_column=Column(DateTime(timezone=True))
    )
    updated_at: datetime = Field(
        default_factory=utcnow, sa_column=Column(DateTime(timezone=True))
    )


class CreditCardBillingCycle(SQLModel, table=True):
    """
    Statement period of a credit card.

    start_at and end_at are UTC instants of local midnight on the first day
    of the cycle and on the closing day.
    """

    __tablename__ = "credit_card_billing_cycles"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    credit_card_id: UUID = Field(foreign_key="credit_cards.id")
    start_at: datetime = Field(sa_column=Column(DateTime(timezone=True)))
    end_at: datetime = Field(sa_column=Column(DateTime(timezone=True)))

    __table_args__ = (
        Index("idx_billing_cycle_credit_card_id", "credit_card_id"),
    )
