"""
Credit Card Use Case DTOs
"""

from datetime import datetime

from pydantic import BaseModel


class CreditCardInput(BaseModel):
    """One credit card of a batch upsert"""

    id: str
    name: str
    icon_name: str
    limit_value: int
    closing_day: int


class CreditCardView(BaseModel):
    id: str
    name: str
    icon_name: str
    limit_value: int
    closing_day: int


class BillingCycleView(BaseModel):
    """Statement period; instants are UTC"""

    id: str
    credit_card_id: str
    start_at: datetime
    end_at: datetime
