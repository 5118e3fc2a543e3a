"""
Credit Card Use Cases

Card batches and billing cycles.
"""

from .upsert_credit_cards_use_case import UpsertCreditCardsUseCase
from .delete_credit_cards_use_case import DeleteCreditCardsUseCase
from .list_credit_cards_use_case import ListCreditCardsUseCase
from .bill_use_cases import CreateBillOfDateUseCase, ListBillsUseCase
from .dtos import CreditCardInput, CreditCardView, BillingCycleView

__all__ = [
    # Use Cases
    "UpsertCreditCardsUseCase",
    "DeleteCreditCardsUseCase",
    "ListCreditCardsUseCase",
    "CreateBillOfDateUseCase",
    "ListBillsUseCase",
    # DTOs
    "CreditCardInput",
    "CreditCardView",
    "BillingCycleView",
]
