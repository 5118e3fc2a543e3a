"""
Finly Domain Entities

All domain entities organized by model.
"""

# Export all enums
from .enums import AuthType

# Export all entities
from .user import User
from .session import Session
from .reset_password import ResetPassword
from .category import Category, Subcategory
from .credit_card import CreditCard, CreditCardBillingCycle

__all__ = [
    # Enums
    "AuthType",
    # Entities
    "User",
    "Session",
    "ResetPassword",
    "Category",
    "Subcategory",
    "CreditCard",
    "CreditCardBillingCycle",
]
