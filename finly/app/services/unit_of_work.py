from abc import ABC, abstractmethod

from finly.app.repositories.category_repository import (
    ICategoryRepository,
    ISubcategoryRepository,
)
from finly.app.repositories.credit_card_repository import (
    IBillingCycleRepository,
    ICreditCardRepository,
)
from finly.app.repositories.reset_password_repository import IResetPasswordRepository
from finly.app.repositories.session_repository import ISessionRepository
from finly.app.repositories.user_repository import IUserRepository


class UnitOfWork(ABC):
    """Abstract UnitOfWork - defines repository access and transaction management"""

    # Repository properties (initialized in __aenter__)
    users: IUserRepository
    sessions: ISessionRepository
    reset_passwords: IResetPasswordRepository
    categories: ICategoryRepository
    subcategories: ISubcategoryRepository
    credit_cards: ICreditCardRepository
    billing_cycles: IBillingCycleRepository

    @abstractmethod
    async def __aenter__(self):
        pass

    @abstractmethod
    async def __aexit__(self, exc_type, exc, tb):
        pass

    @abstractmethod
    async def commit(self):
        pass

    @abstractmethod
    async def rollback(self):
        pass
