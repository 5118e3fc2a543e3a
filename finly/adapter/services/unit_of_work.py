import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel.ext.asyncio.session import AsyncSession

from finly.adapter.repositories.category_repository import (
    CategoryRepository,
    SubcategoryRepository,
)
from finly.adapter.repositories.credit_card_repository import (
    BillingCycleRepository,
    CreditCardRepository,
)
from finly.adapter.repositories.reset_password_repository import ResetPasswordRepository
from finly.adapter.repositories.session_repository import SessionRepository
from finly.adapter.repositories.user_repository import UserRepository
from finly.app.errors import InternalError
from finly.app.services.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


class SqlAlchemyUnitOfWork(UnitOfWork):
    """SQLAlchemy implementation of UnitOfWork pattern"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def __aenter__(self):
        # Initialize all repositories with the session
        self.users = UserRepository(self.session)
        self.sessions = SessionRepository(self.session)
        self.reset_passwords = ResetPasswordRepository(self.session)
        self.categories = CategoryRepository(self.session)
        self.subcategories = SubcategoryRepository(self.session)
        self.credit_cards = CreditCardRepository(self.session)
        self.billing_cycles = BillingCycleRepository(self.session)
        return self

    async def __aexit__(self, exc_type, exc, tb):
        # Rolling back expires loaded instances, so only do it on failure
        if exc_type is None:
            return
        await self.rollback()
        if isinstance(exc, SQLAlchemyError):
            logger.error(f"Transaction aborted: {exc}", exc_info=exc)
            raise InternalError("persistence failure", code="DATABASE_ERROR") from exc

    async def commit(self):
        await self.session.commit()

    async def rollback(self):
        await self.session.rollback()
