from typing import List, Optional
from uuid import UUID

from sqlmodel import select, update
from sqlmodel.ext.asyncio.session import AsyncSession

from finly.app.repositories.category_repository import (
    ICategoryRepository,
    ISubcategoryRepository,
)
from finly.domain.base import utcnow
from finly.domain.entities import Category, Subcategory


class CategoryRepository(ICategoryRepository):
    """Category repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, category_id: str) -> Optional[Category]:
        stmt = select(Category).where(Category.id == category_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_active_by_user(
        self, category_id: str, user_id: UUID
    ) -> Optional[Category]:
        stmt = select(Category).where(
            Category.id == category_id,
            Category.user_id == user_id,
            Category.is_active == True,  # noqa: E712
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def upsert(self, category: Category) -> Category:
        existing = await self.get_by_id(category.id)
        if existing is None:
            self.session.add(category)
            await self.session.flush()
            await self.session.refresh(category)
            return category

        existing.name = category.name
        existing.color = category.color
        existing.icon_name = category.icon_name
        existing.updated_at = utcnow()
        self.session.add(existing)
        await self.session.flush()
        await self.session.refresh(existing)
        return existing

    async def deactivate(self, category_id: str, user_id: UUID) -> bool:
        stmt = (
            update(Category)
            .where(
                Category.id == category_id,
                Category.user_id == user_id,
                Category.is_active == True,  # noqa: E712
            )
            .values(is_active=False, updated_at=utcnow())
        )
        result = await self.session.exec(stmt)
        await self.session.flush()
        return result.rowcount > 0

    async def list_active_by_user(self, user_id: UUID) -> List[Category]:
        stmt = (
            select(Category)
            .where(Category.user_id == user_id, Category.is_active == True)  # noqa: E712
            .order_by(Category.created_at)
        )
        result = await self.session.exec(stmt)
        return list(result.all())


class SubcategoryRepository(ISubcategoryRepository):
    """Subcategory repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, subcategory_id: str) -> Optional[Subcategory]:
        stmt = select(Subcategory).where(Subcategory.id == subcategory_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def upsert(self, subcategory: Subcategory) -> Subcategory:
        existing = await self.get_by_id(subcategory.id)
        if existing is None:
            self.session.add(subcategory)
            await self.session.flush()
            await self.session.refresh(subcategory)
            return subcategory

        existing.name = subcategory.name
        existing.color = subcategory.color
        existing.icon_name = subcategory.icon_name
        existing.updated_at = utcnow()
        self.session.add(existing)
        await self.session.flush()
        await self.session.refresh(existing)
        return existing

    async def deactivate(self, subcategory_id: str, category_id: str) -> bool:
        stmt = (
            update(Subcategory)
            .where(
                Subcategory.id == subcategory_id,
                Subcategory.category_id == category_id,
                Subcategory.is_active == True,  # noqa: E712
            )
            .values(is_active=False, updated_at=utcnow())
        )
        result = await self.session.exec(stmt)
        await self.session.flush()
        return result.rowcount > 0

    async def list_active_by_categories(
        self, category_ids: List[str]
    ) -> List[Subcategory]:
        if not category_ids:
            return []
        stmt = (
            select(Subcategory)
            .where(
                Subcategory.category_id.in_(category_ids),
                Subcategory.is_active == True,  # noqa: E712
            )
            .order_by(Subcategory.created_at)
        )
        result = await self.session.exec(stmt)
        return list(result.all())
